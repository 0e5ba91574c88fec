# pos_sdk/types/events.py

from enum import Enum
from typing import Optional, Any, Tuple

from msgspec import Struct

from .base import ContractAddress, TxHash, Felt


class SemanticType(str, Enum):
    ADDRESS = "address"
    INTEGER = "integer"
    WIDE_INTEGER = "wide_integer"  # u256 as (low, high) words
    RAW = "raw"


class FieldSchema(Struct, frozen=True):
    name: str
    semantic_type: SemanticType
    cairo_type: str = ""
    is_key: bool = False  # #[key] member, carried in keys[1:] rather than data


class EventSchema(Struct, frozen=True):
    qualified_name: str
    name: str  # last namespace segment
    fields: Tuple[FieldSchema, ...] = ()


class RawEvent(Struct):
    origin_address: ContractAddress
    data_words: list[Felt]
    keys: list[Felt] = []
    qualified_name: Optional[str] = None  # receipts from the node carry keys only


class EventMetadata(Struct, frozen=True):
    transaction_hash: TxHash
    block_number: int
    block_timestamp: int
    event_index: int  # position in the receipt's own event list


class DecodedEvent(Struct):
    type: str
    data: dict[str, Any]


class EventCallbackData(Struct):
    event: DecodedEvent
    metadata: EventMetadata
