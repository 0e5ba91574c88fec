# pos_sdk/types/starknet.py

from msgspec import Struct
from typing import Optional

from .base import ContractAddress, TxHash, Felt


class StarknetEvent(Struct):
    from_address: ContractAddress
    keys: list[Felt] = []
    data: list[Felt] = []
    name: Optional[str] = None  # qualified name, for providers that resolve it


class TxReceipt(Struct):
    transaction_hash: TxHash
    block_number: Optional[int] = None  # absent while pending
    events: list[StarknetEvent] = []
    execution_status: Optional[str] = None
    finality_status: Optional[str] = None


class BlockWithTxHashes(Struct):
    timestamp: int
    transactions: list[TxHash] = []
    block_number: Optional[int] = None  # absent for the pending block
    block_hash: Optional[str] = None
    parent_hash: Optional[str] = None
    status: Optional[str] = None
