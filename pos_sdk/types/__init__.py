# pos_sdk/types/__init__.py

from .base import (
    ContractAddress,
    TxHash,
    Felt,
    BlockID,
    NAMESPACE_SEPARATOR,
    normalize_address,
    addresses_equal,
)

# Starknet RPC payloads
from .starknet import (
    StarknetEvent,
    TxReceipt,
    BlockWithTxHashes,
)

# Event Types
from .events import (
    SemanticType,
    FieldSchema,
    EventSchema,
    RawEvent,
    EventMetadata,
    DecodedEvent,
    EventCallbackData,
)

from .calls import Call

# Configuration Types
from .config import (
    RpcConfig,
    MonitorConfig,
    LoggingConfig,
    PathsConfig,
)
