# pos_sdk/core/errors.py

from typing import Optional, Any


class PosSdkError(Exception):
    """Base class for all SDK errors"""


class ConfigurationError(PosSdkError):
    """Bad or missing configuration. Never retried."""


class AbiLoadError(ConfigurationError):
    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        super().__init__(f"{message}: {source}" if source else message)


class EventNotInAbiError(ConfigurationError):
    def __init__(self, event_names):
        self.event_names = sorted(event_names)
        super().__init__(f"Events not declared in ABI: {', '.join(self.event_names)}")


class ContractNotRegisteredError(ConfigurationError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f"ABI source required for new contract {address}")


class RpcError(PosSdkError):
    def __init__(self, method: str, message: str, code: Optional[int] = None, data: Any = None):
        self.method = method
        self.code = code
        self.data = data
        super().__init__(f"{method} failed ({code}): {message}")


class InvalidChainError(PosSdkError):
    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Connected to chain {actual}, expected {expected}")


class EventDecodeError(PosSdkError):
    def __init__(self, event_name: str, field_name: str, word: Any):
        self.event_name = event_name
        self.field_name = field_name
        self.word = word
        super().__init__(f"Cannot decode {event_name}.{field_name} from word {word!r}")
