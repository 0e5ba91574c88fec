# pos_sdk/types/config.py

from typing import Optional

from msgspec import Struct


class RpcConfig(Struct):
    endpoint_url: str
    chain_id: Optional[str] = None


class MonitorConfig(Struct):
    poll_interval_ms: int = 5000
    legacy_wide_integer: bool = False
    isolate_decode_errors: bool = True


class LoggingConfig(Struct):
    level: str = "INFO"
    log_dir: Optional[str] = None


class PathsConfig(Struct):
    contracts_path: str = "contracts"
