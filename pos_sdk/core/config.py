# pos_sdk/core/config.py

import os
from pathlib import Path
from typing import Optional, Union

import msgspec
from msgspec import Struct, field
from dotenv import load_dotenv

from ..types import RpcConfig, MonitorConfig, LoggingConfig, PathsConfig
from .errors import ConfigurationError
from .logging import SdkLogger, log_with_context, INFO, DEBUG

ENV_PREFIX = "POS_SDK_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class SdkConfig(Struct):
    rpc: RpcConfig
    paths: PathsConfig
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_vars: Optional[dict] = None, **overrides) -> 'SdkConfig':
        """Build configuration from the environment (and a .env file when env_vars is not given)"""
        logger = SdkLogger.get_logger('core.config')

        if env_vars is None:
            load_dotenv()
            env = os.environ
        else:
            env = env_vars

        endpoint_url = overrides.get("rpc_url") or env.get(f"{ENV_PREFIX}RPC_URL")
        if not endpoint_url:
            raise ConfigurationError(f"{ENV_PREFIX}RPC_URL must be set")

        rpc = RpcConfig(
            endpoint_url=endpoint_url,
            chain_id=overrides.get("chain_id") or env.get(f"{ENV_PREFIX}CHAIN_ID") or None,
        )

        monitor = MonitorConfig(
            poll_interval_ms=_int_setting(env, "POLL_INTERVAL_MS", overrides.get("poll_interval_ms"), 5000),
            legacy_wide_integer=_bool_setting(env, "LEGACY_WIDE_INTEGER", overrides.get("legacy_wide_integer"), False),
            isolate_decode_errors=_bool_setting(env, "ISOLATE_DECODE_ERRORS", overrides.get("isolate_decode_errors"), True),
        )
        if monitor.poll_interval_ms <= 0:
            raise ConfigurationError("Poll interval must be positive")

        log_dir = overrides.get("log_dir") or env.get(f"{ENV_PREFIX}LOG_DIR")
        logging_config = LoggingConfig(
            level=(overrides.get("log_level") or env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            log_dir=str(log_dir) if log_dir else None,
        )

        contracts_path = overrides.get("contracts_path") or env.get(f"{ENV_PREFIX}CONTRACTS_PATH") or "contracts"
        paths = PathsConfig(contracts_path=str(contracts_path))

        config = cls(rpc=rpc, paths=paths, monitor=monitor, logging=logging_config)

        log_with_context(logger, DEBUG, "Configuration loaded from environment",
                         poll_interval_ms=monitor.poll_interval_ms,
                         contracts_path=paths.contracts_path)
        return config

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'SdkConfig':
        logger = SdkLogger.get_logger('core.config')
        config_path = Path(config_path)

        try:
            config = msgspec.json.decode(config_path.read_bytes(), type=cls)
        except FileNotFoundError:
            raise ConfigurationError(f"Config file not found: {config_path}")
        except msgspec.ValidationError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e
        except msgspec.DecodeError as e:
            raise ConfigurationError(f"Unreadable config file {config_path}: {e}") from e

        log_with_context(logger, INFO, "Configuration loaded from file", path=str(config_path))
        return config

    def configure_logging(self, console_enabled: bool = True) -> None:
        """Apply the configured level and log directory, replacing any earlier setup"""
        SdkLogger.configure(
            log_level=self.logging.level,
            log_dir=Path(self.logging.log_dir) if self.logging.log_dir else None,
            console_enabled=console_enabled,
        )


def _int_setting(env, name: str, override, default: int) -> int:
    if override is not None:
        return int(override)
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")


def _bool_setting(env, name: str, override, default: bool) -> bool:
    if override is not None:
        return bool(override)
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")
