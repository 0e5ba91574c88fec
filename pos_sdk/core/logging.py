# pos_sdk/core/logging.py
"""
Logging for the SDK.

Every logger lives under the 'pos_sdk' namespace. Handlers are attached to
that namespace by SdkLogger.configure; each call replaces the previous
setup, so the CLI can set up a console first and the loaded SdkConfig can
then apply its level and log directory.

Context passed as keyword arguments is stored on the record and rendered
after the message as key=value pairs.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL

ROOT_LOGGER_NAME = 'pos_sdk'
LOG_FILE = 'pos_sdk.log'
ERROR_LOG_FILE = 'pos_sdk_errors.log'

# rendered first, in this order; any other context follows alphabetically
CONTEXT_ORDER = ('contract_address', 'from_block', 'to_block', 'block_number',
                 'tx_hash', 'event_index', 'event_name', 'error')

_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message', 'asctime'}


class SdkFormatter(logging.Formatter):
    """`time - logger - LEVEL - message | key=value ...`"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        line = f"{timestamp} - {record.name} - {record.levelname} - {record.getMessage()}"

        context = record_context(record)
        if context:
            line = f"{line} | " + " ".join(f"{key}={value}" for key, value in context)

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def record_context(record: logging.LogRecord) -> List[tuple]:
    extra = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
    ordered = [(key, extra.pop(key)) for key in CONTEXT_ORDER if key in extra]
    return ordered + sorted(extra.items())


class SdkLogger:
    """Owns the handlers of the 'pos_sdk' logger namespace"""

    level = logging.INFO
    log_dir: Optional[Path] = None

    @classmethod
    def configure(cls,
                  log_level: str = "INFO",
                  log_dir: Optional[Path] = None,
                  console_enabled: bool = True,
                  stream: Optional[TextIO] = None) -> None:
        """
        Replace the current handlers.

        Args:
            log_level: level name for the namespace and its handlers
            log_dir: when set, also write pos_sdk.log and pos_sdk_errors.log there
            console_enabled: log to `stream` (stderr by default; stdout carries CLI output)
        """
        level = logging.getLevelName(log_level.upper())
        cls.level = level if isinstance(level, int) else logging.INFO
        cls.log_dir = Path(log_dir) if log_dir else None

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.setLevel(cls.level)

        formatter = SdkFormatter()

        if console_enabled:
            console = logging.StreamHandler(stream or sys.stderr)
            console.setFormatter(formatter)
            root_logger.addHandler(console)

        if cls.log_dir is not None:
            cls.log_dir.mkdir(parents=True, exist_ok=True)
            for filename, handler_level in ((LOG_FILE, cls.level), (ERROR_LOG_FILE, logging.ERROR)):
                file_handler = logging.FileHandler(cls.log_dir / filename, encoding='utf-8')
                file_handler.setLevel(handler_level)
                file_handler.setFormatter(formatter)
                root_logger.addHandler(file_handler)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if name != ROOT_LOGGER_NAME and not name.startswith(f'{ROOT_LOGGER_NAME}.'):
            name = f'{ROOT_LOGGER_NAME}.{name}'
        return logging.getLogger(name)


def get_class_logger(instance) -> logging.Logger:
    """Logger named after the instance's module (without the package prefix) and class"""
    module = instance.__class__.__module__
    if module.startswith(f'{ROOT_LOGGER_NAME}.'):
        module = module[len(ROOT_LOGGER_NAME) + 1:]
    return SdkLogger.get_logger(f"{module}.{instance.__class__.__name__}")


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    if logger.isEnabledFor(level):
        logger.handle(logger.makeRecord(logger.name, level, "", 0, message, (), None, extra=context))


class LoggingMixin:
    """log_debug / log_info / log_warning / log_error with keyword context, on a per-class logger"""

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_class_logger(self)
        return self._logger

    def log_debug(self, message: str, **context) -> None:
        log_with_context(self.logger, DEBUG, message, **context)

    def log_info(self, message: str, **context) -> None:
        log_with_context(self.logger, INFO, message, **context)

    def log_warning(self, message: str, **context) -> None:
        log_with_context(self.logger, WARNING, message, **context)

    def log_error(self, message: str, **context) -> None:
        log_with_context(self.logger, ERROR, message, **context)

    def event_context(self, tx_hash: str, **extra) -> Dict[str, Any]:
        return {'tx_hash': tx_hash, **extra}
