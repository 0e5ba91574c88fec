# tests/test_logging.py

import io
import logging

import pytest

from pos_sdk.core.logging import (
    ERROR_LOG_FILE,
    INFO,
    LOG_FILE,
    ROOT_LOGGER_NAME,
    SdkLogger,
    get_class_logger,
    log_with_context,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def file_handlers():
    return [h for h in logging.getLogger(ROOT_LOGGER_NAME).handlers if isinstance(h, logging.FileHandler)]


def test_log_dir_adds_file_handlers(tmp_path):
    SdkLogger.configure(log_level="DEBUG", log_dir=tmp_path / "logs", console_enabled=False)

    logger = SdkLogger.get_logger("monitor.test")
    logger.debug("tick started")
    logger.error("tick failed")

    assert (tmp_path / "logs" / LOG_FILE).read_text().count("tick") == 2
    errors = (tmp_path / "logs" / ERROR_LOG_FILE).read_text()
    assert "tick failed" in errors
    assert "tick started" not in errors


def test_reconfigure_replaces_handlers(tmp_path):
    SdkLogger.configure(log_dir=tmp_path, console_enabled=False)
    assert len(file_handlers()) == 2

    stream = io.StringIO()
    SdkLogger.configure(log_level="WARNING", stream=stream)

    assert file_handlers() == []
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING
    SdkLogger.get_logger("core.test").warning("only console")
    assert "only console" in stream.getvalue()


def test_unknown_level_falls_back_to_info():
    SdkLogger.configure(log_level="chatty", console_enabled=False)
    assert SdkLogger.level == logging.INFO


def test_context_rendered_after_message():
    stream = io.StringIO()
    SdkLogger.configure(stream=stream)

    log_with_context(SdkLogger.get_logger("core.test"), INFO, "Events matched",
                     candidates=3, tx_hash="0xdead", block_number=12)

    line = stream.getvalue().strip()
    assert " - pos_sdk.core.test - INFO - Events matched | block_number=12 tx_hash=0xdead candidates=3" in line


def test_get_logger_prefixes_namespace():
    assert SdkLogger.get_logger("clients.rpc").name == "pos_sdk.clients.rpc"
    assert SdkLogger.get_logger("pos_sdk.clients.rpc").name == "pos_sdk.clients.rpc"


def test_class_logger_drops_package_prefix():
    from pos_sdk.decode.event_decoder import EventDecoder

    assert get_class_logger(EventDecoder()).name == "pos_sdk.decode.event_decoder.EventDecoder"
