"""Tests for logging helpers."""

from __future__ import annotations

import json
import logging

import pytest

from ai_code_assistant.core.utils import logger as logger_module
from ai_code_assistant.core.utils.logger import (
    CorrelationIdFilter,
    StructuredFormatter,
    configure_logging,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    set_correlation_id(None)


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("ai_code_assistant.test", logging.INFO, __file__, 1, message, (), None)


def test_get_logger_defaults_to_package_root():
    assert get_logger().name == logger_module.ROOT_LOGGER_NAME
    assert get_logger("ai_code_assistant.memory").name == "ai_code_assistant.memory"


def test_correlation_id_round_trip():
    assert get_correlation_id() == "-"
    set_correlation_id("session-1")
    try:
        assert get_correlation_id() == "session-1"
    finally:
        set_correlation_id(None)
    assert get_correlation_id() == "-"


def test_filter_injects_correlation_id():
    record = _record()
    set_correlation_id("abc")
    try:
        assert CorrelationIdFilter().filter(record) is True
    finally:
        set_correlation_id(None)
    assert record.correlation_id == "abc"


def test_structured_formatter_emits_json():
    record = _record("payload %s")
    record.args = ("ok",)
    record.correlation_id = "xyz"

    data = json.loads(StructuredFormatter().format(record))

    assert data["message"] == "payload ok"
    assert data["level"] == "INFO"
    assert data["logger"] == "ai_code_assistant.test"
    assert data["correlation_id"] == "xyz"
    assert "timestamp" in data


def test_configure_logging_replaces_handlers(restore_root_logger):
    root = restore_root_logger

    configure_logging("DEBUG")
    configure_logging("WARNING", structured=True)

    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, StructuredFormatter)


def test_configure_logging_unknown_level_falls_back_to_info(restore_root_logger):
    configure_logging("chatty")
    assert restore_root_logger.level == logging.INFO
