"""Logging helpers shared by the assistant runtime."""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

ROOT_LOGGER_NAME = "ai_code_assistant"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def set_correlation_id(value: str | None) -> None:
    """Attach a correlation id (usually the chat session id) to subsequent records."""
    _correlation_id.set(value)


def get_correlation_id() -> str:
    return _correlation_id.get() or "-"


class CorrelationIdFilter(logging.Filter):
    """Inject the active correlation id into every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", get_correlation_id()),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or ROOT_LOGGER_NAME)


def configure_logging(level: str = "INFO", *, structured: bool = False) -> None:
    """Configure the root logger with a stderr handler.

    Repeated calls replace the previously installed handler so the CLI can
    re-run configuration after its verbosity flags are parsed.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(CorrelationIdFilter())
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))

    root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))


__all__ = [
    "CorrelationIdFilter",
    "ROOT_LOGGER_NAME",
    "StructuredFormatter",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
]
