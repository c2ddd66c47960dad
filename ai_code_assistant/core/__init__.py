"""Core infrastructure primitives for the assistant."""

from __future__ import annotations

from .approval import ApprovalPolicy
from .storage import InMemoryKeyValueStore, JsonFileStore, KeyValueStore
from .utils import (
    ConfigurationError,
    Settings,
    configure_logging,
    get_correlation_id,
    get_logger,
    keyword_set,
    load_settings,
    set_correlation_id,
    tokenize,
)

__all__ = [
    "ApprovalPolicy",
    "ConfigurationError",
    "InMemoryKeyValueStore",
    "JsonFileStore",
    "KeyValueStore",
    "Settings",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "keyword_set",
    "load_settings",
    "set_correlation_id",
    "tokenize",
]
