"""Shared utilities: configuration, logging, and keyword extraction."""

from __future__ import annotations

from .config import ConfigurationError, Settings, find_config_in_parents, load_settings
from .keywords import keyword_set, tokenize
from .logger import configure_logging, get_correlation_id, get_logger, set_correlation_id

__all__ = [
    "ConfigurationError",
    "Settings",
    "configure_logging",
    "find_config_in_parents",
    "get_correlation_id",
    "get_logger",
    "keyword_set",
    "load_settings",
    "set_correlation_id",
    "tokenize",
]
