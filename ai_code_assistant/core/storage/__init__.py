"""Storage backends used for persisted assistant state."""

from .key_value import InMemoryKeyValueStore, JsonFileStore, KeyValueStore

__all__ = ["InMemoryKeyValueStore", "JsonFileStore", "KeyValueStore"]
