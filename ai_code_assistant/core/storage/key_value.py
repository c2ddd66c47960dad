"""Key/value stores backing chat history and agent profiles.

The assistant only needs a tiny contract from its persistence layer: read a
JSON-compatible value by key, replace it, delete it. Two implementations are
provided:

- :class:`InMemoryKeyValueStore` keeps values for the lifetime of the process
  (tests, embedding the orchestrator in another host).
- :class:`JsonFileStore` mirrors the data into a single JSON document on disk
  so sessions survive between CLI invocations.
"""

from __future__ import annotations

import copy
import json
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import Any

from ai_code_assistant.core.utils.logger import get_logger

LOGGER = get_logger(__name__)


class KeyValueStore(ABC):
    """Minimal persistence contract. Values are copied on the way in and out."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any: ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> bool: ...

    @abstractmethod
    def keys(self) -> list[str]: ...


class InMemoryKeyValueStore(KeyValueStore):
    """Thread-safe process-local store."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._lock = RLock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                return default
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)
            self._after_write_locked()

    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._data:
                return False
            del self._data[key]
            self._after_write_locked()
            return True

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data.keys())

    def _after_write_locked(self) -> None:
        """Hook called after every mutation (can be overridden)."""


class JsonFileStore(InMemoryKeyValueStore):
    """Store persisted as one JSON document, rewritten atomically on each change."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            LOGGER.error("Failed to load state file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            LOGGER.warning("Ignoring state file %s: expected a JSON object", self.path)
            return {}
        return data

    def _after_write_locked(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(self._data, handle, indent=2)
            temp_path.replace(self.path)
        except OSError:
            if temp_path.exists():
                temp_path.unlink()
            raise
        LOGGER.debug("Saved %d keys to %s", len(self._data), self.path)


__all__ = ["InMemoryKeyValueStore", "JsonFileStore", "KeyValueStore"]
