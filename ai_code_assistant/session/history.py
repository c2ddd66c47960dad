"""Persisted, capped collection of chat sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable
from uuid import uuid4

from ai_code_assistant.core.utils.constants import (
    DEFAULT_MODEL,
    DEFAULT_SESSION_TITLE,
    MAX_STORED_SESSIONS,
)
from ai_code_assistant.core.utils.logger import get_logger

from .models import ChatSession

if TYPE_CHECKING:
    from ai_code_assistant.core.storage import KeyValueStore

LOGGER = get_logger(__name__)


class ChatHistoryManager:
    """Stores sessions most-recently-modified first, evicting the oldest past the cap."""

    STORAGE_KEY = "chat_history"

    def __init__(self, store: KeyValueStore, *, max_sessions: int = MAX_STORED_SESSIONS) -> None:
        if max_sessions <= 0:
            raise ValueError("max_sessions must be positive")
        self._store = store
        self.max_sessions = max_sessions
        self._listeners: list[Callable[[], None]] = []

    # Listeners ----------------------------------------------------------

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _fire_change(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                LOGGER.exception("History change listener failed")

    # Queries ------------------------------------------------------------

    def get_sessions(self) -> list[ChatSession]:
        raw = self._store.get(self.STORAGE_KEY, []) or []
        sessions = [ChatSession.from_dict(item) for item in raw]
        sessions.sort(key=lambda session: session.last_modified, reverse=True)
        return sessions

    def get_session(self, session_id: str) -> ChatSession | None:
        for session in self.get_sessions():
            if session.id == session_id:
                return session
        return None

    # Mutations ----------------------------------------------------------

    def create_session(self, title: str | None = None, model: str | None = None) -> ChatSession:
        """Return a fresh, unsaved session with empty history."""
        return ChatSession(
            id=uuid4().hex,
            title=title or DEFAULT_SESSION_TITLE,
            model=model or DEFAULT_MODEL,
            auto_title=title is None,
        )

    def save_session(self, session: ChatSession) -> None:
        """Insert or replace ``session``; trims the collection to ``max_sessions``."""
        sessions = self.get_sessions()
        for position, existing in enumerate(sessions):
            if existing.id == session.id:
                sessions[position] = session
                break
        else:
            sessions.append(session)

        if len(sessions) > self.max_sessions:
            sessions.sort(key=lambda item: item.last_modified, reverse=True)
            evicted = sessions[self.max_sessions :]
            sessions = sessions[: self.max_sessions]
            LOGGER.debug("Evicted %d old session(s): %s", len(evicted), [s.id for s in evicted])

        self._store.set(self.STORAGE_KEY, [item.to_dict() for item in sessions])
        self._fire_change()

    def delete_session(self, session_id: str) -> bool:
        sessions = self.get_sessions()
        remaining = [session for session in sessions if session.id != session_id]
        if len(remaining) == len(sessions):
            return False
        self._store.set(self.STORAGE_KEY, [item.to_dict() for item in remaining])
        self._fire_change()
        return True

    def clear_history(self) -> None:
        self._store.set(self.STORAGE_KEY, [])
        self._fire_change()


__all__ = ["ChatHistoryManager"]
