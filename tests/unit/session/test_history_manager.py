"""Tests for the persisted chat history."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from ai_code_assistant.core.storage import JsonFileStore
from ai_code_assistant.session import ChatHistoryManager, ChatSession


def _session(session_id: str, modified: float) -> ChatSession:
    return ChatSession(id=session_id, title=session_id, last_modified=modified)


def test_create_session_is_fresh_and_unsaved(history):
    session = history.create_session()

    assert session.title == "New Chat"
    assert session.messages == []
    assert session.auto_title is True
    assert history.get_sessions() == []

    titled = history.create_session(title="Planning", model="mixtral")
    assert titled.auto_title is False
    assert titled.model == "mixtral"
    assert titled.id != session.id


def test_sessions_are_listed_most_recent_first(history):
    history.save_session(_session("old", 1.0))
    history.save_session(_session("new", 3.0))
    history.save_session(_session("mid", 2.0))

    assert [s.id for s in history.get_sessions()] == ["new", "mid", "old"]


def test_save_session_upserts(history):
    session = _session("one", 1.0)
    history.save_session(session)
    session.add("user", "hello")

    history.save_session(session)

    sessions = history.get_sessions()
    assert len(sessions) == 1
    assert sessions[0].messages[0].content == "hello"


def test_saving_past_capacity_evicts_oldest(history):
    for position in range(50):
        history.save_session(_session(f"s{position}", 100.0 + position))
    history.save_session(_session("oldest", 1.0))  # replaced immediately
    assert len(history.get_sessions()) == 50
    assert history.get_session("oldest") is None

    history.save_session(_session("newest", 1000.0))

    ids = [s.id for s in history.get_sessions()]
    assert len(ids) == 50
    assert ids[0] == "newest"
    assert "s0" not in ids


def test_custom_capacity_and_validation(store):
    history = ChatHistoryManager(store, max_sessions=2)
    for position in range(3):
        history.save_session(_session(f"s{position}", float(position)))

    assert [s.id for s in history.get_sessions()] == ["s2", "s1"]
    with pytest.raises(ValueError):
        ChatHistoryManager(store, max_sessions=0)


def test_delete_and_clear(history):
    history.save_session(_session("a", 1.0))
    history.save_session(_session("b", 2.0))

    assert history.delete_session("a") is True
    assert history.delete_session("a") is False
    history.clear_history()
    assert history.get_sessions() == []


def test_listeners_fire_on_change_and_failures_are_isolated(history):
    broken = MagicMock(side_effect=RuntimeError("boom"))
    listener = MagicMock()
    history.add_listener(broken)
    history.add_listener(listener)

    history.save_session(_session("a", 1.0))
    history.delete_session("a")
    history.delete_session("missing")
    history.remove_listener(listener)
    history.clear_history()

    assert listener.call_count == 2


def test_history_survives_reopening_file_store(tmp_path):
    path = tmp_path / "state.json"
    history = ChatHistoryManager(JsonFileStore(path))
    session = history.create_session()
    session.add("user", "persist me please")
    history.save_session(session)

    reopened = ChatHistoryManager(JsonFileStore(path))

    restored = reopened.get_session(session.id)
    assert restored == session
    assert restored.title == "persist me please"
