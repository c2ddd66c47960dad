"""Tests for chat session data structures."""

from __future__ import annotations

import pytest

from ai_code_assistant.session.models import ChatMessage, ChatSession, derive_title


def test_derive_title_truncates_with_ellipsis():
    assert derive_title("short question") == "short question"
    assert derive_title("x" * 30) == "x" * 30
    assert derive_title("y" * 31) == "y" * 30 + "..."


def test_message_rejects_unknown_role():
    with pytest.raises(ValueError, match="Unsupported message role"):
        ChatMessage(role="tool", content="nope")


def test_first_user_message_names_the_session():
    session = ChatSession(id="s1")
    session.add("assistant", "Welcome")
    assert session.title == "New Chat"

    session.add("user", "How do I configure the build pipeline?")
    session.add("user", "Second question")

    assert session.title == "How do I configure the build p..."
    assert session.count("user") == 2
    assert session.count("assistant") == 1


def test_explicit_title_is_kept():
    session = ChatSession(id="s1", title="Pinned", auto_title=False)

    session.add("user", "anything")

    assert session.title == "Pinned"


def test_append_bumps_last_modified():
    session = ChatSession(id="s1", last_modified=1.0)

    message = session.add("user", "hello")

    assert session.last_modified >= message.timestamp
    assert session.last_modified > 1.0


def test_round_trip_through_dict():
    session = ChatSession(id="abc", model="mixtral")
    session.add("user", "question")
    session.add("assistant", "answer")

    data = session.to_dict()
    restored = ChatSession.from_dict(data)

    assert set(data) == {"id", "title", "lastModified", "model", "autoTitle", "messages"}
    assert restored == session


def test_from_dict_defaults_for_missing_fields():
    restored = ChatSession.from_dict({"id": "legacy"})

    assert restored.title == "New Chat"
    assert restored.messages == []
    assert restored.auto_title is False
