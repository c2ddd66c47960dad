"""Core data structures for chat session management."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Literal

from ai_code_assistant.core.utils.constants import (
    DEFAULT_MODEL,
    DEFAULT_SESSION_TITLE,
    SESSION_TITLE_MAX_CHARS,
)

Role = Literal["user", "assistant", "system"]
ROLES: frozenset[str] = frozenset({"user", "assistant", "system"})


def derive_title(text: str, limit: int = SESSION_TITLE_MAX_CHARS) -> str:
    """Title derived from the first user message: ``limit`` characters plus an ellipsis."""
    return text[:limit] + ("..." if len(text) > limit else "")


@dataclass(frozen=True)
class ChatMessage:
    """One message of a conversation. Never mutated after it is appended."""

    role: Role
    content: str
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"Unsupported message role: {self.role!r}")

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChatMessage:
        return cls(role=data["role"], content=data["content"], timestamp=data["timestamp"])


@dataclass
class ChatSession:
    """A conversation with ordered, append-only history."""

    id: str
    title: str = DEFAULT_SESSION_TITLE
    last_modified: float = field(default_factory=time.time)
    model: str = DEFAULT_MODEL
    messages: list[ChatMessage] = field(default_factory=list)
    auto_title: bool = True

    def append(self, message: ChatMessage) -> ChatMessage:
        """Append ``message`` and bump ``last_modified``.

        The first user message names the session unless a title was set
        explicitly when the session was created.
        """
        self.messages.append(message)
        self.last_modified = max(time.time(), message.timestamp)
        if self.auto_title and message.role == "user":
            self.title = derive_title(message.content)
            self.auto_title = False
        return message

    def add(self, role: Role, content: str) -> ChatMessage:
        return self.append(ChatMessage(role=role, content=content))

    def count(self, role: Role) -> int:
        return sum(1 for message in self.messages if message.role == role)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "lastModified": self.last_modified,
            "model": self.model,
            "autoTitle": self.auto_title,
            "messages": [message.to_dict() for message in self.messages],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChatSession:
        return cls(
            id=data["id"],
            title=data.get("title", DEFAULT_SESSION_TITLE),
            last_modified=data.get("lastModified", 0.0),
            model=data.get("model", DEFAULT_MODEL),
            messages=[ChatMessage.from_dict(item) for item in data.get("messages", [])],
            auto_title=data.get("autoTitle", False),
        )


__all__ = ["ChatMessage", "ChatSession", "ROLES", "Role", "derive_title"]
