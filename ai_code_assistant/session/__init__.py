"""Chat sessions, persisted history and agent profiles."""

from .agents import AgentManager, AgentProfile, default_agent
from .history import ChatHistoryManager
from .models import ChatMessage, ChatSession, Role, derive_title

__all__ = [
    "AgentManager",
    "AgentProfile",
    "ChatHistoryManager",
    "ChatMessage",
    "ChatSession",
    "Role",
    "default_agent",
    "derive_title",
]
