"""CLI runtime command registry."""

from .agents import agents_group
from .ask import ask_command, execute_ask
from .chat import chat_command, execute_chat
from .history import history_group
from .index import index_command
from .models import models_command

__all__ = [
    "agents_group",
    "ask_command",
    "chat_command",
    "execute_ask",
    "execute_chat",
    "history_group",
    "index_command",
    "models_command",
]
