"""CLI package exposing the code-assistant command entry points."""

from __future__ import annotations

from ai_code_assistant.core.utils.config import Settings, load_settings

from .runtime.commands import (
    agents_group,
    ask_command,
    chat_command,
    execute_ask,
    execute_chat,
    history_group,
    index_command,
    models_command,
)
from .runtime.main import CLIState, cli
from .utils import build_orchestrator, build_store, get_llm_client


def main() -> None:
    """Invoke the CLI entry point."""
    cli(prog_name="code-assistant")


__all__ = [
    "CLIState",
    "Settings",
    "agents_group",
    "ask_command",
    "build_orchestrator",
    "build_store",
    "chat_command",
    "cli",
    "execute_ask",
    "execute_chat",
    "get_llm_client",
    "history_group",
    "index_command",
    "load_settings",
    "main",
    "models_command",
]
