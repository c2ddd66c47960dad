"""CLI runtime main entrypoint preparing shared state and delegating to commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import click

from ai_code_assistant import __version__
from ai_code_assistant.core.utils.config import load_settings
from ai_code_assistant.core.utils.logger import configure_logging, get_logger
from ai_code_assistant.session import AgentManager, ChatHistoryManager

from ..utils import build_store

if TYPE_CHECKING:
    from ai_code_assistant.core.storage import KeyValueStore
    from ai_code_assistant.core.utils.config import Settings

LOGGER = get_logger(__name__)


@dataclass
class CLIState:
    """Holds shared objects for CLI runtime commands."""

    settings: "Settings"
    store: "KeyValueStore"
    history: ChatHistoryManager
    agents: AgentManager


def _resolve_log_level(verbose: int, quiet: bool, configured: str) -> str:
    """Resolve log level based on verbosity flags."""
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return configured


def _initialise_state(config_path: Optional[Path], *, verbose: int, quiet: bool) -> CLIState:
    """Load settings, configure logging, and open the persisted state."""
    settings = load_settings(config_path)

    settings.log_level = _resolve_log_level(verbose, quiet, settings.log_level)
    configure_logging(settings.log_level, structured=settings.structured_logging)

    store = build_store(settings)
    state = CLIState(
        settings=settings,
        store=store,
        history=ChatHistoryManager(store, max_sessions=settings.max_sessions),
        agents=AgentManager(store),
    )
    LOGGER.debug("CLI runtime state initialised from %s", settings.state_file)
    return state


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to configuration file.",
)
@click.option("-v", "--verbose", count=True, help="Verbosity: -v (info), -vv (debug)")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors")
@click.version_option(__version__, prog_name="code-assistant")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: int, quiet: bool) -> None:
    """Code Assistant - chat with an AI coding partner about your workspace.

    Examples:
      code-assistant chat
      code-assistant ask "where is the login handler?"
      code-assistant history list
    """
    ctx.ensure_object(dict)
    state = _initialise_state(config_path, verbose=verbose, quiet=quiet)
    ctx.obj.update({"cli_state": state, "settings": state.settings})


def _register_commands() -> None:
    """Register CLI runtime commands (lazy import to avoid cycles)."""
    from .commands import (
        agents_group,
        ask_command,
        chat_command,
        history_group,
        index_command,
        models_command,
    )

    for command in (
        chat_command,
        ask_command,
        index_command,
        history_group,
        agents_group,
        models_command,
    ):
        if command.name not in cli.commands:
            cli.add_command(command)


# Ensure commands are registered on import so help output is complete.
_register_commands()
