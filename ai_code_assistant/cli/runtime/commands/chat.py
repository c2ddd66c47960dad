"""Interactive chat command implemented for CLI runtime."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import click

from ai_code_assistant.cli.utils import ConsolePrinter, build_orchestrator, confirm_pending_calls

from .._compat import get_cli_state

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ai_code_assistant.engine import AgentOrchestrator

    from ..main import CLIState

CHAT_HELP_TEXT = """Commands:
  /new            start a new chat session
  /status         show workspace memory status
  /reindex        rebuild the workspace index
  /model NAME     switch the completion model
  /help           show this help
  exit, quit, q   leave the chat"""


def _handle_slash_command(orchestrator: "AgentOrchestrator", line: str) -> None:
    command, _, argument = line.partition(" ")
    argument = argument.strip()
    if command == "/new":
        orchestrator.new_session()
        click.echo("Started a new chat session.")
    elif command == "/status":
        status = orchestrator.memory_status()
        if status is None:
            click.echo("No workspace open.")
        else:
            suffix = " (indexing...)" if status.indexing else ""
            click.echo(status.describe() + suffix)
    elif command == "/reindex":
        if orchestrator.reindex_workspace(background=True):
            click.echo("Re-indexing workspace in the background...")
        else:
            click.echo("Indexing already in progress.")
    elif command == "/model":
        if not argument:
            click.echo(f"Current model: {orchestrator.config.model}")
        else:
            orchestrator.update_config(model=argument)
    elif command == "/help":
        click.echo(CHAT_HELP_TEXT)
    else:
        click.echo(f"Unknown command: {command}. Type /help for a list of commands.")


def execute_chat(
    ctx: click.Context,
    state: "CLIState",
    *,
    session_id: Optional[str] = None,
    index: bool = True,
    approve_all: bool = False,
) -> None:
    """Shared chat implementation leveraging CLIState."""
    settings = state.settings
    orchestrator = build_orchestrator(
        settings, state.history, state.agents, approve_all=approve_all
    )

    if session_id and orchestrator.load_session(session_id) is None:
        raise click.ClickException(f"Session '{session_id}' not found")

    click.echo("Code Assistant Chat")
    click.echo("Ask questions about your workspace. Type /help for commands, 'exit' to quit.")
    click.echo("=" * 60)

    orchestrator.add_sink(ConsolePrinter(), replay=bool(session_id))

    if index and settings.index_on_start:
        if orchestrator.reindex_workspace(background=True):
            click.echo(click.style("Indexing workspace in the background...", dim=True))

    while True:
        try:
            user_input = click.prompt("You> ", prompt_suffix="", show_default=False).strip()
        except (KeyboardInterrupt, EOFError, click.Abort):
            click.echo("\nGoodbye!")
            break

        if not user_input:
            continue

        if user_input.lower() in {"exit", "quit", "q"}:
            click.echo("Goodbye!")
            break

        if user_input.startswith("/"):
            _handle_slash_command(orchestrator, user_input)
            continue

        orchestrator.send_message(user_input)
        confirm_pending_calls(orchestrator)


@click.command(
    name="chat", help="Start an interactive chat session.", short_help="Interactive chat"
)
@click.option("--session", "session_id", help="Resume a stored chat session by id.")
@click.option("--no-index", is_flag=True, help="Skip indexing the workspace on start.")
@click.option(
    "-y", "--yes", "approve_all", is_flag=True, help="Run tool calls without asking."
)
@click.pass_context
def chat_command(
    ctx: click.Context, session_id: Optional[str], no_index: bool, approve_all: bool
) -> None:
    """Start an interactive chat session with CLIState context."""
    state = get_cli_state(ctx)
    execute_chat(ctx, state, session_id=session_id, index=not no_index, approve_all=approve_all)
