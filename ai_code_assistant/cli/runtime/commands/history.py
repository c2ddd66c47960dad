"""Commands for browsing and pruning stored chat sessions."""

from __future__ import annotations

from datetime import datetime

import click

from .._compat import get_cli_state


def _format_timestamp(value: float) -> str:
    return datetime.fromtimestamp(value).strftime("%Y-%m-%d %H:%M")


@click.group(name="history", short_help="Manage stored chat sessions.")
def history_group() -> None:
    """List, show and delete stored chat sessions."""


@history_group.command(name="list")
@click.pass_context
def list_sessions(ctx: click.Context) -> None:
    """List sessions, most recently modified first."""
    history = get_cli_state(ctx).history
    sessions = history.get_sessions()
    if not sessions:
        click.echo("No chat history.")
        return
    for session in sessions:
        click.echo(
            f"{session.id}  {_format_timestamp(session.last_modified)}  "
            f"{session.title} ({len(session.messages)} messages)"
        )


@history_group.command(name="show")
@click.argument("session_id")
@click.pass_context
def show_session(ctx: click.Context, session_id: str) -> None:
    """Print every message of a session."""
    session = get_cli_state(ctx).history.get_session(session_id)
    if session is None:
        raise click.ClickException(f"Session '{session_id}' not found")
    click.echo(f"# {session.title} [{session.model}]")
    for message in session.messages:
        click.echo(f"\n{message.role}:\n{message.content}")


@history_group.command(name="delete")
@click.argument("session_id")
@click.pass_context
def delete_session(ctx: click.Context, session_id: str) -> None:
    """Delete one session."""
    if not get_cli_state(ctx).history.delete_session(session_id):
        raise click.ClickException(f"Session '{session_id}' not found")
    click.echo(f"Deleted session {session_id}")


@history_group.command(name="clear")
@click.confirmation_option(prompt="Delete all stored chat sessions?")
@click.pass_context
def clear_sessions(ctx: click.Context) -> None:
    """Delete every stored session."""
    get_cli_state(ctx).history.clear_history()
    click.echo("Chat history cleared.")
