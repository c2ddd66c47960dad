"""Workspace indexing command."""

from __future__ import annotations

import click

from ai_code_assistant.cli.utils import build_index

from .._compat import get_cli_state


@click.command(name="index", short_help="Index the workspace and show memory status.")
@click.pass_context
def index_command(ctx: click.Context) -> None:
    """Scan the workspace into memory and report what was indexed."""
    state = get_cli_state(ctx)
    index = build_index(state.settings)
    index.on_progress = lambda done, total: click.echo(f"Indexed {done}/{total} files...")

    click.echo(f"Indexing {index.root} ...")
    if not index.scan():
        raise click.ClickException("Indexing skipped: no workspace or a scan is already running.")
    click.echo(index.status().describe())
