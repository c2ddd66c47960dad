"""Lookup of the shared CLIState from nested click contexts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from .main import CLIState


def get_cli_state(ctx: click.Context) -> CLIState:
    """Return the CLIState prepared by the ``cli`` group.

    Subcommands of ``history`` and ``agents`` run in a child context, so the
    root context is consulted when the current one carries no state.
    """
    for candidate in (ctx, ctx.find_root()):
        state = candidate.obj.get("cli_state") if isinstance(candidate.obj, dict) else None
        if state is not None:
            return state
    raise click.ClickException("Code assistant state is not initialised; run through `code-assistant`.")
