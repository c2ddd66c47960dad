"""One-shot question command for the CLI runtime."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import click

from ai_code_assistant.cli.utils import ConsolePrinter, build_orchestrator, confirm_pending_calls
from ai_code_assistant.core.utils.logger import get_logger

from .._compat import get_cli_state

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..main import CLIState

LOGGER = get_logger(__name__)


def execute_ask(
    ctx: click.Context,
    state: "CLIState",
    prompt: Tuple[str, ...],
    *,
    index: bool = True,
    approve_all: bool = False,
) -> None:
    """Run a single turn and exit non-zero when it fails."""
    pending = " ".join(prompt).strip()
    if not pending:
        raise click.UsageError("Provide a question for the assistant.")

    orchestrator = build_orchestrator(
        state.settings, state.history, state.agents, approve_all=approve_all
    )
    orchestrator.add_sink(ConsolePrinter())

    if index:
        orchestrator.reindex_workspace()
        LOGGER.info("Workspace memory: %s", orchestrator.memory_status())

    result = orchestrator.send_message(pending)
    confirm_pending_calls(orchestrator)
    if not result.ok:
        ctx.exit(1)


@click.command(name="ask", short_help="Ask a single question.")
@click.argument("prompt", nargs=-1)
@click.option("--no-index", is_flag=True, help="Skip indexing the workspace first.")
@click.option(
    "-y", "--yes", "approve_all", is_flag=True, help="Run tool calls without asking."
)
@click.pass_context
def ask_command(
    ctx: click.Context, prompt: Tuple[str, ...], no_index: bool, approve_all: bool
) -> None:
    """Ask the assistant one question using workspace memory."""
    state = get_cli_state(ctx)
    execute_ask(ctx, state, prompt, index=not no_index, approve_all=approve_all)
