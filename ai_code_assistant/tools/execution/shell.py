"""Shell command execution inside the workspace root."""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ai_code_assistant.core.approval import SHELL_CATEGORY
from ai_code_assistant.core.utils.logger import get_logger

from ..calls import RunCommandParams
from ..names import RUN_COMMAND
from ..registry import ToolContext, ToolSpec, registry

if TYPE_CHECKING:
    from pathlib import Path

LOGGER = get_logger(__name__)


class ShellCommandTimeout(TimeoutError):
    """Raised when a command exceeds the allowed execution time."""


@dataclass
class ShellCommandResult:
    """Structured result from executing a shell command."""

    exit_code: int
    stdout: str
    stderr: str
    duration_ms: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def run_shell_command(command: str, *, cwd: Path, timeout: float | None = None) -> ShellCommandResult:
    """Run ``command`` through the system shell with ``cwd`` as working directory."""
    started = time.monotonic()
    try:
        completed = subprocess.run(
            command,
            shell=True,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise ShellCommandTimeout(f"Command timed out after {timeout:g}s") from exc

    duration_ms = int((time.monotonic() - started) * 1000)
    LOGGER.debug("Command %r exited with %s in %dms", command, completed.returncode, duration_ms)
    return ShellCommandResult(
        exit_code=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        duration_ms=duration_ms,
    )


def format_command_result(result: ShellCommandResult) -> str:
    if not result.succeeded:
        return f"Command failed: exit code {result.exit_code}\nStderr: {result.stderr}"
    text = f"Output:\n{result.stdout}\n"
    if result.stderr:
        text += f"Stderr: {result.stderr}"
    return text


def _run_command(args: RunCommandParams, context: ToolContext) -> str:
    try:
        result = run_shell_command(
            args.command,
            cwd=context.workspace_root,
            timeout=context.command_timeout,
        )
    except ShellCommandTimeout as exc:
        LOGGER.warning("%s: %s", exc, args.command)
        return str(exc)
    return format_command_result(result)


registry.register(
    ToolSpec(
        name=RUN_COMMAND,
        handler=_run_command,
        params_type=RunCommandParams,
        signature="run_command(command: string)",
        description="Run a shell command in the workspace root.",
        category=SHELL_CATEGORY,
    )
)


__all__ = [
    "ShellCommandResult",
    "ShellCommandTimeout",
    "format_command_result",
    "run_shell_command",
]
