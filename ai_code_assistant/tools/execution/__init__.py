"""Tools for executing shell commands."""

from __future__ import annotations

from . import shell
from .shell import ShellCommandResult, ShellCommandTimeout, format_command_result, run_shell_command

__all__ = [
    "ShellCommandResult",
    "ShellCommandTimeout",
    "format_command_result",
    "run_shell_command",
    "shell",
]
