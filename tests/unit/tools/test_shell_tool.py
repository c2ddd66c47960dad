"""Tests for the run_command tool."""

from __future__ import annotations

import sys

import pytest

from ai_code_assistant.tools.calls import RunCommandParams
from ai_code_assistant.tools.execution.shell import (
    ShellCommandResult,
    ShellCommandTimeout,
    _run_command,
    format_command_result,
    run_shell_command,
)
from ai_code_assistant.tools.registry import ToolContext

PYTHON = f'"{sys.executable}"'


def test_run_shell_command_captures_output_in_workspace(tmp_path):
    (tmp_path / "marker.txt").write_text("")

    result = run_shell_command(
        f"{PYTHON} -c \"import os; print(sorted(os.listdir('.')))\"", cwd=tmp_path, timeout=30
    )

    assert result.succeeded
    assert "marker.txt" in result.stdout
    assert result.duration_ms >= 0


def test_run_shell_command_times_out(tmp_path):
    with pytest.raises(ShellCommandTimeout, match="timed out after 0.5s"):
        run_shell_command(f'{PYTHON} -c "import time; time.sleep(3)"', cwd=tmp_path, timeout=0.5)


def test_format_command_result_success_and_failure():
    ok = ShellCommandResult(exit_code=0, stdout="done", stderr="", duration_ms=1)
    warned = ShellCommandResult(exit_code=0, stdout="done", stderr="careful", duration_ms=1)
    failed = ShellCommandResult(exit_code=2, stdout="", stderr="boom", duration_ms=1)

    assert format_command_result(ok) == "Output:\ndone\n"
    assert format_command_result(warned) == "Output:\ndone\nStderr: careful"
    assert format_command_result(failed) == "Command failed: exit code 2\nStderr: boom"


def test_handler_reports_exit_code(tmp_path):
    context = ToolContext(workspace_root=tmp_path, command_timeout=30)

    message = _run_command(
        RunCommandParams(command=f'{PYTHON} -c "import sys; sys.exit(3)"'), context
    )

    assert message.startswith("Command failed: exit code 3")


def test_handler_returns_timeout_message(tmp_path):
    context = ToolContext(workspace_root=tmp_path, command_timeout=0.5)

    message = _run_command(
        RunCommandParams(command=f'{PYTHON} -c "import time; time.sleep(3)"'), context
    )

    assert message == "Command timed out after 0.5s"
