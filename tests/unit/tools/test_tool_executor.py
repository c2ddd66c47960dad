"""Tests for the tool executor."""

from __future__ import annotations

from ai_code_assistant.tools import ToolExecutor
from ai_code_assistant.tools.calls import ReadFileParams, ToolCall
from ai_code_assistant.tools.registry import ToolRegistry, ToolSpec


def _call(tool: str, **params) -> ToolCall:
    return ToolCall.from_payload({"tool": tool, "params": params}, f"tool-{tool}")


def test_create_then_read_round_trip(tmp_path):
    executor = ToolExecutor(tmp_path)

    created = executor.execute(_call("create_file", path="pkg/mod.py", content="VALUE = 1\n"))
    read = executor.execute(_call("read_file", path="pkg/mod.py"))

    assert created == "Successfully created/updated file: pkg/mod.py"
    assert read == "VALUE = 1\n"


def test_unknown_tool_returns_error_string(tmp_path):
    executor = ToolExecutor(tmp_path)

    assert executor.execute(_call("format_disk")) == "Error: Unknown tool 'format_disk'"


def test_missing_workspace_becomes_error_string():
    executor = ToolExecutor(None)

    result = executor.execute(_call("list_files", path="."))

    assert result == "Error executing list_files: No workspace open"


def test_escaping_path_becomes_error_string(tmp_path):
    executor = ToolExecutor(tmp_path / "ws")

    result = executor.execute(_call("read_file", path="../secret.txt"))

    assert result.startswith("Error executing read_file: ")
    assert "escapes workspace root" in result


def test_handler_exception_is_captured(tmp_path):
    registry = ToolRegistry()

    def explode(args, context):
        raise OSError("disk on fire")

    registry.register(
        ToolSpec(name="read_file", handler=explode, params_type=ReadFileParams, signature="")
    )
    executor = ToolExecutor(tmp_path, registry=registry)

    assert executor.execute(_call("read_file", path="x")) == "Error executing read_file: disk on fire"


def test_category_lookup(tmp_path):
    executor = ToolExecutor(tmp_path)

    assert executor.category(_call("read_file", path="x")) == "file_read"
    assert executor.category(_call("edit_file", path="x", content="")) == "file_write"
    assert executor.category(_call("run_command", command="ls")) == "command"
    assert executor.category(_call("mystery")) == "generic"


def test_command_timeout_reaches_context(tmp_path):
    seen = {}
    registry = ToolRegistry()

    def capture(args, context):
        seen["timeout"] = context.command_timeout
        seen["root"] = context.workspace_root
        return "ok"

    registry.register(
        ToolSpec(name="read_file", handler=capture, params_type=ReadFileParams, signature="")
    )
    executor = ToolExecutor(tmp_path, registry=registry, command_timeout=7.5)

    assert executor.execute(_call("read_file", path="x")) == "ok"
    assert seen == {"timeout": 7.5, "root": tmp_path.resolve()}
