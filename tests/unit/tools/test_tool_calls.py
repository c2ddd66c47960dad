"""Tests for tool call parsing and validation."""

from __future__ import annotations

import pytest

from ai_code_assistant.tools.calls import (
    CreateFileParams,
    EditFileParams,
    ListFilesParams,
    ReadFileParams,
    RunCommandParams,
    ToolCall,
    ToolKind,
    ToolParseError,
    UnknownToolParams,
    build_arguments,
)


@pytest.mark.parametrize(
    "payload,expected",
    [
        (
            {"tool": "create_file", "params": {"path": "a.py", "content": "x = 1"}},
            CreateFileParams(path="a.py", content="x = 1"),
        ),
        (
            {"tool": "edit_file", "params": {"path": "a.py", "content": ""}},
            EditFileParams(path="a.py", content=""),
        ),
        ({"tool": "read_file", "params": {"path": "a.py"}}, ReadFileParams(path="a.py")),
        ({"tool": "list_files", "params": {}}, ListFilesParams(path=".")),
        ({"tool": "list_files"}, ListFilesParams(path=".")),
        ({"tool": "run_command", "params": {"command": "ls"}}, RunCommandParams(command="ls")),
    ],
)
def test_from_payload_builds_typed_arguments(payload, expected):
    call = ToolCall.from_payload(payload, "tool-1")

    assert call.id == "tool-1"
    assert call.tool == payload["tool"]
    assert call.arguments == expected
    assert type(call.arguments) is type(expected)


def test_unknown_tool_is_kept_with_raw_params():
    call = ToolCall.from_payload({"tool": "delete_everything", "params": {"force": True}}, "id")

    assert call.kind is ToolKind.UNKNOWN
    assert call.arguments == UnknownToolParams({"force": True})
    assert call.describe() == "delete_everything"


@pytest.mark.parametrize(
    "payload,message",
    [
        (["not", "an", "object"], "JSON object"),
        ({"params": {}}, "missing a 'tool'"),
        ({"tool": "   "}, "missing a 'tool'"),
        ({"tool": "read_file", "params": "a.py"}, "must be an object"),
        ({"tool": "read_file", "params": {}}, "Invalid params for read_file"),
        ({"tool": "read_file", "params": {"path": ""}}, "Invalid params for read_file"),
        ({"tool": "create_file", "params": {"path": "a.py"}}, "Invalid params for create_file"),
        ({"tool": "run_command", "params": {"command": 5}}, "Invalid params for run_command"),
    ],
)
def test_invalid_payloads_raise_parse_error(payload, message):
    with pytest.raises(ToolParseError) as exc_info:
        ToolCall.from_payload(payload, "id")

    assert message in str(exc_info.value)


def test_tool_kind_from_name():
    assert ToolKind.from_name("read_file") is ToolKind.READ_FILE
    assert ToolKind.from_name("nope") is ToolKind.UNKNOWN


def test_build_arguments_for_unknown_copies_params():
    params = {"a": 1}
    arguments = build_arguments(ToolKind.UNKNOWN, params)
    params["a"] = 2

    assert arguments.raw == {"a": 1}


def test_describe_and_to_dict():
    call = ToolCall.from_payload({"tool": "run_command", "params": {"command": "npm test"}}, "t")

    assert call.describe() == "run_command: npm test"
    assert call.to_dict() == {"id": "t", "tool": "run_command", "params": {"command": "npm test"}}
    assert ToolCall.from_payload({"tool": "read_file", "params": {"path": "x"}}, "r").describe() == (
        "read_file: x"
    )
