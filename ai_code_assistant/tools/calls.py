"""Typed tool-call records parsed from model output.

Each known tool has a JSON schema for its ``params`` object and a frozen
parameter record. Payloads are validated when they are parsed, so a call
that reaches the executor always carries well-formed arguments. Tool names
outside the known vocabulary parse into :class:`UnknownToolParams` and are
reported by the executor instead of being dropped here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Mapping, Union

from jsonschema import Draft7Validator

from ai_code_assistant.tool_names import CREATE_FILE, EDIT_FILE, LIST_FILES, READ_FILE, RUN_COMMAND


class ToolParseError(ValueError):
    """Raised when a tool invocation block cannot be turned into a ToolCall."""


class ToolKind(str, Enum):
    CREATE_FILE = CREATE_FILE
    EDIT_FILE = EDIT_FILE
    READ_FILE = READ_FILE
    LIST_FILES = LIST_FILES
    RUN_COMMAND = RUN_COMMAND
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: str) -> ToolKind:
        try:
            kind = cls(name)
        except ValueError:
            return cls.UNKNOWN
        return kind


@dataclass(frozen=True)
class CreateFileParams:
    path: str
    content: str


@dataclass(frozen=True)
class EditFileParams(CreateFileParams):
    """Same shape as create_file; edits overwrite the whole file."""


@dataclass(frozen=True)
class ReadFileParams:
    path: str


@dataclass(frozen=True)
class ListFilesParams:
    path: str = "."


@dataclass(frozen=True)
class RunCommandParams:
    command: str


@dataclass(frozen=True)
class UnknownToolParams:
    raw: Mapping[str, Any] = field(default_factory=dict)


ToolArguments = Union[
    CreateFileParams,
    EditFileParams,
    ReadFileParams,
    ListFilesParams,
    RunCommandParams,
    UnknownToolParams,
]

_PATH = {"type": "string", "minLength": 1}

PARAM_SCHEMAS: dict[ToolKind, dict[str, Any]] = {
    ToolKind.CREATE_FILE: {
        "type": "object",
        "properties": {"path": _PATH, "content": {"type": "string"}},
        "required": ["path", "content"],
    },
    ToolKind.EDIT_FILE: {
        "type": "object",
        "properties": {"path": _PATH, "content": {"type": "string"}},
        "required": ["path", "content"],
    },
    ToolKind.READ_FILE: {
        "type": "object",
        "properties": {"path": _PATH},
        "required": ["path"],
    },
    ToolKind.LIST_FILES: {
        "type": "object",
        "properties": {"path": _PATH},
    },
    ToolKind.RUN_COMMAND: {
        "type": "object",
        "properties": {"command": {"type": "string", "minLength": 1}},
        "required": ["command"],
    },
}


@lru_cache(maxsize=None)
def _load_validator(kind: ToolKind) -> Draft7Validator:
    return Draft7Validator(PARAM_SCHEMAS[kind])


def build_arguments(kind: ToolKind, params: Mapping[str, Any]) -> ToolArguments:
    """Validate ``params`` for ``kind`` and return its typed record."""
    if kind is ToolKind.UNKNOWN:
        return UnknownToolParams(dict(params))

    errors = sorted(_load_validator(kind).iter_errors(dict(params)), key=lambda exc: list(exc.path))
    if errors:
        raise ToolParseError(f"Invalid params for {kind.value}: {errors[0].message}")

    if kind is ToolKind.CREATE_FILE:
        return CreateFileParams(path=params["path"], content=params["content"])
    if kind is ToolKind.EDIT_FILE:
        return EditFileParams(path=params["path"], content=params["content"])
    if kind is ToolKind.READ_FILE:
        return ReadFileParams(path=params["path"])
    if kind is ToolKind.LIST_FILES:
        return ListFilesParams(path=params.get("path") or ".")
    return RunCommandParams(command=params["command"])


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the model, identified by a per-request id."""

    id: str
    tool: str
    params: Mapping[str, Any]
    arguments: ToolArguments

    @property
    def kind(self) -> ToolKind:
        return ToolKind.from_name(self.tool)

    @classmethod
    def from_payload(cls, payload: Any, call_id: str) -> ToolCall:
        """Build a call from a decoded ``{"tool": ..., "params": {...}}`` object."""
        if not isinstance(payload, Mapping):
            raise ToolParseError("Tool block must contain a JSON object")
        tool = payload.get("tool")
        if not isinstance(tool, str) or not tool.strip():
            raise ToolParseError("Tool block is missing a 'tool' name")
        params = payload.get("params", {})
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise ToolParseError(f"'params' for {tool} must be an object")

        tool = tool.strip()
        arguments = build_arguments(ToolKind.from_name(tool), params)
        return cls(id=call_id, tool=tool, params=dict(params), arguments=arguments)

    def describe(self) -> str:
        """Short human readable summary used in confirmation prompts."""
        args = self.arguments
        if isinstance(args, RunCommandParams):
            return f"{self.tool}: {args.command}"
        if isinstance(args, (CreateFileParams, ReadFileParams, ListFilesParams)):
            return f"{self.tool}: {args.path}"
        return self.tool

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "tool": self.tool, "params": dict(self.params)}


__all__ = [
    "CreateFileParams",
    "EditFileParams",
    "ListFilesParams",
    "PARAM_SCHEMAS",
    "ReadFileParams",
    "RunCommandParams",
    "ToolArguments",
    "ToolCall",
    "ToolKind",
    "ToolParseError",
    "UnknownToolParams",
    "build_arguments",
]
