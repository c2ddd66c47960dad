"""Initialize built-in tool implementations."""

from __future__ import annotations

# Trigger tool registration by importing subpackages for their side effects.
from . import execution as _execution
from . import filesystem as _filesystem
from .calls import ToolCall, ToolKind, ToolParseError
from .executor import ToolExecutor
from .names import ALL_TOOLS, CREATE_FILE, EDIT_FILE, LIST_FILES, READ_FILE, RUN_COMMAND
from .prompt import build_tool_instructions
from .registry import ToolContext, ToolRegistry, ToolSpec, registry

__all__ = [
    "ALL_TOOLS",
    "CREATE_FILE",
    "EDIT_FILE",
    "LIST_FILES",
    "READ_FILE",
    "RUN_COMMAND",
    "ToolCall",
    "ToolContext",
    "ToolExecutor",
    "ToolKind",
    "ToolParseError",
    "ToolRegistry",
    "ToolSpec",
    "build_tool_instructions",
    "registry",
]
