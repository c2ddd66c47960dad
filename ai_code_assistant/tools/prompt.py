"""System prompt fragments describing the tool-invocation format."""

from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING

from .names import ALL_TOOLS
from .registry import registry as default_registry

if TYPE_CHECKING:
    from .registry import ToolRegistry

TOOL_BLOCK_OPEN = "<tool_code>"
TOOL_BLOCK_CLOSE = "</tool_code>"

DEFAULT_SYSTEM_PROMPT = "You are an advanced AI coding assistant."

_FORMAT_EXAMPLE = dedent(
    f"""\
    {TOOL_BLOCK_OPEN}
    {{
        "tool": "create_file",
        "params": {{
            "path": "src/hello.ts",
            "content": "console.log('Hello');"
        }}
    }}
    {TOOL_BLOCK_CLOSE}"""
)


def _tool_order(spec) -> int:
    return ALL_TOOLS.index(spec.name) if spec.name in ALL_TOOLS else len(ALL_TOOLS)


def build_tool_instructions(
    base_prompt: str | None = None, *, registry: ToolRegistry | None = None
) -> str:
    """Return the system prompt with the tool usage contract appended."""
    tools = registry or default_registry
    listing = "\n".join(
        f"{position}. {spec.signature} - {spec.description}"
        for position, spec in enumerate(sorted(tools.specs(), key=_tool_order), start=1)
    )
    return (
        f"{base_prompt or DEFAULT_SYSTEM_PROMPT}\n\n"
        "When you need to perform an action (like creating files, reading files, or running "
        "commands), you MUST use a specific tool block format.\n\n"
        f"Available Tools:\n{listing}\n\n"
        f"To use a tool, output a block like this:\n{_FORMAT_EXAMPLE}\n\n"
        "You can use multiple tools in sequence. Wait for the result after using a tool.\n"
        "Always verify file paths before writing.\n"
    )


__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "TOOL_BLOCK_CLOSE",
    "TOOL_BLOCK_OPEN",
    "build_tool_instructions",
]
