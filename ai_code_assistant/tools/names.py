"""Central definitions for canonical tool identifiers."""

from __future__ import annotations

from ai_code_assistant.tool_names import (
    ALL_TOOLS,
    CREATE_FILE,
    EDIT_FILE,
    LIST_FILES,
    READ_FILE,
    RUN_COMMAND,
)

__all__ = [
    "ALL_TOOLS",
    "CREATE_FILE",
    "EDIT_FILE",
    "LIST_FILES",
    "READ_FILE",
    "RUN_COMMAND",
]
