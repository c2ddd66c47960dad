"""Central definitions for canonical tool identifiers that avoid heavy imports."""

from __future__ import annotations

CREATE_FILE = "create_file"
EDIT_FILE = "edit_file"
READ_FILE = "read_file"
LIST_FILES = "list_files"
RUN_COMMAND = "run_command"

ALL_TOOLS = (
    CREATE_FILE,
    EDIT_FILE,
    READ_FILE,
    LIST_FILES,
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
