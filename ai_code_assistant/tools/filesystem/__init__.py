"""Filesystem tool implementations."""

from __future__ import annotations

from pathlib import Path

from ai_code_assistant.core.approval import READ_CATEGORY, WRITE_CATEGORY

from ..calls import CreateFileParams, EditFileParams, ListFilesParams, ReadFileParams
from ..names import CREATE_FILE, EDIT_FILE, LIST_FILES, READ_FILE
from ..registry import ToolContext, ToolSpec, registry


def resolve_path(workspace_root: Path, relative: str) -> Path:
    """Resolve ``relative`` inside the workspace, refusing paths that escape it."""
    root = workspace_root.resolve()
    candidate = (root / relative).resolve()
    if root not in candidate.parents and candidate != root:
        raise ValueError(f"Path '{relative}' escapes workspace root")
    return candidate


def _write_file(args: CreateFileParams, context: ToolContext) -> str:
    target = resolve_path(context.workspace_root, args.path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(args.content, encoding="utf-8")
    return f"Successfully created/updated file: {args.path}"


def _fs_create(args: CreateFileParams, context: ToolContext) -> str:
    return _write_file(args, context)


def _fs_edit(args: EditFileParams, context: ToolContext) -> str:
    # Full overwrite; no search/replace or patch merging yet.
    return _write_file(args, context)


def _fs_read(args: ReadFileParams, context: ToolContext) -> str:
    target = resolve_path(context.workspace_root, args.path)
    if not target.is_file():
        return f"File not found: {args.path}"
    return target.read_text(encoding="utf-8", errors="replace")


def _fs_list(args: ListFilesParams, context: ToolContext) -> str:
    target = resolve_path(context.workspace_root, args.path)
    if not target.is_dir():
        return f"Directory not found: {args.path}"
    names = sorted(entry.name for entry in target.iterdir())
    return f"Files in {args.path}:\n" + "\n".join(names)


registry.register(
    ToolSpec(
        name=CREATE_FILE,
        handler=_fs_create,
        params_type=CreateFileParams,
        signature="create_file(path: string, content: string)",
        description="Create or overwrite a file.",
        category=WRITE_CATEGORY,
    )
)

registry.register(
    ToolSpec(
        name=EDIT_FILE,
        handler=_fs_edit,
        params_type=EditFileParams,
        signature="edit_file(path: string, content: string)",
        description="Replace the full content of an existing file.",
        category=WRITE_CATEGORY,
    )
)

registry.register(
    ToolSpec(
        name=READ_FILE,
        handler=_fs_read,
        params_type=ReadFileParams,
        signature="read_file(path: string)",
        description="Read file content.",
        category=READ_CATEGORY,
    )
)

registry.register(
    ToolSpec(
        name=LIST_FILES,
        handler=_fs_list,
        params_type=ListFilesParams,
        signature="list_files(path: string)",
        description="List files in a directory.",
        category=READ_CATEGORY,
    )
)


__all__ = ["_fs_create", "_fs_edit", "_fs_list", "_fs_read", "resolve_path"]
