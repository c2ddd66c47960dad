"""Tests for filesystem tool handlers."""

from __future__ import annotations

import pytest

from ai_code_assistant.tools.calls import (
    CreateFileParams,
    EditFileParams,
    ListFilesParams,
    ReadFileParams,
)
from ai_code_assistant.tools.filesystem import (
    _fs_create,
    _fs_edit,
    _fs_list,
    _fs_read,
    resolve_path,
)
from ai_code_assistant.tools.registry import ToolContext


@pytest.fixture
def context(tmp_path):
    return ToolContext(workspace_root=tmp_path)


def test_create_makes_parent_directories(context, tmp_path):
    message = _fs_create(CreateFileParams(path="src/new/hello.ts", content="hi"), context)

    assert message == "Successfully created/updated file: src/new/hello.ts"
    assert (tmp_path / "src" / "new" / "hello.ts").read_text() == "hi"


def test_edit_overwrites_whole_file(context, tmp_path):
    (tmp_path / "app.py").write_text("old content\nmore\n")

    _fs_edit(EditFileParams(path="app.py", content="new"), context)

    assert (tmp_path / "app.py").read_text() == "new"


def test_read_existing_and_missing_files(context, tmp_path):
    (tmp_path / "notes.md").write_text("# Notes")

    assert _fs_read(ReadFileParams(path="notes.md"), context) == "# Notes"
    assert _fs_read(ReadFileParams(path="missing.md"), context) == "File not found: missing.md"


def test_list_directory_sorted(context, tmp_path):
    (tmp_path / "b.txt").write_text("")
    (tmp_path / "a.txt").write_text("")
    (tmp_path / "sub").mkdir()

    assert _fs_list(ListFilesParams(), context) == "Files in .:\na.txt\nb.txt\nsub"
    assert _fs_list(ListFilesParams(path="nope"), context) == "Directory not found: nope"


@pytest.mark.parametrize("relative", ["../outside.txt", "sub/../../outside.txt", "/etc/passwd"])
def test_resolve_path_rejects_escapes(tmp_path, relative):
    with pytest.raises(ValueError, match="escapes workspace root"):
        resolve_path(tmp_path, relative)


def test_resolve_path_allows_root_and_children(tmp_path):
    assert resolve_path(tmp_path, ".") == tmp_path.resolve()
    assert resolve_path(tmp_path, "a/b.txt") == (tmp_path / "a" / "b.txt").resolve()
