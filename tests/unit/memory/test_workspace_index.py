"""Tests for the workspace index."""

from __future__ import annotations

from ai_code_assistant.memory.index import IndexStatus, WorkspaceIndex, estimate_tokens


def _index(root, **kwargs) -> WorkspaceIndex:
    kwargs.setdefault("yield_seconds", 0)
    return WorkspaceIndex(root, **kwargs)


def test_estimate_tokens_rounds_up():
    assert estimate_tokens("") == 0
    assert estimate_tokens("abcd") == 1
    assert estimate_tokens("abcde") == 2


def test_scan_indexes_supported_files_and_prunes_ignored_dirs(workspace):
    index = _index(workspace)

    assert index.scan() is True

    paths = [item.path for item in index.files]
    assert paths == ["README.md", "src/utils.py", "src/auth/login.ts"]
    assert not any("node_modules" in path for path in paths)
    assert index.total_tokens == sum(item.tokens for item in index.files)
    assert len(index) == 3


def test_source_packages_named_like_build_dirs_are_kept(tmp_path):
    for relative in ("src/env/settings.py", "src/build/steps.py", "target/main.rs"):
        (tmp_path / relative).parent.mkdir(parents=True, exist_ok=True)
        (tmp_path / relative).write_text("value = 1\n")
    for relative in (".idea/workspace.xml", ".mypy_cache/3.11/cache.json", ".venv/lib/site.py"):
        (tmp_path / relative).parent.mkdir(parents=True, exist_ok=True)
        (tmp_path / relative).write_text("{}\n")

    index = _index(tmp_path)
    index.scan()

    assert sorted(item.path for item in index.files) == [
        "src/build/steps.py",
        "src/env/settings.py",
        "target/main.rs",
    ]


def test_indexed_file_keywords_and_content(workspace):
    index = _index(workspace)
    index.scan()

    login = next(item for item in index.files if item.path.endswith("login.ts"))

    assert login.content.startswith("export function login")
    assert {"login", "authenticate", "user", "string"} <= login.keywords
    assert login.tokens == estimate_tokens(login.content)
    assert login.last_modified > 0


def test_scan_skips_large_and_undecodable_files(tmp_path):
    (tmp_path / "big.py").write_text("x" * 200)
    (tmp_path / "bad.js").write_bytes(b"\xff\xfe\x00\x81 broken")
    (tmp_path / "ok.py").write_text("print('fine')\n")

    index = _index(tmp_path, max_file_bytes=100)
    index.scan()

    assert [item.path for item in index.files] == ["ok.py"]


def test_scan_stops_at_token_ceiling(tmp_path):
    for name in ("a.py", "b.py", "c.py"):
        (tmp_path / name).write_text("y" * 40)  # 10 tokens each

    index = _index(tmp_path, token_ceiling=25)
    index.scan()

    assert [item.path for item in index.files] == ["a.py", "b.py"]
    assert index.total_tokens == 20


def test_rescan_replaces_previous_snapshot(workspace):
    index = _index(workspace)
    index.scan()
    (workspace / "src" / "utils.py").unlink()

    index.scan()

    assert "src/utils.py" not in [item.path for item in index.files]


def test_scan_without_root_is_skipped():
    index = WorkspaceIndex(None)

    assert index.scan() is False
    assert index.scan_in_background() is None
    assert index.status() == IndexStatus(0, 0, False)


def test_concurrent_scan_request_is_ignored(workspace):
    index = _index(workspace)
    index._scan_guard.acquire()
    try:
        assert index.is_indexing is True
        assert index.scan() is False
        assert index.scan_in_background() is None
    finally:
        index._scan_guard.release()
    assert index.is_indexing is False


def test_progress_is_reported_per_interval(tmp_path):
    for position in range(5):
        (tmp_path / f"f{position}.py").write_text("content here\n")
    calls = []

    index = _index(tmp_path, batch_size=1, progress_interval=2, on_progress=lambda *a: calls.append(a))
    index.scan()

    assert calls == [(2, 5), (4, 5)]


def test_failing_progress_callback_does_not_abort_scan(tmp_path):
    for position in range(3):
        (tmp_path / f"f{position}.py").write_text("content\n")

    def explode(done, total):
        raise RuntimeError("boom")

    index = _index(tmp_path, batch_size=1, progress_interval=1, on_progress=explode)

    assert index.scan() is True
    assert len(index) == 3


def test_scan_in_background_completes(workspace):
    index = _index(workspace)

    thread = index.scan_in_background()
    assert thread is not None
    thread.join(timeout=10)

    assert len(index) == 3
    assert index.status().indexing is False


def test_set_root_takes_effect_on_next_scan(workspace, tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    (other / "main.go").write_text("package main\n")
    index = _index(workspace)
    index.scan()

    index.set_root(other)
    index.scan()

    assert [item.path for item in index.files] == ["main.go"]
    assert index.root == other.resolve()


def test_status_describe_formats_counts():
    status = IndexStatus(document_count=3, total_tokens=12345)

    assert status.describe() == "Indexed Documents: 3\nApprox. Tokens: 12,345"
