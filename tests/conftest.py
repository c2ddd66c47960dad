"""Shared pytest fixtures."""

from __future__ import annotations

import os

import pytest

from ai_code_assistant.core.storage import InMemoryKeyValueStore
from ai_code_assistant.core.utils import config as config_module
from ai_code_assistant.session import ChatHistoryManager


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep user configuration and CODEASSIST_* variables out of every test."""
    for key in list(os.environ):
        if key.startswith(config_module.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATHS", ())
    monkeypatch.setenv("CODEASSIST_STATE_FILE", str(tmp_path / "state" / "state.json"))


@pytest.fixture
def workspace(tmp_path):
    """A small workspace with a handful of indexable files."""
    root = tmp_path / "workspace"
    (root / "src" / "auth").mkdir(parents=True)
    (root / "node_modules" / "lib").mkdir(parents=True)
    (root / "src" / "auth" / "login.ts").write_text(
        "export function login(user: string) {\n  return authenticate(user);\n}\n"
    )
    (root / "src" / "utils.py").write_text("def helper():\n    return 'value'\n")
    (root / "README.md").write_text("# Demo project\n\nHandles user sessions.\n")
    (root / "image.png").write_bytes(b"\x89PNG\r\n")
    (root / "node_modules" / "lib" / "index.js").write_text("module.exports = login;\n")
    return root


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def history(store):
    return ChatHistoryManager(store)
