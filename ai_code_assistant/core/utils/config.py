"""Configuration loading utilities for the assistant."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import (
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_RETRIEVAL_LIMIT,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    INDEX_MAX_FILE_BYTES,
    INDEX_TOKEN_CEILING,
    MAX_STORED_SESSIONS,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib


ENV_PREFIX = "CODEASSIST_"
CONFIG_FILENAMES: tuple[str, ...] = (".codeassist.toml", "codeassist.toml")
DEFAULT_CONFIG_PATHS = (
    Path.home() / ".config" / "code-assistant" / "config.toml",
    Path.home() / ".codeassist.toml",
)


class ConfigurationError(RuntimeError):
    """Raised when the assistant cannot run with the supplied configuration."""


def find_config_in_parents(
    start_path: Path, config_name: str | Sequence[str] = ".codeassist.toml"
) -> Path | None:
    """Search parent directories starting from ``start_path`` for configuration files."""

    if isinstance(config_name, str):
        candidate_names: tuple[str, ...] = (config_name,)
    else:
        candidate_names = tuple(config_name)

    current = start_path.resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in candidate_names:
            candidate = current / name
            if candidate.is_file():
                return candidate.resolve()
        if current.parent == current:
            break
        current = current.parent
    return None


@dataclass
class Settings:
    """Runtime configuration for the assistant."""

    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    api_key: str | None = None
    base_url: str | None = None
    workspace_root: Path | None = None
    system_prompt: str | None = None
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    top_p: float = DEFAULT_TOP_P
    request_timeout: float = 120.0
    retry_max_attempts: int = 3
    retry_initial_delay: float = 0.5
    retry_max_delay: float = 30.0
    # None disables the bound on run_command
    command_timeout: float | None = DEFAULT_COMMAND_TIMEOUT
    auto_approve_read: bool = False
    auto_approve_write: bool = False
    auto_approve_shell: bool = False
    index_on_start: bool = True
    index_max_file_bytes: int = INDEX_MAX_FILE_BYTES
    index_token_ceiling: int = INDEX_TOKEN_CEILING
    retrieval_limit: int = DEFAULT_RETRIEVAL_LIMIT
    max_sessions: int = MAX_STORED_SESSIONS
    state_file: Path = Path.home() / ".code-assistant" / "state.json"
    log_level: str = "WARNING"
    structured_logging: bool = False

    def ensure_state_dir(self) -> None:
        """Ensure the directory for the state file exists."""
        if not self.state_file.parent.exists():
            self.state_file.parent.mkdir(parents=True, exist_ok=True)


_BOOL_FIELDS = {
    "auto_approve_read",
    "auto_approve_write",
    "auto_approve_shell",
    "index_on_start",
    "structured_logging",
}
_INT_FIELDS = {
    "max_tokens",
    "retry_max_attempts",
    "index_max_file_bytes",
    "index_token_ceiling",
    "retrieval_limit",
    "max_sessions",
}
_FLOAT_FIELDS = {
    "temperature",
    "top_p",
    "request_timeout",
    "retry_initial_delay",
    "retry_max_delay",
}
_PATH_FIELDS = {"workspace_root", "state_file"}


def _cast_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in {"1", "true", "on", "yes", "y"}
    return bool(value)


def _cast_timeout(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in {"", "none", "off", "0"}:
        return None
    timeout = float(value)
    return timeout if timeout > 0 else None


def _coerce(field: str, value: Any) -> Any:
    if field in _BOOL_FIELDS:
        return _cast_bool(value)
    if field in _INT_FIELDS:
        return int(value)
    if field in _FLOAT_FIELDS:
        return float(value)
    if field in _PATH_FIELDS:
        return Path(value).expanduser() if value else None
    if field == "command_timeout":
        return _cast_timeout(value)
    return value


def _load_from_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    return {k.replace("-", "_"): v for k, v in data.items()}


def _load_from_env(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    env: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        env[key[len(prefix) :].lower()] = value
    return env


def load_settings(explicit_path: Path | None = None) -> Settings:
    """Load configuration, merging file and environment sources."""

    file_data: dict[str, Any] = {}
    if explicit_path:
        file_data.update(_load_from_file(explicit_path))
    else:
        search_paths: list[Path] = []
        project_config = find_config_in_parents(Path.cwd(), CONFIG_FILENAMES)
        if project_config:
            search_paths.append(project_config)
        search_paths.extend(DEFAULT_CONFIG_PATHS)
        for candidate in search_paths:
            file_data = _load_from_file(candidate)
            if file_data:
                break

    merged: dict[str, Any] = {**file_data, **_load_from_env()}

    known_fields = set(Settings.__dataclass_fields__)
    init_kwargs = {key: _coerce(key, value) for key, value in merged.items() if key in known_fields}
    if init_kwargs.get("state_file") is None:
        init_kwargs.pop("state_file", None)
    settings = Settings(**init_kwargs)

    if settings.workspace_root is None:
        settings.workspace_root = Path.cwd().resolve()
    elif not settings.workspace_root.is_absolute():
        settings.workspace_root = (Path.cwd() / settings.workspace_root).resolve()
    settings.ensure_state_dir()
    return settings


__all__ = [
    "CONFIG_FILENAMES",
    "ConfigurationError",
    "ENV_PREFIX",
    "Settings",
    "find_config_in_parents",
    "load_settings",
]
