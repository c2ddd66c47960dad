"""In-memory keyword index over the text files of a workspace.

The index is rebuilt wholesale on every scan. Files are processed in fixed
size batches with a short sleep between batches so a host thread (the CLI
prompt, an editor event loop) stays responsive while a large tree is read.

Consistency: a scan clears the published file list when it starts and then
publishes each completed batch. Readers therefore see a growing prefix of
the new index while a scan is running, never a partially processed batch.
"""

from __future__ import annotations

import math
import os
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ai_code_assistant.core.utils.constants import (
    CHARS_PER_TOKEN,
    DEFAULT_IGNORED_REPO_DIRS,
    INDEX_BATCH_SIZE,
    INDEX_MAX_FILE_BYTES,
    INDEX_PROGRESS_INTERVAL,
    INDEX_TOKEN_CEILING,
    INDEX_YIELD_SECONDS,
    INDEXED_FILE_EXTENSIONS,
)
from ai_code_assistant.core.utils.keywords import keyword_set
from ai_code_assistant.core.utils.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

LOGGER = get_logger(__name__)


def estimate_tokens(text: str) -> int:
    """Approximate token count used for the index budget."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


@dataclass(frozen=True)
class IndexedFile:
    """A single workspace file held by the index."""

    path: str
    content: str
    keywords: frozenset[str]
    last_modified: float
    tokens: int


@dataclass(frozen=True)
class IndexStatus:
    document_count: int
    total_tokens: int
    indexing: bool = False

    def describe(self) -> str:
        return f"Indexed Documents: {self.document_count}\nApprox. Tokens: {self.total_tokens:,}"


class WorkspaceIndex:
    """Searchable snapshot of workspace text files."""

    def __init__(
        self,
        root: Path | str | None,
        *,
        extensions: Iterable[str] = INDEXED_FILE_EXTENSIONS,
        ignored_dirs: Iterable[str] = DEFAULT_IGNORED_REPO_DIRS,
        batch_size: int = INDEX_BATCH_SIZE,
        max_file_bytes: int = INDEX_MAX_FILE_BYTES,
        token_ceiling: int = INDEX_TOKEN_CEILING,
        progress_interval: int = INDEX_PROGRESS_INTERVAL,
        yield_seconds: float = INDEX_YIELD_SECONDS,
        on_progress: Callable[[int, int], None] | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._root = Path(root).resolve() if root else None
        self._extensions = frozenset(ext.lower() for ext in extensions)
        self._ignored_dirs = frozenset(ignored_dirs)
        self.batch_size = batch_size
        self.max_file_bytes = max_file_bytes
        self.token_ceiling = token_ceiling
        self.progress_interval = progress_interval
        self.yield_seconds = yield_seconds
        self.on_progress = on_progress

        self._files: list[IndexedFile] = []
        self._total_tokens = 0
        self._lock = threading.Lock()
        self._scan_guard = threading.Lock()

    # Properties ---------------------------------------------------------

    @property
    def root(self) -> Path | None:
        return self._root

    def set_root(self, root: Path | str | None) -> None:
        """Point the index at a different workspace. Takes effect on the next scan."""
        self._root = Path(root).resolve() if root else None

    @property
    def files(self) -> tuple[IndexedFile, ...]:
        with self._lock:
            return tuple(self._files)

    @property
    def total_tokens(self) -> int:
        with self._lock:
            return self._total_tokens

    @property
    def is_indexing(self) -> bool:
        return self._scan_guard.locked()

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)

    def status(self) -> IndexStatus:
        with self._lock:
            return IndexStatus(len(self._files), self._total_tokens, self.is_indexing)

    # Scanning -----------------------------------------------------------

    def scan(self) -> bool:
        """Rebuild the index. Returns ``False`` when the scan was skipped.

        Never raises: enumeration and read failures are logged.
        """
        root = self._root
        if root is None:
            LOGGER.debug("Workspace index scan skipped: no workspace root configured")
            return False
        if not self._scan_guard.acquire(blocking=False):
            LOGGER.debug("Workspace index scan already running; ignoring request")
            return False

        try:
            LOGGER.info("Starting workspace scan of %s", root)
            with self._lock:
                self._files = []
                self._total_tokens = 0

            candidates = self._enumerate(root)
            total = len(candidates)
            ceiling_reached = False

            for start in range(0, total, self.batch_size):
                batch = candidates[start : start + self.batch_size]
                built: list[IndexedFile] = []
                for path in batch:
                    indexed = self._index_file(root, path)
                    if indexed is None:
                        continue
                    running = self._total_tokens + sum(item.tokens for item in built)
                    if running + indexed.tokens > self.token_ceiling:
                        ceiling_reached = True
                        LOGGER.warning(
                            "Token ceiling of %d reached; skipping remaining files",
                            self.token_ceiling,
                        )
                        break
                    built.append(indexed)

                with self._lock:
                    self._files.extend(built)
                    self._total_tokens += sum(item.tokens for item in built)

                if start > 0 and start % self.progress_interval == 0:
                    self._report_progress(start, total)
                if ceiling_reached:
                    break
                # Let other threads run between batches
                time.sleep(self.yield_seconds)

            status = self.status()
            LOGGER.info(
                "Indexed %d files (%d candidates). Total approx tokens: %d",
                status.document_count,
                total,
                status.total_tokens,
            )
        except Exception:
            LOGGER.exception("Workspace scan failed")
        finally:
            self._scan_guard.release()
        return True

    def scan_in_background(self) -> threading.Thread | None:
        """Run :meth:`scan` on a daemon thread. Returns ``None`` when a scan is active."""
        if self._root is None or self.is_indexing:
            return None
        thread = threading.Thread(target=self.scan, name="workspace-index", daemon=True)
        thread.start()
        return thread

    # Internal -----------------------------------------------------------

    def _enumerate(self, root: Path) -> Sequence[Path]:
        found: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(root):
            # Hidden directories hold editor and tool state, never sources.
            dirnames[:] = sorted(
                d for d in dirnames if d not in self._ignored_dirs and not d.startswith(".")
            )
            for name in sorted(filenames):
                if Path(name).suffix.lower() in self._extensions:
                    found.append(Path(dirpath) / name)
        return found

    def _index_file(self, root: Path, path: Path) -> IndexedFile | None:
        try:
            stats = path.stat()
            if stats.st_size > self.max_file_bytes:
                LOGGER.debug("Skipping %s: %d bytes exceeds limit", path, stats.st_size)
                return None
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.debug("Failed to index file %s: %s", path, exc)
            return None

        return IndexedFile(
            path=path.relative_to(root).as_posix(),
            content=content,
            keywords=keyword_set(content),
            last_modified=stats.st_mtime,
            tokens=estimate_tokens(content),
        )

    def _report_progress(self, processed: int, total: int) -> None:
        LOGGER.info("Indexed %d/%d files...", processed, total)
        if self.on_progress is None:
            return
        try:
            self.on_progress(processed, total)
        except Exception:
            LOGGER.exception("Index progress callback failed")


__all__ = ["IndexStatus", "IndexedFile", "WorkspaceIndex", "estimate_tokens"]
