"""Lexical retrieval of workspace files for prompt context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ai_code_assistant.core.utils.constants import (
    DEFAULT_RETRIEVAL_LIMIT,
    PATH_MATCH_WEIGHT,
    QUERY_KEYWORD_MIN_LENGTH,
)
from ai_code_assistant.core.utils.keywords import tokenize
from ai_code_assistant.core.utils.logger import get_logger

if TYPE_CHECKING:
    from .index import IndexedFile, WorkspaceIndex

LOGGER = get_logger(__name__)

CONTEXT_HEADER = "\n\nRelevant Workspace Files (Auto-Retrieved):\n"


@dataclass(frozen=True)
class ScoredFile:
    file: IndexedFile
    score: int


class RetrievalEngine:
    """Keyword-overlap scorer over a :class:`WorkspaceIndex`.

    A file scores one point for every query keyword found in its keyword set
    and ``PATH_MATCH_WEIGHT`` points for every query keyword contained in its
    path. The scorer is deterministic and makes no model calls.
    """

    def __init__(
        self,
        index: WorkspaceIndex,
        *,
        min_keyword_length: int = QUERY_KEYWORD_MIN_LENGTH,
        path_weight: int = PATH_MATCH_WEIGHT,
    ) -> None:
        self.index = index
        self.min_keyword_length = min_keyword_length
        self.path_weight = path_weight

    def query_keywords(self, query: str) -> list[str]:
        return tokenize(query, min_length=self.min_keyword_length)

    def score(self, file: IndexedFile, keywords: list[str]) -> int:
        path = file.path.lower()
        total = 0
        for keyword in keywords:
            if keyword in file.keywords:
                total += 1
            if keyword in path:
                total += self.path_weight
        return total

    def rank(self, query: str, limit: int = DEFAULT_RETRIEVAL_LIMIT) -> list[ScoredFile]:
        """Return at most ``limit`` files ordered by descending score.

        ``sorted`` is stable, so equal scores keep index order.
        """
        files = self.index.files
        if not files or limit <= 0:
            return []
        keywords = self.query_keywords(query)
        if not keywords:
            return []

        scored = [ScoredFile(file, self.score(file, keywords)) for file in files]
        relevant = [item for item in scored if item.score > 0]
        relevant.sort(key=lambda item: item.score, reverse=True)
        return relevant[:limit]

    def retrieve(self, query: str, limit: int = DEFAULT_RETRIEVAL_LIMIT) -> str:
        """Render the top matches as a prompt context block, or ``""`` if none match."""
        ranked = self.rank(query, limit)
        if not ranked:
            return ""

        LOGGER.debug(
            "Retrieved %d files for query: %s",
            len(ranked),
            ", ".join(f"{item.file.path}={item.score}" for item in ranked),
        )
        parts = [CONTEXT_HEADER]
        for item in ranked:
            parts.append(
                f"\nFile: {item.file.path} (Relevance: {item.score})\n```\n{item.file.content}\n```\n"
            )
        return "".join(parts)


__all__ = ["CONTEXT_HEADER", "RetrievalEngine", "ScoredFile"]
