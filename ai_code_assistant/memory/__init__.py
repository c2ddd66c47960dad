"""Workspace memory: file index and retrieval."""

from .index import IndexedFile, IndexStatus, WorkspaceIndex, estimate_tokens
from .retrieval import CONTEXT_HEADER, RetrievalEngine, ScoredFile

__all__ = [
    "CONTEXT_HEADER",
    "IndexStatus",
    "IndexedFile",
    "RetrievalEngine",
    "ScoredFile",
    "WorkspaceIndex",
    "estimate_tokens",
]
