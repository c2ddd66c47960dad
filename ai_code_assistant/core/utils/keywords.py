"""Utility functions for extracting index and query keywords."""

from __future__ import annotations

import re

from .constants import INDEX_KEYWORD_MIN_LENGTH

_SPLIT_PATTERN = re.compile(r"[^a-zA-Z0-9_]+")


def tokenize(text: str, *, min_length: int = INDEX_KEYWORD_MIN_LENGTH) -> list[str]:
    """Return lowercased tokens of *text* longer than ``min_length`` characters.

    Tokens are split on any character outside ``[A-Za-z0-9_]`` and
    deduplicated, keeping the position of their first occurrence.
    """
    if not text:
        return []

    keywords: list[str] = []
    seen: set[str] = set()
    for token in _SPLIT_PATTERN.split(text):
        if len(token) <= min_length:
            continue
        lower = token.lower()
        if lower in seen:
            continue
        seen.add(lower)
        keywords.append(lower)
    return keywords


def keyword_set(text: str, *, min_length: int = INDEX_KEYWORD_MIN_LENGTH) -> frozenset[str]:
    return frozenset(tokenize(text, min_length=min_length))


__all__ = ["keyword_set", "tokenize"]
