"""Text helpers for query and title tokenisation."""

from __future__ import annotations

from typing import Iterable, List


def tokenize_query(query: str) -> List[str]:
    """Split a raw query into lowercase search terms.

    Repeated terms are kept: each occurrence counts again when scoring.
    """
    return query.strip().lower().split()


def split_words(text: str) -> List[str]:
    """Lowercase ``text`` and split it on runs of whitespace."""
    return text.lower().split()


def join_fields(parts: Iterable[str | None]) -> str:
    """Join optional text fields into one lowercase haystack."""
    return " ".join(part or "" for part in parts).lower()
