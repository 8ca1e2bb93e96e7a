"""Text helpers for tokenization and query normalization."""

from __future__ import annotations

import re
from typing import AbstractSet, List

_TOKEN_RE = re.compile(r"[A-Za-z0-9]+")


def tokenize(text: str) -> List[str]:
    """Extract every maximal run of ASCII letters and digits from ``text``.

    Tokens come back in order, duplicates included, with their original case.
    Lowercasing is left to the caller.
    """
    if not text:
        return []
    return _TOKEN_RE.findall(text)


def normalize_query(text: str | None) -> str:
    """Trim surrounding whitespace and lowercase."""
    if not text:
        return ""
    return text.strip().lower()


def intersection(left: AbstractSet[str], right: AbstractSet[str]) -> set[str]:
    """Return ids present in both sets, iterating over the smaller one."""
    if len(left) > len(right):
        left, right = right, left
    return {item for item in left if item in right}
