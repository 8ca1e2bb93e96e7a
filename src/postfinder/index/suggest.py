"""Tag and title completions for partial queries."""

from __future__ import annotations

from typing import Iterable, List

from postfinder.models import Document
from postfinder.utils.text import normalize_query

DEFAULT_LIMIT = 10


def suggest(prefix: str, documents: Iterable[Document], limit: int = DEFAULT_LIMIT) -> List[str]:
    """Return up to ``limit`` distinct completions for ``prefix``.

    Tags match when they start with the prefix; titles match when they contain
    it anywhere. All tag hits come before title hits, each in first-seen order.
    """
    needle = normalize_query(prefix)
    if not needle or limit <= 0:
        return []

    documents = list(documents)
    seen: set[str] = set()
    suggestions: List[str] = []

    def _add(candidate: str) -> None:
        if candidate not in seen:
            seen.add(candidate)
            suggestions.append(candidate)

    for document in documents:
        for tag in document.tags:
            if tag.lower().startswith(needle):
                _add(tag)

    for document in documents:
        if needle in document.title.lower():
            _add(document.title)

    return suggestions[:limit]
