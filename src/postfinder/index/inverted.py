"""In-memory inverted index from token to document ids."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, FrozenSet, Iterable, Iterator, List, Set

from postfinder.models import Document
from postfinder.utils.locks import ReadWriteLock
from postfinder.utils.text import tokenize

LOGGER = logging.getLogger(__name__)

_EMPTY: FrozenSet[str] = frozenset()


def _document_tokens(document: Document) -> Set[str]:
    return {token.lower() for token in tokenize(document.title + " " + document.body)}


class IndexView:
    """Read access to postings while the caller holds the index read lock."""

    def __init__(self, postings: Dict[str, Set[str]]) -> None:
        self._postings = postings

    def postings(self, token: str) -> FrozenSet[str]:
        ids = self._postings.get(token)
        return frozenset(ids) if ids else _EMPTY


class InvertedIndex:
    """Token to posting-list mapping, rebuilt wholesale from a collection.

    Lookups share a read lock; :meth:`build` takes the write lock so no query
    ever observes a half-built index.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._postings: Dict[str, Set[str]] = {}
        self._document_count = 0

    def build(self, documents: Iterable[Document]) -> None:
        """Replace the whole index with postings for ``documents``."""
        postings: Dict[str, Set[str]] = {}
        count = 0
        with self._lock.write_locked():
            for document in documents:
                count += 1
                for token in _document_tokens(document):
                    postings.setdefault(token, set()).add(document.id)
            self._postings = postings
            self._document_count = count
        LOGGER.info("Indexed %d documents, %d distinct tokens", count, len(postings))

    @contextmanager
    def reading(self) -> Iterator[IndexView]:
        with self._lock.read_locked():
            yield IndexView(self._postings)

    def postings(self, token: str) -> FrozenSet[str]:
        """Document ids containing ``token``; empty when the token is unseen."""
        with self.reading() as view:
            return view.postings(token)

    def snapshot(self) -> Dict[str, List[str]]:
        """Deep copy of the mapping with ids sorted for stable output."""
        with self._lock.read_locked():
            return {token: sorted(ids) for token, ids in sorted(self._postings.items())}

    @property
    def document_count(self) -> int:
        return self._document_count

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._postings)

    def __contains__(self, token: object) -> bool:
        with self._lock.read_locked():
            return token in self._postings
