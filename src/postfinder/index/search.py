"""Query resolution over the inverted index."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from postfinder.index.cache import QueryCache
from postfinder.index.export import SearchIndexSnapshot, build_snapshot
from postfinder.index.inverted import InvertedIndex
from postfinder.index.suggest import DEFAULT_LIMIT, suggest
from postfinder.models import Document, DocumentCollection, sort_by_recency
from postfinder.utils.locks import ReadWriteLock
from postfinder.utils.text import intersection, normalize_query, tokenize

LOGGER = logging.getLogger(__name__)


def _match_tokens(words: Sequence[str], index: InvertedIndex) -> List[str]:
    candidates: set[str] = set()
    with index.reading() as view:
        for position, word in enumerate(words):
            postings = view.postings(word.lower())
            if position == 0:
                candidates = set(postings)
            else:
                candidates = intersection(candidates, postings)
            if not candidates:
                break
    return sorted(candidates)


def resolve(
    query: str,
    documents: DocumentCollection,
    index: InvertedIndex,
    cache: QueryCache,
) -> List[Document]:
    """Resolve ``query`` to documents, newest first.

    An exact tag match wins outright and is not cached. Otherwise every query
    word must appear in a document's title or body, and the resulting ids are
    cached under the normalized query.
    """
    normalized = normalize_query(query)
    if not normalized:
        return []

    cached = cache.get(normalized)
    if cached is not None:
        LOGGER.debug("Cache hit for %r", normalized)
        return sort_by_recency(documents.lookup(cached))

    tagged = [document for document in documents if document.has_tag(normalized)]
    if tagged:
        return sort_by_recency(tagged)

    ids = _match_tokens(tokenize(normalized), index)
    cache.put(normalized, ids)
    return sort_by_recency(documents.lookup(ids))


@dataclass(slots=True)
class SearchResult:
    id: str
    title: str
    slug: str
    date: str
    tags: List[str]

    @classmethod
    def from_document(cls, document: Document) -> "SearchResult":
        return cls(
            id=document.id,
            title=document.title,
            slug=document.slug,
            date=document.published_at.strftime("%Y-%m-%d"),
            tags=list(document.tags),
        )


class SearchEngine:
    """High-level API owning the collection, index and query cache."""

    def __init__(
        self,
        documents: Iterable[Document] = (),
        *,
        index: InvertedIndex | None = None,
        cache: QueryCache | None = None,
    ) -> None:
        self.index = index if index is not None else InvertedIndex()
        self.cache = cache if cache is not None else QueryCache()
        self._lock = ReadWriteLock()
        self.documents = DocumentCollection(documents)
        self.index.build(self.documents)

    def reload(self, documents: Iterable[Document]) -> None:
        """Replace the collection and rebuild the index from scratch.

        Cached query results are kept as they are and may go stale.
        """
        collection = DocumentCollection(documents)
        with self._lock.write_locked():
            self.index.build(collection)
            self.documents = collection
        if len(self.cache):
            LOGGER.warning(
                "Reloaded %d documents; %d cached queries were not invalidated",
                len(collection),
                len(self.cache),
            )

    def search(self, query: str) -> List[Document]:
        with self._lock.read_locked():
            return resolve(query, self.documents, self.index, self.cache)

    def posts(self) -> List[Document]:
        """Every post, newest first."""
        with self._lock.read_locked():
            return sort_by_recency(self.documents)

    def get_post(self, slug: str) -> Document | None:
        with self._lock.read_locked():
            return self.documents.by_slug(slug)

    def search_many(self, queries: Sequence[str], *, workers: int = 4) -> List[List[Document]]:
        """Resolve several queries on a bounded thread pool, preserving order."""
        if not queries:
            return []
        with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
            return list(pool.map(self.search, queries))

    def suggest(self, prefix: str, *, limit: int = DEFAULT_LIMIT) -> List[str]:
        with self._lock.read_locked():
            return suggest(prefix, self.documents, limit=limit)

    def export_snapshot(self) -> SearchIndexSnapshot:
        with self._lock.read_locked():
            return build_snapshot(self.documents, self.index)
