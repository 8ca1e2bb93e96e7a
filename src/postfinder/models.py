"""Core PostFinder data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator, List, Tuple

# Posts without a date sort after every dated post
UNDATED = datetime(1970, 1, 1)


@dataclass(frozen=True, slots=True)
class Document:
    """A single blog post as seen by the search subsystem."""

    id: str
    title: str
    body: str
    tags: Tuple[str, ...] = ()
    published_at: datetime = UNDATED
    slug: str = ""

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "tags", tuple(self.tags))
        if not self.slug:
            object.__setattr__(self, "slug", self.id)

    def has_tag(self, normalized: str) -> bool:
        return any(tag.lower() == normalized for tag in self.tags)


def sort_by_recency(documents: Iterable[Document]) -> List[Document]:
    """Newest first; equal timestamps fall back to ascending id."""
    by_id = sorted(documents, key=lambda doc: doc.id)
    return sorted(by_id, key=lambda doc: doc.published_at, reverse=True)


class DocumentCollection:
    """Ordered, read-only mapping of document id to :class:`Document`."""

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self._documents: dict[str, Document] = {}
        for document in documents:
            if document.id in self._documents:
                raise ValueError(f"Duplicate document id: {document.id}")
            self._documents[document.id] = document

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._documents

    def get(self, doc_id: str) -> Document | None:
        return self._documents.get(doc_id)

    def by_slug(self, slug: str) -> Document | None:
        return next((doc for doc in self._documents.values() if doc.slug == slug), None)

    def lookup(self, ids: Iterable[str]) -> List[Document]:
        """Map ids back to documents, silently dropping unknown ids."""
        return [self._documents[doc_id] for doc_id in ids if doc_id in self._documents]
