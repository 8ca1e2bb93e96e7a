"""Serializable search index for static client-side search."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List

from postfinder.index.inverted import InvertedIndex
from postfinder.models import Document, sort_by_recency

LOGGER = logging.getLogger(__name__)

INDEX_FILENAME = "search-index.json"


@dataclass(slots=True)
class SearchIndexPost:
    id: str
    title: str
    date: str
    tags: List[str]
    slug: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "tags": list(self.tags),
            "slug": self.slug,
        }


@dataclass(slots=True)
class SearchIndexSnapshot:
    posts: List[SearchIndexPost] = field(default_factory=list)
    inverted_index: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "posts": [post.to_dict() for post in self.posts],
            "invertedIndex": {token: list(ids) for token, ids in self.inverted_index.items()},
        }


def build_snapshot(documents: Iterable[Document], index: InvertedIndex) -> SearchIndexSnapshot:
    """Copy post metadata (newest first) and the full token mapping."""
    posts = [
        SearchIndexPost(
            id=document.id,
            title=document.title,
            date=document.published_at.strftime("%Y-%m-%d"),
            tags=list(document.tags),
            slug=document.slug,
        )
        for document in sort_by_recency(documents)
    ]
    return SearchIndexSnapshot(posts=posts, inverted_index=index.snapshot())


def write_snapshot(snapshot: SearchIndexSnapshot, dist_dir: Path) -> Path:
    """Write ``search-index.json`` into ``dist_dir`` and return its path."""
    dist_dir = Path(dist_dir)
    dist_dir.mkdir(parents=True, exist_ok=True)
    target = dist_dir / INDEX_FILENAME
    target.write_text(json.dumps(snapshot.to_dict(), indent=2), encoding="utf-8")
    LOGGER.info("Wrote search index with %d posts to %s", len(snapshot.posts), target)
    return target
