"""Post loading pipeline feeding the search engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from postfinder.index.search import SearchEngine
from postfinder.ingestion.markdown_loader import PostParseError, load_post
from postfinder.models import Document
from postfinder.utils.files import iter_markdown_paths

LOGGER = logging.getLogger(__name__)


def find_posts(paths: Sequence[Path]) -> list[Path]:
    """Find all markdown files under the given paths."""
    return list(iter_markdown_paths(paths))


@dataclass(slots=True)
class LoadStats:
    loaded: int = 0
    skipped: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path) -> None:
        if status == "loaded":
            self.loaded += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


class Indexer:
    """Loads posts from disk and rebuilds the engine from them."""

    def __init__(self, engine: SearchEngine) -> None:
        self.engine = engine

    def load(self, paths: Sequence[Path]) -> tuple[List[Document], LoadStats]:
        """Parse every post under ``paths``; bad files are logged and skipped."""
        stats = LoadStats()
        documents: List[Document] = []
        seen: set[str] = set()

        post_files = find_posts(paths)
        if not post_files:
            LOGGER.warning("No markdown posts found")
            return documents, stats

        for path in post_files:
            try:
                document = load_post(path)
            except PostParseError as exc:
                LOGGER.error("Error parsing post %s: %s", path, exc)
                stats.increment("failed", path)
                continue

            if document.id in seen:
                LOGGER.warning("Skipping %s: duplicate post id %r", path, document.id)
                stats.increment("skipped", path)
                continue

            seen.add(document.id)
            documents.append(document)
            stats.increment("loaded", path)
            LOGGER.debug("Loaded %s", path)

        return documents, stats

    def index(self, paths: Sequence[Path]) -> LoadStats:
        """Load posts under ``paths`` and replace the engine's collection."""
        documents, stats = self.load(paths)
        self.engine.reload(documents)
        return stats


def build_engine(paths: Sequence[Path]) -> tuple[SearchEngine, LoadStats]:
    """Create a fully indexed engine for the posts under ``paths``."""
    engine = SearchEngine()
    stats = Indexer(engine).index(paths)
    return engine, stats
