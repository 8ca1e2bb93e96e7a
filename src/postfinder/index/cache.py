"""Memoized query results keyed by normalized query."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, Optional, Tuple


class QueryCache:
    """Unbounded map of normalized query to resolved document ids.

    Entries are never evicted or invalidated. Values are stored as tuples and
    only ever replaced whole, so readers never see a partially written list.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[str, ...]] = {}
        self._write_lock = threading.Lock()

    def get(self, query: str) -> Optional[Tuple[str, ...]]:
        return self._entries.get(query)

    def put(self, query: str, ids: Iterable[str]) -> None:
        value = tuple(ids)
        with self._write_lock:
            self._entries[query] = value

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, query: object) -> bool:
        return query in self._entries
