"""Publish search indexes to concurrent readers."""

from __future__ import annotations

import logging
import threading
from typing import List, Sequence, Tuple

from modelsift.index.search import SearchIndex

LOGGER = logging.getLogger(__name__)


class IndexHandle:
    """Holds the currently published :class:`SearchIndex` and its corpus.

    ``rebuild`` builds a new index off to the side and swaps it in with one
    reference assignment, so readers only ever see a complete index.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state: Tuple[SearchIndex, Tuple[str, ...]] = (SearchIndex(), ())

    @property
    def current(self) -> SearchIndex:
        return self._state[0]

    def snapshot(self) -> Tuple[SearchIndex, Tuple[str, ...]]:
        """Return the published index together with the corpus it was built on."""
        return self._state

    def rebuild(self, corpus: Sequence[str]) -> SearchIndex:
        """Build and publish an index over ``corpus``.

        Rebuilds are serialized, so they publish in the order they were
        called. Readers never take the lock.
        """
        with self._lock:
            entries = tuple(corpus)
            index = SearchIndex()
            index.build(entries)
            self._state = (index, entries)
        LOGGER.info("Published search index over %d entries", len(entries))
        return index

    def search(self, query: str) -> List[int]:
        return self.current.search(query)

    def search_prefix(self, query: str) -> List[int]:
        return self.current.search_prefix(query)

    def suggest(self, prefix: str, limit: int = 10) -> List[str]:
        return self.current.suggest(prefix, limit)
