"""In-memory catalog search with token prefix lookups and autosuggest."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from modelsift.utils.text import iter_tokens

LOGGER = logging.getLogger(__name__)


class SearchIndex:
    """Search over one flat, ordered list of display strings.

    Positions returned by the query methods refer to the corpus passed to the
    most recent :meth:`build`. The instance is not thread-safe; see
    :class:`modelsift.index.handle.IndexHandle` for sharing between threads.
    """

    def __init__(self) -> None:
        self._entries: List[str] = []
        # token -> document indexes; dicts keep first-occurrence order.
        self._postings: Dict[str, Dict[int, None]] = {}
        self._ready = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def vocabulary_size(self) -> int:
        return len(self._postings)

    def __len__(self) -> int:
        return len(self._entries)

    def build(self, corpus: Sequence[str]) -> None:
        """Index ``corpus``, discarding everything indexed before."""
        entries = [text.lower() for text in corpus]
        postings: Dict[str, Dict[int, None]] = {}
        for position, text in enumerate(entries):
            for token in iter_tokens(text):
                postings.setdefault(token, {})[position] = None

        self._entries = entries
        self._postings = postings
        self._ready = True
        LOGGER.debug("Indexed %d entries, %d distinct tokens", len(entries), len(postings))

    def search(self, query: str) -> List[int]:
        """Indexes of entries containing ``query`` anywhere, case-insensitively."""
        if not self._ready or not query:
            return []
        needle = query.lower()
        return [position for position, text in enumerate(self._entries) if needle in text]

    def search_prefix(self, query: str) -> List[int]:
        """Indexes of entries having a token that starts with ``query``."""
        if not self._ready or not query:
            return []
        prefix = query.lower()
        matches: set[int] = set()
        for token, positions in self._postings.items():
            if token.startswith(prefix):
                matches.update(positions)
        return sorted(matches)

    def suggest(self, prefix: str, limit: int = 10) -> List[str]:
        """Distinct tokens starting with ``prefix`` in first-occurrence order."""
        if not self._ready or limit <= 0:
            return []
        needle = prefix.lower()
        suggestions: List[str] = []
        for token in self._postings:
            if token.startswith(needle):
                suggestions.append(token)
                if len(suggestions) >= limit:
                    break
        return suggestions
