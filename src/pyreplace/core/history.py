"""
Search and replace history for pyreplace.

Two independent bounded logs, most recent first. When a log is full the
oldest entry is dropped. Both logs feed query suggestions.

Example:
    >>> from pyreplace.core.history import HistoryStore
    >>> from pyreplace.core.types import SearchOptions
    >>>
    >>> history = HistoryStore()
    >>> history.record_search(SearchOptions(query="useState"))
    >>> history.get_suggestions("state")
    ['useState']
"""

from __future__ import annotations

import dataclasses
import heapq
import itertools
import time
from collections import deque

from .config import EngineConfig
from .types import HistoryEntry, ReplaceOptions, SearchOptions


class HistoryStore:
    """Bounded most-recent-first logs of searches and replacements."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.cfg = config or EngineConfig()
        self.max_entries = self.cfg.history_limit
        self._searches: deque[HistoryEntry] = deque(maxlen=self.max_entries)
        self._replaces: deque[HistoryEntry] = deque(maxlen=self.max_entries)
        # shared across both logs so suggestions can be ordered by recency
        self._sequence = itertools.count()

    def _entry(self, options: SearchOptions) -> HistoryEntry:
        return HistoryEntry(
            options=dataclasses.replace(options),
            sequence=next(self._sequence),
            timestamp=time.time(),
        )

    def record_search(self, options: SearchOptions) -> None:
        self._searches.appendleft(self._entry(options))

    def record_replace(self, options: ReplaceOptions) -> None:
        self._replaces.appendleft(self._entry(options))

    def get_search_history(self) -> list[SearchOptions]:
        return [entry.options for entry in self._searches]

    def get_replace_history(self) -> list[ReplaceOptions]:
        return [entry.options for entry in self._replaces]  # type: ignore[misc]

    def clear_search_history(self) -> None:
        self._searches.clear()

    def clear_replace_history(self) -> None:
        self._replaces.clear()

    def get_suggestions(self, partial_query: str, limit: int | None = None) -> list[str]:
        """
        Past queries containing ``partial_query`` (case-insensitive).

        Queries are de-duplicated and ordered by when they were last used,
        across both the search and the replace log.
        """
        if limit is None:
            limit = self.cfg.suggestion_limit
        if limit <= 0:
            return []
        needle = partial_query.lower()

        suggestions: list[str] = []
        seen: set[str] = set()
        newest_first = heapq.merge(
            self._searches, self._replaces, key=lambda e: e.sequence, reverse=True
        )
        for entry in newest_first:
            query = entry.options.query
            if query in seen or needle not in query.lower():
                continue
            seen.add(query)
            suggestions.append(query)
            if len(suggestions) >= limit:
                break
        return suggestions

    def __len__(self) -> int:
        return len(self._searches) + len(self._replaces)
