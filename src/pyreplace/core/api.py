"""
Main API module for pyreplace.

This module provides the SearchReplaceEngine class, the entry point for
programmatic use. Each engine owns its own file index, history and error
collector; there is no shared module-level engine, so independent sessions
(editor tabs, parallel tests) never see each other's state.

Example:
    >>> import asyncio
    >>> from pyreplace import ReplaceOptions, SearchOptions, SearchReplaceEngine
    >>>
    >>> engine = SearchReplaceEngine()
    >>> engine.index_files({"a.ts": {"content": "const x = 1;\\nconst y = 2;"}})
    1
    >>> summary = asyncio.run(engine.search(SearchOptions(query="const", whole_word=True)))
    >>> summary.total_results
    2
    >>> _ = asyncio.run(engine.replace(ReplaceOptions(query="const", replacement="let")))
    >>> engine.get_file_content("a.ts")
    'let x = 1;\\nlet y = 2;'
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping

from ..indexing.file_index import FileData, FileIndex
from ..search.replacer import ReplaceEngine
from ..search.searcher import ProgressCallback, SearchEngine
from ..utils.error_handling import ErrorCollector, create_error_report
from ..utils.logging_config import SearchLogger, get_logger
from .config import EngineConfig
from .history import HistoryStore
from .types import (
    FileIndexEntry,
    IndexStats,
    ReplaceOptions,
    ReplaceSummary,
    SearchOptions,
    SearchSummary,
)


class SearchReplaceEngine:
    """
    Multi-file search and replace over in-memory file snapshots.

    Batches (``search``/``replace``) are coroutines that yield between files;
    the engine never runs two batches at once. Index mutation is synchronous
    and must not be interleaved with an in-flight batch over the same files.

    Attributes:
        cfg (EngineConfig): Limits for the skip rule, history and previews
        index (FileIndex): Current file snapshots
        history (HistoryStore): Past searches and replacements
        logger (SearchLogger): Logging interface
        error_collector (ErrorCollector): Failures of the most recent batch
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        on_progress: ProgressCallback | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Engine configuration. If None, uses default configuration.
            on_progress: Called once per file scanned with a SearchProgress.
            logger: Custom logger instance. If None, uses default logger.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        self.cfg = config or EngineConfig()
        self.cfg.validate()
        self.logger = logger or get_logger()
        self.error_collector = ErrorCollector()
        self.index = FileIndex(self.cfg, self.logger)
        self.history = HistoryStore(self.cfg)
        self.searcher = SearchEngine(
            self.index,
            self.history,
            self.cfg,
            self.logger,
            self.error_collector,
            on_progress,
        )
        self.replacer = ReplaceEngine(
            self.index, self.history, self.searcher, self.logger, self.error_collector
        )
        self._batch_lock = asyncio.Lock()

    # Index management

    def index_files(self, files: Mapping[str, FileData]) -> int:
        """Replace the whole index; returns the number of files kept."""
        return self.index.index_files(files)

    def update_file_index(
        self, path: str, content: str, last_modified: int | None = None
    ) -> FileIndexEntry | None:
        return self.index.update_file_index(path, content, last_modified)

    def remove_file_index(self, path: str) -> None:
        self.index.remove_file_index(path)

    def should_skip_file(self, path: str, content: str) -> bool:
        return self.index.should_skip_file(path, content)

    def get_index_stats(self) -> IndexStats:
        return self.index.stats()

    def get_snapshot(self) -> Mapping[str, FileIndexEntry]:
        """Current file snapshots, for re-reading content after a replace."""
        return self.index.snapshot()

    def get_file_content(self, path: str) -> str | None:
        entry = self.index.get(path)
        return entry.content if entry is not None else None

    # Batches

    async def search(self, options: SearchOptions) -> SearchSummary:
        async with self._batch_lock:
            self.error_collector.clear()
            return await self.searcher.search(options)

    async def search_in_files(self, paths: Iterable[str], options: SearchOptions) -> SearchSummary:
        async with self._batch_lock:
            self.error_collector.clear()
            return await self.searcher.search_in_files(paths, options)

    async def quick_search(self, query: str, case_sensitive: bool = False) -> SearchSummary:
        async with self._batch_lock:
            self.error_collector.clear()
            return await self.searcher.quick_search(query, case_sensitive)

    async def replace(self, options: ReplaceOptions) -> ReplaceSummary:
        """
        Replace all matches of ``options``.

        Raises:
            EngineStateError: If called before any files were indexed
        """
        async with self._batch_lock:
            self.error_collector.clear()
            return await self.replacer.replace(options)

    def get_error_report(self) -> str:
        """Human-readable report of the failures of the most recent batch."""
        return create_error_report(self.error_collector)

    # History

    def get_search_history(self) -> list[SearchOptions]:
        return self.history.get_search_history()

    def get_replace_history(self) -> list[ReplaceOptions]:
        return self.history.get_replace_history()

    def clear_search_history(self) -> None:
        self.history.clear_search_history()

    def clear_replace_history(self) -> None:
        self.history.clear_replace_history()

    def get_suggestions(self, partial_query: str) -> list[str]:
        return self.history.get_suggestions(partial_query)
