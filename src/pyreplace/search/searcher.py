"""
Search engine for pyreplace.

Runs a compiled query over every eligible file of the index and returns a
positional (not ranked) SearchSummary. A file whose scan fails contributes no
results and is recorded in the error collector; the batch always completes.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Iterable

from ..core.config import EngineConfig
from ..core.history import HistoryStore
from ..core.types import (
    FileIndexEntry,
    SearchContext,
    SearchOptions,
    SearchProgress,
    SearchResult,
    SearchSummary,
    TextMatch,
)
from ..indexing.file_index import FileIndex
from ..utils.error_handling import ErrorCollector, PatternCompilationError, handle_file_error
from ..utils.logging_config import SearchLogger, get_logger
from .matchers import build_preview, scan_file
from .patterns import get_files_to_search

ProgressCallback = Callable[[SearchProgress], None]


class SearchEngine:
    """
    Evaluates search options against a FileIndex.

    Attributes:
        index: The file index to search
        history: History store every search is recorded into
        cfg: Engine configuration (preview width, quick-search defaults)
        on_progress: Optional callback invoked once per file scanned
    """

    def __init__(
        self,
        index: FileIndex,
        history: HistoryStore,
        config: EngineConfig | None = None,
        logger: SearchLogger | None = None,
        error_collector: ErrorCollector | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.index = index
        self.history = history
        self.cfg = config or EngineConfig()
        self.logger = logger or get_logger()
        self.error_collector = error_collector or ErrorCollector()
        self.on_progress = on_progress

    async def search(self, options: SearchOptions) -> SearchSummary:
        """
        Search every eligible file, in index order.

        Results are ordered by file, then line, then column, and stop at
        ``options.max_results``; ``has_more`` is set when that cap was reached.
        """
        start = time.perf_counter()
        self.history.record_search(options)

        files = get_files_to_search(self.index, options)
        self.logger.log_search_start(options.query, len(files))

        cap = options.result_cap
        results: list[SearchResult] = []
        files_with_results: set[str] = set()

        for current, entry in enumerate(files, start=1):
            if cap is not None and len(results) >= cap:
                break

            self._report_progress(SearchProgress(current=current, total=len(files), file=entry.path))
            await asyncio.sleep(0)

            scan = scan_file(entry, options)
            if not scan.ok:
                handle_file_error(
                    entry.path,
                    "search",
                    PatternCompilationError(scan.error or "", options.query, file_path=entry.path),
                    self.error_collector,
                    self.logger,
                )
                continue

            for match in scan.matches:
                if cap is not None and len(results) >= cap:
                    break
                results.append(self._build_result(entry, match))
                files_with_results.add(entry.path)

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        has_more = cap is not None and len(results) >= cap

        self.logger.log_search_complete(
            options.query, len(results), len(files_with_results), elapsed_ms
        )

        return SearchSummary(
            query=options.query,
            total_results=len(results),
            total_files=len(files_with_results),
            duration_ms=elapsed_ms,
            results=tuple(results),
            has_more=has_more,
        )

    async def search_in_files(self, paths: Iterable[str], options: SearchOptions) -> SearchSummary:
        """Search only the given paths; they become the include patterns and excludes are dropped."""
        scoped = SearchOptions(
            query=options.query,
            case_sensitive=options.case_sensitive,
            whole_word=options.whole_word,
            use_regex=options.use_regex,
            include_patterns=tuple(paths),
            exclude_patterns=(),
            max_results=options.max_results,
        )
        return await self.search(scoped)

    async def quick_search(self, query: str, case_sensitive: bool = False) -> SearchSummary:
        """Literal search with the default vendored-directory excludes and result cap."""
        options = SearchOptions(
            query=query,
            case_sensitive=case_sensitive,
            exclude_patterns=tuple(self.cfg.quick_search_excludes),
            max_results=self.cfg.quick_search_max_results,
        )
        return await self.search(options)

    def _report_progress(self, progress: SearchProgress) -> None:
        if self.on_progress is None:
            return
        try:
            self.on_progress(progress)
        except Exception as e:
            self.logger.warning(f"Progress callback failed on {progress.file}: {e}")
            self.error_collector.add_error(e, file_path=progress.file)

    def _build_result(self, entry: FileIndexEntry, match: TextMatch) -> SearchResult:
        lines = entry.lines
        li = match.line_index
        line = lines[li]
        return SearchResult(
            file=entry.path,
            line=li + 1,
            column=match.start_col + 1,
            text=line,
            match=match.text,
            context=SearchContext(
                before=lines[li - 1] if li > 0 else "",
                after=lines[li + 1] if li < len(lines) - 1 else "",
            ),
            preview=build_preview(line, match.start_col, self.cfg.preview_width),
        )
