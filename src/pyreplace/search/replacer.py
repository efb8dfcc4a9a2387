"""
Replace engine for pyreplace.

Replacements are driven by a fresh search, grouped by file and applied from
the last match in a file to the first. Applying in descending (line, column)
order means every splice happens after all not-yet-applied matches, so their
offsets, computed from the file's original lines, stay valid without tracking
any cumulative shift.

Each match gets its own ReplaceResult; a match that cannot be applied (for
example because the file changed after it was searched) is reported as a
failure and the rest of the file is still processed.
"""

from __future__ import annotations

import asyncio
import time
from itertools import accumulate

from ..core.history import HistoryStore
from ..core.types import FileIndexEntry, ReplaceOptions, ReplaceResult, ReplaceSummary, SearchResult
from ..indexing.file_index import FileIndex
from ..utils.error_handling import (
    EngineStateError,
    ErrorCollector,
    FileNotIndexedError,
    ReplacementApplicationError,
    handle_file_error,
)
from ..utils.logging_config import SearchLogger, get_logger
from .searcher import SearchEngine


def line_start_offsets(lines: tuple[str, ...] | list[str]) -> list[int]:
    """Absolute 0-based offset of the first character of every line."""
    return [0, *accumulate(len(line) + 1 for line in lines[:-1])]


def splice_match(
    content: str,
    line_starts: list[int],
    result: SearchResult,
    replacement: str,
) -> str:
    """
    Replace one matched span of ``content``.

    Raises:
        ReplacementApplicationError: If the match position is out of range or
            the text found there is not the matched text
    """
    line_index = result.line - 1
    if not 0 <= line_index < len(line_starts):
        raise ReplacementApplicationError(
            f"Line {result.line} is out of range (file has {len(line_starts)} lines)",
            result.file,
            result.line,
        )

    start = line_starts[line_index] + result.column - 1
    end = start + len(result.match)
    if result.column < 1 or end > len(content):
        raise ReplacementApplicationError(
            f"Offset {start} is out of range for line {result.line}, column {result.column}",
            result.file,
            result.line,
            context={"offset": start, "length": len(content)},
        )

    if content[start:end] != result.match:
        raise ReplacementApplicationError(
            f"Text at line {result.line}, column {result.column} no longer matches "
            f"'{result.match}'",
            result.file,
            result.line,
            context={"expected": result.match, "found": content[start:end]},
        )

    return content[:start] + replacement + content[end:]


class ReplaceEngine:
    """Applies replacements located by a SearchEngine and commits them to the index."""

    def __init__(
        self,
        index: FileIndex,
        history: HistoryStore,
        searcher: SearchEngine,
        logger: SearchLogger | None = None,
        error_collector: ErrorCollector | None = None,
    ) -> None:
        self.index = index
        self.history = history
        self.searcher = searcher
        self.logger = logger or get_logger()
        self.error_collector = error_collector or ErrorCollector()

    async def replace(self, options: ReplaceOptions) -> ReplaceSummary:
        """
        Replace every match of ``options`` across the eligible files.

        Raises:
            EngineStateError: If no files were ever indexed
        """
        if not self.index.populated:
            raise EngineStateError("replace() called before any files were indexed")

        start = time.perf_counter()
        self.logger.log_replace_start(options.query, options.replacement)
        self.history.record_replace(options)

        summary = await self.searcher.search(options)

        by_file: dict[str, list[SearchResult]] = {}
        for result in summary.results:
            by_file.setdefault(result.file, []).append(result)

        results: list[ReplaceResult] = []
        errors: list[str] = []
        files_modified = 0

        for path, file_results in by_file.items():
            await asyncio.sleep(0)

            entry = self.index.get(path)
            if entry is None:
                error = handle_file_error(
                    path, "replace", FileNotIndexedError(path), self.error_collector, self.logger
                )
                errors.append(f"Failed to replace in {path}: {error.message}")
                continue

            content, file_outcomes = self._replace_in_entry(entry, file_results, options.replacement)
            results.extend(file_outcomes)

            if any(outcome.success for outcome in file_outcomes):
                self.index.update_file_index(path, content)
                files_modified += 1

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        total_replacements = sum(1 for r in results if r.success)

        self.logger.log_replace_complete(
            options.query, total_replacements, files_modified, elapsed_ms
        )

        return ReplaceSummary(
            query=options.query,
            replacement=options.replacement,
            total_replacements=total_replacements,
            total_files=files_modified,
            duration_ms=elapsed_ms,
            results=tuple(results),
            errors=tuple(errors),
        )

    def _replace_in_entry(
        self,
        entry: FileIndexEntry,
        file_results: list[SearchResult],
        replacement: str,
    ) -> tuple[str, list[ReplaceResult]]:
        line_starts = line_start_offsets(entry.lines)
        content = entry.content
        outcomes: list[ReplaceResult] = []

        ordered = sorted(file_results, key=lambda r: (r.line, r.column), reverse=True)
        for result in ordered:
            try:
                content = splice_match(content, line_starts, result, replacement)
            except ReplacementApplicationError as e:
                handle_file_error(entry.path, "replace", e, self.error_collector, self.logger)
                outcomes.append(_outcome(result, replacement, error=e.message))
                continue
            outcomes.append(_outcome(result, replacement))

        return content, outcomes


def _outcome(result: SearchResult, replacement: str, error: str | None = None) -> ReplaceResult:
    return ReplaceResult(
        file=result.file,
        line=result.line,
        column=result.column,
        original_text=result.match,
        new_text=replacement,
        success=error is None,
        error=error,
    )
