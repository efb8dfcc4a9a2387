"""
Query compilation and line matching for pyreplace.

Literal and regex queries share one code path: a literal query is escaped
(and optionally wrapped in word boundaries) and then handled exactly like a
regular expression. Matching is done line by line so every match has a
1-based (line, column) position within its file.

Functions:
    build_query_source: Regex source for the given search options
    compile_query: Compiled, cached pattern for the given search options
    find_line_matches: Every non-overlapping match in one line
    scan_file: Tagged per-file outcome (matches or failure reason)
    build_preview: Display window around a match

Example:
    >>> from pyreplace.core.types import SearchOptions
    >>> from pyreplace.search.matchers import compile_query, find_line_matches
    >>>
    >>> rx = compile_query(SearchOptions(query="a"))
    >>> [m.start_col for m in find_line_matches(rx, "aaa")]
    [0, 1, 2]
"""

from __future__ import annotations

from functools import lru_cache

import regex as regex_mod

from ..core.types import FileIndexEntry, FileScan, SearchOptions, TextMatch
from ..utils.error_handling import PatternCompilationError

ELLIPSIS = "..."


def build_query_source(options: SearchOptions) -> str:
    if options.use_regex:
        return options.query

    source = regex_mod.escape(options.query)
    if options.whole_word:
        source = rf"\b{source}\b"
    return source


@lru_cache(maxsize=64)
def _get_compiled_regex(source: str, flags: int) -> regex_mod.Pattern:
    return regex_mod.compile(source, flags=flags)


def compile_query(options: SearchOptions) -> regex_mod.Pattern:
    """
    Compile search options into a single matcher.

    Raises:
        PatternCompilationError: If a regex query is not a valid pattern
    """
    source = build_query_source(options)
    flags = 0 if options.case_sensitive else regex_mod.IGNORECASE
    try:
        return _get_compiled_regex(source, flags)
    except regex_mod.error as e:
        raise PatternCompilationError(f"Invalid regular expression: {e}", options.query) from e


def find_line_matches(pattern: regex_mod.Pattern, line: str, line_index: int = 0) -> list[TextMatch]:
    """Return every non-overlapping match in ``line``, left to right."""
    matches: list[TextMatch] = []
    pos = 0
    while pos <= len(line):
        m = pattern.search(line, pos)
        if m is None:
            break
        start, end = m.span()
        matches.append(TextMatch(line_index=line_index, start_col=start, end_col=end, text=m.group()))
        # a zero-width match must still move the cursor forward
        pos = end if end > start else end + 1
    return matches


def scan_file(entry: FileIndexEntry, options: SearchOptions) -> FileScan:
    """
    Scan one file snapshot.

    Matches come back ordered by (line ascending, column ascending). A query
    that cannot be compiled gives a failed scan instead of raising.
    """
    try:
        rx = compile_query(options)
    except PatternCompilationError as e:
        return FileScan.failure(entry.path, e.message)

    matches: list[TextMatch] = []
    for i, line in enumerate(entry.lines):
        matches.extend(find_line_matches(rx, line, i))
    return FileScan.success(entry.path, matches)


def build_preview(line: str, start: int, width: int = 100) -> str:
    """
    Return ``line`` if it fits in ``width`` characters, otherwise a window of
    ``width`` characters starting ``width // 2`` before the match, marked with
    "..." on each side that does not reach the end of the line.
    """
    if len(line) <= width:
        return line

    window_start = max(0, start - width // 2)
    window_end = min(len(line), window_start + width)
    prefix = ELLIPSIS if window_start > 0 else ""
    suffix = ELLIPSIS if window_end < len(line) else ""
    return f"{prefix}{line[window_start:window_end]}{suffix}"
