"""
Core type definitions for pyreplace.

This module contains the data classes shared by the file index, the search
engine, the replace engine and the history store.

Key Types:
    FileIndexEntry: Immutable snapshot of one indexed file
    SearchOptions: Search query specification
    ReplaceOptions: Search options plus the replacement text
    SearchResult: One located match with context and preview
    SearchSummary: Ordered, bounded results of a search batch
    ReplaceResult: Outcome of applying one match
    ReplaceSummary: Aggregated outcome of a replace batch
    FileScan: Tagged per-file scan outcome (matches or failure reason)

Result and entry types are frozen and hold tuples, so a list handed back to a
caller can never change underneath it.

Example:
    >>> from pyreplace.core.types import SearchOptions, ReplaceOptions
    >>>
    >>> options = SearchOptions(query="const", whole_word=True)
    >>> replace = ReplaceOptions(query="const", whole_word=True, replacement="let")
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..utils.error_handling import ValidationError


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class FileIndexEntry:
    """
    Immutable snapshot of a searchable file.

    Attributes:
        path: Forward-slash separated path, as supplied by the caller
        content: Full file content
        lines: Content split on "\\n", computed once per snapshot
        last_modified: Epoch milliseconds of the snapshot
    """

    path: str
    content: str
    lines: tuple[str, ...]
    last_modified: int

    @classmethod
    def from_content(
        cls, path: str, content: str, last_modified: int | None = None
    ) -> FileIndexEntry:
        return cls(
            path=path,
            content=content,
            lines=tuple(content.split("\n")),
            last_modified=last_modified if last_modified is not None else now_ms(),
        )


def _as_patterns(patterns: Iterable[str] | str | None) -> tuple[str, ...]:
    if patterns is None:
        return ()
    if isinstance(patterns, str):
        return (patterns,)
    return tuple(patterns)


@dataclass(slots=True)
class SearchOptions:
    r"""
    Search query specification.

    Attributes:
        query: Text or regular expression to look for
        case_sensitive: Match case exactly when True
        whole_word: Wrap a literal query in word boundaries
        use_regex: Interpret the query as a regular expression
        include_patterns: Globs a file must match at least one of (empty = all)
        exclude_patterns: Globs that remove a file from the search
        max_results: Result cap; None or 0 means unbounded

    Examples:
        >>> SearchOptions(query="TODO")
        >>> SearchOptions(query=r"def \w+", use_regex=True, include_patterns=["*.py"])
    """

    query: str
    case_sensitive: bool = False
    whole_word: bool = False
    use_regex: bool = False
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    max_results: int | None = None

    def __post_init__(self) -> None:
        self.include_patterns = _as_patterns(self.include_patterns)
        self.exclude_patterns = _as_patterns(self.exclude_patterns)
        if self.max_results is not None and self.max_results < 0:
            raise ValidationError(
                "max_results must not be negative",
                context={"field": "max_results", "value": self.max_results},
            )

    @property
    def result_cap(self) -> int | None:
        """Effective cap, with 0 treated as no cap."""
        return self.max_results or None


@dataclass(slots=True)
class ReplaceOptions(SearchOptions):
    """
    Replace specification.

    ``replacement`` is inserted literally. ``confirm_each`` is carried for the
    interactive layer, which confirms matches before handing them to the engine.
    """

    replacement: str = ""
    confirm_each: bool = False


@dataclass(frozen=True, slots=True)
class SearchContext:
    before: str = ""
    after: str = ""


@dataclass(frozen=True, slots=True)
class SearchResult:
    """
    One match located in one line of one file.

    Attributes:
        file: Path of the file containing the match
        line: 1-based line number
        column: 1-based column of the first matched character
        text: The full line
        match: The matched substring
        context: Adjacent lines ("" at file boundaries)
        preview: The line, or a window around the match for long lines
    """

    file: str
    line: int
    column: int
    text: str
    match: str
    context: SearchContext = field(default_factory=SearchContext)
    preview: str = ""


@dataclass(frozen=True, slots=True)
class SearchSummary:
    query: str
    total_results: int
    total_files: int
    duration_ms: float
    results: tuple[SearchResult, ...] = ()
    has_more: bool = False


@dataclass(frozen=True, slots=True)
class ReplaceResult:
    file: str
    line: int
    column: int
    original_text: str
    new_text: str
    success: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class ReplaceSummary:
    query: str
    replacement: str
    total_replacements: int
    total_files: int
    duration_ms: float
    results: tuple[ReplaceResult, ...] = ()
    errors: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SearchProgress:
    """Progress of a search batch: ``current`` of ``total`` files, 1-based."""

    current: int
    total: int
    file: str


@dataclass(frozen=True, slots=True)
class TextMatch:
    line_index: int
    start_col: int
    end_col: int
    text: str


@dataclass(frozen=True, slots=True)
class FileScan:
    """Outcome of scanning one file: its matches, or the reason it failed."""

    path: str
    matches: tuple[TextMatch, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, path: str, matches: Iterable[TextMatch]) -> FileScan:
        return cls(path=path, matches=tuple(matches))

    @classmethod
    def failure(cls, path: str, reason: str) -> FileScan:
        return cls(path=path, error=reason)


@dataclass(frozen=True, slots=True)
class IndexStats:
    total_files: int = 0
    total_lines: int = 0
    total_size: int = 0
    last_indexed: int = 0


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    options: SearchOptions
    sequence: int
    timestamp: float
