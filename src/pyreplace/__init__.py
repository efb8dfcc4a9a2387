"""
pyreplace: In-process multi-file search and replace over in-memory file snapshots.

This package indexes a set of file snapshots supplied by an editor's virtual
file system, evaluates literal or regex queries against them and performs
ordered multi-match replacement across one or many files. It never touches
the disk: content comes in through ``index_files``/``update_file_index`` and
goes out through the replace summary and the index snapshot accessor.

Key Features:
    - **Literal and regex queries**: case-sensitive or not, whole-word matching
    - **Deterministic results**: files in index order, matches by line and column
    - **Previews and context**: adjacent lines and a window around long lines
    - **Glob filtering**: include/exclude patterns, exclude always wins
    - **Position-safe replacement**: matches applied last to first per file
    - **Partial failure**: a bad regex or a stale file never aborts a batch
    - **History**: bounded search/replace logs feeding query suggestions

Main Classes:
    SearchReplaceEngine: Caller-owned engine wiring index, search, replace and history
    EngineConfig: Skip rule, history and preview limits
    SearchOptions / ReplaceOptions: Query specification
    SearchSummary / ReplaceSummary: Batch results

Example Usage:
    >>> import asyncio
    >>> from pyreplace import SearchReplaceEngine, SearchOptions, ReplaceOptions
    >>>
    >>> engine = SearchReplaceEngine()
    >>> engine.index_files({"src/app.ts": {"content": "const a = 1;"}})
    1
    >>> summary = asyncio.run(engine.search(SearchOptions(query="const")))
    >>> [(r.line, r.column) for r in summary.results]
    [(1, 1)]
"""

from .core.api import SearchReplaceEngine
from .core.config import EngineConfig
from .core.history import HistoryStore
from .core.types import (
    FileIndexEntry,
    FileScan,
    IndexStats,
    ReplaceOptions,
    ReplaceResult,
    ReplaceSummary,
    SearchContext,
    SearchOptions,
    SearchProgress,
    SearchResult,
    SearchSummary,
)
from .indexing.file_index import FileIndex, should_skip_file
from .search.patterns import matches_pattern
from .utils.error_handling import (
    ConfigurationError,
    EngineStateError,
    FileNotIndexedError,
    PatternCompilationError,
    ReplacementApplicationError,
    SearchError,
    ValidationError,
)
from .utils.logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

# Package metadata
__version__ = "0.1.0"
__license__ = "MIT"
__description__ = "In-process multi-file search and replace engine over in-memory file snapshots"

# Public API
__all__ = [
    # Main classes
    "SearchReplaceEngine",
    "EngineConfig",
    "FileIndex",
    "HistoryStore",
    # Data types
    "FileIndexEntry",
    "FileScan",
    "IndexStats",
    "ReplaceOptions",
    "ReplaceResult",
    "ReplaceSummary",
    "SearchContext",
    "SearchOptions",
    "SearchProgress",
    "SearchResult",
    "SearchSummary",
    # Utility functions
    "matches_pattern",
    "should_skip_file",
    # Logging and configuration
    "configure_logging",
    "get_logger",
    "enable_debug_logging",
    "disable_logging",
    # Exception classes
    "SearchError",
    "ConfigurationError",
    "EngineStateError",
    "FileNotIndexedError",
    "PatternCompilationError",
    "ReplacementApplicationError",
    "ValidationError",
    # Package metadata
    "__version__",
    "__license__",
    "__description__",
]
