"""
Core engine components for pyreplace.

- types: data model shared by every component
- config: EngineConfig limits and validation
- history: bounded search/replace history and suggestions
- api: the SearchReplaceEngine facade
"""

from .types import (
    FileIndexEntry,
    FileScan,
    HistoryEntry,
    IndexStats,
    ReplaceOptions,
    ReplaceResult,
    ReplaceSummary,
    SearchContext,
    SearchOptions,
    SearchProgress,
    SearchResult,
    SearchSummary,
    TextMatch,
)
from .config import EngineConfig
from .history import HistoryStore
from .api import SearchReplaceEngine

__all__ = [
    "EngineConfig",
    "FileIndexEntry",
    "FileScan",
    "HistoryEntry",
    "HistoryStore",
    "IndexStats",
    "ReplaceOptions",
    "ReplaceResult",
    "ReplaceSummary",
    "SearchContext",
    "SearchOptions",
    "SearchProgress",
    "SearchReplaceEngine",
    "SearchResult",
    "SearchSummary",
    "TextMatch",
]
