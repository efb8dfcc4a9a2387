"""
Search and replace algorithms.

- patterns: include/exclude glob filtering
- matchers: query compilation, line matching and previews
- searcher: SearchEngine producing SearchSummary results
- replacer: ReplaceEngine applying replacements in descending order
"""

from .matchers import build_preview, compile_query, find_line_matches, scan_file
from .patterns import get_files_to_search, glob_to_regex, matches_pattern
from .replacer import ReplaceEngine, line_start_offsets, splice_match
from .searcher import ProgressCallback, SearchEngine

__all__ = [
    "ProgressCallback",
    "ReplaceEngine",
    "SearchEngine",
    "build_preview",
    "compile_query",
    "find_line_matches",
    "get_files_to_search",
    "glob_to_regex",
    "line_start_offsets",
    "matches_pattern",
    "scan_file",
    "splice_match",
]
