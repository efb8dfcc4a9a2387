"""
Include/exclude file filtering for pyreplace.

Globs are simplified wildcards: ``*`` matches any run of characters (path
separators included, there is no ``**`` distinction) and ``?`` matches exactly
one character. Matching is case-insensitive and unanchored, so ``*.ts``
selects any path containing ``.ts``.
"""

from __future__ import annotations

from functools import lru_cache

import regex as regex_mod

from ..core.types import FileIndexEntry, SearchOptions
from ..indexing.file_index import FileIndex
from ..utils.logging_config import get_logger


def glob_to_regex(glob: str) -> str:
    """Translate a glob into regex source: ``.`` is escaped, ``*`` -> ``.*``, ``?`` -> ``.``."""
    return glob.replace(".", r"\.").replace("*", ".*").replace("?", ".")


@lru_cache(maxsize=256)
def _compile_glob(glob: str) -> regex_mod.Pattern | None:
    try:
        return regex_mod.compile(glob_to_regex(glob), flags=regex_mod.IGNORECASE)
    except regex_mod.error as e:
        get_logger().debug(f"Ignoring invalid glob pattern '{glob}': {e}")
        return None


def matches_pattern(path: str, glob: str) -> bool:
    """Return True if ``path`` matches ``glob``; an uncompilable glob matches nothing."""
    rx = _compile_glob(glob)
    return rx is not None and rx.search(path) is not None


def matches_any(path: str, globs: tuple[str, ...] | list[str]) -> bool:
    return any(matches_pattern(path, glob) for glob in globs)


def is_eligible(path: str, options: SearchOptions) -> bool:
    """Includes gate the file in (when given); any matching exclude always wins."""
    if options.include_patterns and not matches_any(path, options.include_patterns):
        return False
    return not matches_any(path, options.exclude_patterns)


def get_files_to_search(index: FileIndex, options: SearchOptions) -> list[FileIndexEntry]:
    """Entries eligible for ``options``, in index insertion order."""
    return [entry for entry in index if is_eligible(entry.path, options)]
