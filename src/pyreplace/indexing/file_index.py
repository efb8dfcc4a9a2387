"""
In-memory file index for pyreplace.

The index holds one immutable FileIndexEntry per searchable file. Entries are
swapped wholesale on update, so a reader holding an entry never observes a
half-written file. Files failing the skip rule (binary extension, oversized
content, vendored or generated directory) are never stored.

Example:
    >>> from pyreplace.indexing.file_index import FileIndex
    >>>
    >>> index = FileIndex()
    >>> index.index_files({"a.ts": {"content": "const x = 1;"}})
    1
    >>> index.get("a.ts").lines
    ('const x = 1;',)
"""

from __future__ import annotations

import time
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from ..core.config import EngineConfig
from ..core.types import FileIndexEntry, IndexStats
from ..utils.logging_config import SearchLogger, get_logger

FileData = Mapping[str, Any] | str


def should_skip_file(path: str, content: str, config: EngineConfig | None = None) -> bool:
    """
    Decide whether a file is excluded from indexing and search.

    Pure and total: the same inputs always give the same answer and nothing
    is raised.

    Args:
        path: File path as supplied by the caller
        content: File content
        config: Engine configuration providing the denylists and size limit

    Returns:
        True if the file must not be indexed
    """
    cfg = config or EngineConfig()

    lowered = path.lower()
    if any(lowered.endswith(ext) for ext in cfg.binary_extensions):
        return True

    if len(content) > cfg.max_file_chars:
        return True

    return any(fragment in path for fragment in cfg.ignored_path_fragments)


def _unpack(data: FileData) -> tuple[str, int | None]:
    if isinstance(data, str):
        return data, None
    content = data.get("content", "")
    last_modified = data.get("lastModified", data.get("last_modified"))
    return content, last_modified


class FileIndex:
    """
    Ordered mapping of path to FileIndexEntry.

    Insertion order is preserved and is the order in which search visits files.
    Mutation is synchronous; interleaving it with an in-flight search or
    replace over the same files is the caller's responsibility.
    """

    def __init__(self, config: EngineConfig | None = None, logger: SearchLogger | None = None):
        self.cfg = config or EngineConfig()
        self.logger = logger or get_logger()
        self._entries: dict[str, FileIndexEntry] = {}
        self._populated = False

    @property
    def populated(self) -> bool:
        """True once files have been supplied through index_files or update_file_index."""
        return self._populated

    def should_skip_file(self, path: str, content: str) -> bool:
        return should_skip_file(path, content, self.cfg)

    def index_files(self, files: Mapping[str, FileData]) -> int:
        """
        Replace the whole index with the given files.

        Args:
            files: Mapping of path to ``{"content": str, "lastModified": epoch_ms}``
                (``lastModified`` is optional; a bare string is taken as content)

        Returns:
            Number of files stored after applying the skip rule
        """
        start = time.perf_counter()
        entries: dict[str, FileIndexEntry] = {}
        for path, data in files.items():
            content, last_modified = _unpack(data)
            if self.should_skip_file(path, content):
                self.logger.debug(f"Skipping file: {path}")
                continue
            entries[path] = FileIndexEntry.from_content(path, content, last_modified)

        self._entries = entries
        self._populated = True

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.logger.log_indexing_stats(len(files), len(entries), elapsed_ms)
        return len(entries)

    def update_file_index(
        self, path: str, content: str, last_modified: int | None = None
    ) -> FileIndexEntry | None:
        """
        Swap in a new snapshot for one file.

        A file whose new content fails the skip rule is evicted instead.

        Returns:
            The stored entry, or None if the file was evicted
        """
        self._populated = True
        if self.should_skip_file(path, content):
            if self._entries.pop(path, None) is not None:
                self.logger.debug(f"Evicted file failing skip rule: {path}")
            return None

        entry = FileIndexEntry.from_content(path, content, last_modified)
        self._entries[path] = entry
        return entry

    def remove_file_index(self, path: str) -> None:
        self._entries.pop(path, None)

    def clear(self) -> None:
        self._entries = {}

    def get(self, path: str) -> FileIndexEntry | None:
        return self._entries.get(path)

    def paths(self) -> list[str]:
        return list(self._entries)

    def entries(self) -> list[FileIndexEntry]:
        return list(self._entries.values())

    def snapshot(self) -> Mapping[str, FileIndexEntry]:
        """Read-only view of the current entries, detached from later mutation."""
        return MappingProxyType(dict(self._entries))

    def stats(self) -> IndexStats:
        total_lines = 0
        total_size = 0
        last_indexed = 0
        for entry in self._entries.values():
            total_lines += len(entry.lines)
            total_size += len(entry.content)
            last_indexed = max(last_indexed, entry.last_modified)

        return IndexStats(
            total_files=len(self._entries),
            total_lines=total_lines,
            total_size=total_size,
            last_indexed=last_indexed,
        )

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FileIndexEntry]:
        return iter(list(self._entries.values()))
