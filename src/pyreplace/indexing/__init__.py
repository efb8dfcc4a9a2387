"""
File indexing for pyreplace.

- file_index: immutable per-file snapshots and the skip rule
"""

from .file_index import FileIndex, should_skip_file

__all__ = ["FileIndex", "should_skip_file"]
