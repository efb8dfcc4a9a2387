"""Tests for pyreplace.search.patterns module."""

from __future__ import annotations

from pyreplace.core.types import SearchOptions
from pyreplace.indexing.file_index import FileIndex
from pyreplace.search.patterns import (
    get_files_to_search,
    glob_to_regex,
    is_eligible,
    matches_pattern,
)


class TestGlobToRegex:
    def test_translation(self):
        assert glob_to_regex("*.ts") == r".*\.ts"
        assert glob_to_regex("src/?.js") == r"src/.\.js"


class TestMatchesPattern:
    def test_star_crosses_separators(self):
        assert matches_pattern("src/deep/nested/app.ts", "src/*.ts") is True

    def test_question_mark_is_one_character(self):
        assert matches_pattern("a1.ts", "a?.ts") is True
        assert matches_pattern("a.ts", "a?.ts") is False

    def test_dot_is_literal(self):
        assert matches_pattern("appxts", "app.ts") is False
        assert matches_pattern("app.ts", "app.ts") is True

    def test_case_insensitive(self):
        assert matches_pattern("SRC/App.TS", "src/*.ts") is True

    def test_unanchored(self):
        assert matches_pattern("src/app.tsx", "*.ts") is True
        assert matches_pattern("lib/src/app.ts", "src/") is True

    def test_invalid_glob_matches_nothing(self):
        assert matches_pattern("a[b.ts", "a[b") is False


class TestEligibility:
    def test_no_patterns_means_everything(self):
        assert is_eligible("anything.txt", SearchOptions(query="x")) is True

    def test_include_required(self):
        options = SearchOptions(query="x", include_patterns=["*.ts"])
        assert is_eligible("a.ts", options) is True
        assert is_eligible("a.md", options) is False

    def test_exclude_wins_over_include(self):
        options = SearchOptions(query="x", include_patterns=["*.ts"], exclude_patterns=["*.test.ts"])
        assert is_eligible("app.test.ts", options) is False
        assert is_eligible("app.ts", options) is True

    def test_get_files_to_search_keeps_index_order(self, quiet_logger):
        index = FileIndex(logger=quiet_logger)
        index.index_files({"b.ts": "b", "a.md": "a", "a.ts": "a"})
        options = SearchOptions(query="x", include_patterns=["*.ts"])
        assert [e.path for e in get_files_to_search(index, options)] == ["b.ts", "a.ts"]
