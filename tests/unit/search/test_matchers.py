"""Tests for pyreplace.search.matchers module."""

from __future__ import annotations

import pytest

from pyreplace.core.types import FileIndexEntry, SearchOptions
from pyreplace.search.matchers import (
    build_preview,
    build_query_source,
    compile_query,
    find_line_matches,
    scan_file,
)
from pyreplace.utils.error_handling import PatternCompilationError


def _spans(options: SearchOptions, line: str) -> list[tuple[int, int]]:
    return [(m.start_col, m.end_col) for m in find_line_matches(compile_query(options), line)]


class TestBuildQuerySource:
    def test_literal_is_escaped(self):
        source = build_query_source(SearchOptions(query="a.b*(c)"))
        assert compile_query(SearchOptions(query="a.b*(c)")).search("xa.b*(c)") is not None
        assert source != "a.b*(c)"

    def test_whole_word_wraps_boundaries(self):
        assert build_query_source(SearchOptions(query="x", whole_word=True)) == r"\bx\b"

    def test_regex_kept_as_supplied(self):
        assert build_query_source(SearchOptions(query=r"\d+", use_regex=True)) == r"\d+"


class TestCompileQuery:
    def test_case_insensitive_by_default(self):
        assert _spans(SearchOptions(query="hello"), "Hello HELLO") == [(0, 5), (6, 11)]

    def test_case_sensitive(self):
        assert _spans(SearchOptions(query="hello", case_sensitive=True), "Hello hello") == [(6, 11)]

    def test_literal_metacharacters(self):
        assert _spans(SearchOptions(query="a.c"), "abc a.c") == [(4, 7)]

    def test_whole_word(self):
        options = SearchOptions(query="const", whole_word=True)
        assert _spans(options, "constant const") == [(9, 14)]

    def test_regex(self):
        assert _spans(SearchOptions(query=r"\d+", use_regex=True), "a1 b22 c333") == [
            (1, 2),
            (4, 6),
            (8, 11),
        ]

    def test_invalid_regex_raises(self):
        with pytest.raises(PatternCompilationError) as exc_info:
            compile_query(SearchOptions(query="[unclosed", use_regex=True))
        assert exc_info.value.pattern == "[unclosed"

    def test_invalid_text_is_fine_when_literal(self):
        assert _spans(SearchOptions(query="[unclosed"), "x[unclosed") == [(1, 10)]


class TestFindLineMatches:
    def test_every_non_overlapping_match(self):
        assert _spans(SearchOptions(query="aa"), "aaaaa") == [(0, 2), (2, 4)]

    def test_zero_width_terminates(self):
        spans = _spans(SearchOptions(query="x*", use_regex=True), "axxb")
        assert spans == [(0, 0), (1, 3), (3, 3), (4, 4)]

    def test_zero_width_on_empty_line(self):
        assert _spans(SearchOptions(query="^", use_regex=True), "") == [(0, 0)]

    def test_anchor_only_matches_at_line_start(self):
        assert _spans(SearchOptions(query="^a", use_regex=True), "aaa") == [(0, 1)]

    def test_match_text_and_line_index(self):
        rx = compile_query(SearchOptions(query="b"))
        matches = find_line_matches(rx, "aBc", line_index=4)
        assert len(matches) == 1
        assert matches[0].text == "B"
        assert matches[0].line_index == 4


class TestScanFile:
    def test_matches_in_line_then_column_order(self):
        entry = FileIndexEntry.from_content("a.ts", "x x\nnone\nx")
        scan = scan_file(entry, SearchOptions(query="x"))
        assert scan.ok
        assert [(m.line_index, m.start_col) for m in scan.matches] == [(0, 0), (0, 2), (2, 0)]

    def test_bad_regex_is_a_failed_outcome(self):
        entry = FileIndexEntry.from_content("a.ts", "text")
        scan = scan_file(entry, SearchOptions(query="(", use_regex=True))
        assert not scan.ok
        assert scan.matches == ()
        assert "Invalid regular expression" in scan.error

    @pytest.mark.parametrize("use_regex", [True, False])
    def test_empty_query_is_zero_width_everywhere(self, use_regex):
        entry = FileIndexEntry.from_content("a.ts", "ab\n")
        empty = scan_file(entry, SearchOptions(query="", use_regex=use_regex))
        star = scan_file(entry, SearchOptions(query="x*", use_regex=True))

        assert empty.ok
        positions = [(m.line_index, m.start_col, m.end_col) for m in empty.matches]
        assert positions == [(m.line_index, m.start_col, m.end_col) for m in star.matches]
        assert positions == [(0, 0, 0), (0, 1, 1), (0, 2, 2), (1, 0, 0)]


class TestBuildPreview:
    def test_short_line_is_returned_whole(self):
        line = "x" * 100
        assert build_preview(line, 50) == line

    def test_match_near_start(self):
        line = "m" + "a" * 149
        preview = build_preview(line, 0)
        assert preview == line[:100] + "..."

    def test_match_near_end(self):
        line = "a" * 149 + "m"
        preview = build_preview(line, 149)
        assert preview == "..." + line[99:150]

    def test_match_in_middle(self):
        line = "a" * 100 + "m" + "b" * 99
        preview = build_preview(line, 100)
        assert preview == "..." + line[50:150] + "..."

    def test_custom_width(self):
        line = "0123456789"
        assert build_preview(line, 5, width=4) == "...3456..."

    def test_odd_width(self):
        assert build_preview("0123456789", 5, width=3) == "...456..."
