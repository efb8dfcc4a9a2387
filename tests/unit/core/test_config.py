"""Tests for pyreplace.core.config module."""

from __future__ import annotations

import pytest

from pyreplace.core.config import (
    DEFAULT_BINARY_EXTENSIONS,
    DEFAULT_IGNORED_PATH_FRAGMENTS,
    DEFAULT_QUICK_SEARCH_EXCLUDES,
    EngineConfig,
)
from pyreplace.utils.error_handling import ConfigurationError, ErrorCategory


class TestEngineConfig:
    def test_defaults(self) -> None:
        cfg = EngineConfig()
        assert cfg.binary_extensions == DEFAULT_BINARY_EXTENSIONS
        assert cfg.ignored_path_fragments == DEFAULT_IGNORED_PATH_FRAGMENTS
        assert cfg.quick_search_excludes == DEFAULT_QUICK_SEARCH_EXCLUDES
        assert cfg.max_file_chars == 1024 * 1024
        assert cfg.history_limit == 50
        assert cfg.suggestion_limit == 10
        assert cfg.preview_width == 100
        assert cfg.quick_search_max_results == 1000
        cfg.validate()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_file_chars": 0},
            {"history_limit": 0},
            {"suggestion_limit": 0},
            {"preview_width": 1},
            {"quick_search_max_results": 0},
            {"binary_extensions": ("png",)},
        ],
    )
    def test_invalid_values(self, overrides) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            EngineConfig(**overrides).validate()

        error = exc_info.value
        assert error.category == ErrorCategory.CONFIGURATION
        assert error.context["field"] == next(iter(overrides))

    @pytest.mark.parametrize("width", [2, 3, 81])
    def test_odd_and_even_preview_widths_accepted(self, width) -> None:
        EngineConfig(preview_width=width).validate()

    def test_engine_rejects_invalid_config(self) -> None:
        from pyreplace import SearchReplaceEngine

        with pytest.raises(ConfigurationError):
            SearchReplaceEngine(EngineConfig(history_limit=0))
