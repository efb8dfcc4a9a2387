"""
Configuration module for pyreplace.

This module defines the EngineConfig class holding the tunable limits of the
search-and-replace engine: the skip rule used by the file index, the history
and suggestion capacities, the preview width and the quick-search defaults.

Example:
    >>> from pyreplace.core.config import EngineConfig
    >>>
    >>> config = EngineConfig(history_limit=20, preview_width=80)
    >>> config.validate()
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..utils.error_handling import ConfigurationError

DEFAULT_BINARY_EXTENSIONS: tuple[str, ...] = (
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".pdf",
    ".zip",
    ".exe",
    ".dll",
)

DEFAULT_IGNORED_PATH_FRAGMENTS: tuple[str, ...] = (
    "node_modules/",
    ".git/",
    "dist/",
    "build/",
    ".next/",
    "coverage/",
    ".nyc_output/",
    "logs/",
)

DEFAULT_QUICK_SEARCH_EXCLUDES: tuple[str, ...] = (
    "node_modules/**",
    ".git/**",
    "dist/**",
    "build/**",
)


@dataclass(slots=True)
class EngineConfig:
    # Skip rule
    binary_extensions: tuple[str, ...] = DEFAULT_BINARY_EXTENSIONS
    max_file_chars: int = 1024 * 1024  # 1MB of characters
    ignored_path_fragments: tuple[str, ...] = DEFAULT_IGNORED_PATH_FRAGMENTS

    # History
    history_limit: int = 50
    suggestion_limit: int = 10

    # Results
    preview_width: int = 100

    # Quick search
    quick_search_excludes: tuple[str, ...] = field(
        default_factory=lambda: DEFAULT_QUICK_SEARCH_EXCLUDES
    )
    quick_search_max_results: int = 1000

    def validate(self) -> None:
        """Validate the configuration and raise ConfigurationError on issues.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if self.max_file_chars <= 0:
            raise ConfigurationError(
                "Maximum file size must be positive",
                context={"field": "max_file_chars", "value": self.max_file_chars},
            )

        if self.history_limit < 1:
            raise ConfigurationError(
                "History limit must be at least 1",
                context={"field": "history_limit", "value": self.history_limit},
            )

        if self.suggestion_limit < 1:
            raise ConfigurationError(
                "Suggestion limit must be at least 1",
                context={"field": "suggestion_limit", "value": self.suggestion_limit},
            )

        if self.preview_width < 2:
            raise ConfigurationError(
                "Preview width must be at least 2",
                context={"field": "preview_width", "value": self.preview_width},
            )

        if self.quick_search_max_results < 1:
            raise ConfigurationError(
                "Quick search result cap must be at least 1",
                context={
                    "field": "quick_search_max_results",
                    "value": self.quick_search_max_results,
                },
            )

        bad_extensions = [ext for ext in self.binary_extensions if not ext.startswith(".")]
        if bad_extensions:
            raise ConfigurationError(
                f"Binary extensions must start with '.': {', '.join(bad_extensions)}",
                context={"field": "binary_extensions", "value": bad_extensions},
            )
