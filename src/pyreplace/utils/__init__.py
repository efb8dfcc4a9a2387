"""
Utility modules shared by the search and replace engines.

- error_handling: error taxonomy, batch error collection and reports
- logging_config: logging setup and the SearchLogger wrapper
"""

from .error_handling import (
    ConfigurationError,
    EngineStateError,
    ErrorCategory,
    ErrorCollector,
    ErrorInfo,
    ErrorSeverity,
    FileNotIndexedError,
    PatternCompilationError,
    ReplacementApplicationError,
    SearchError,
    ValidationError,
    create_error_report,
    handle_file_error,
)
from .logging_config import (
    LogFormat,
    LogLevel,
    SearchLogger,
    configure_logging,
    disable_logging,
    enable_debug_logging,
    get_logger,
)

__all__ = [
    # Error handling
    "ConfigurationError",
    "EngineStateError",
    "ErrorCategory",
    "ErrorCollector",
    "ErrorInfo",
    "ErrorSeverity",
    "FileNotIndexedError",
    "PatternCompilationError",
    "ReplacementApplicationError",
    "SearchError",
    "ValidationError",
    "create_error_report",
    "handle_file_error",
    # Logging
    "LogFormat",
    "LogLevel",
    "SearchLogger",
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
]
