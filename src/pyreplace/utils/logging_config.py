"""
Logging configuration for pyreplace.

SearchLogger wraps a stdlib logger with console and rotating-file handlers,
four output formats (simple, detailed, JSON, structured) and helpers that
log search, replace and indexing events with their numbers attached as
record attributes. A process-wide default logger is available through
get_logger() and configure_logging().
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
import time
from enum import Enum
from pathlib import Path
from typing import Any

_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
    }
)


class LogLevel(str, Enum):
    """Available log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Available log formats."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"
    STRUCTURED = "structured"


class SearchLogger:
    """
    Centralized logging for pyreplace with multiple output formats
    and configurable levels.
    """

    def __init__(
        self,
        name: str = "pyreplace",
        level: LogLevel = LogLevel.INFO,
        format_type: LogFormat = LogFormat.SIMPLE,
        log_file: Path | None = None,
        max_file_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        enable_console: bool = True,
        enable_file: bool = False,
    ):
        self.name = name
        self.level = level
        self.format_type = format_type
        self.log_file = log_file
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.enable_console = enable_console
        self.enable_file = enable_file

        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.value))

        self.logger.handlers.clear()
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Attach the console and rotating file handlers that are enabled."""
        if self.enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, self.level.value))
            console_handler.setFormatter(self._get_formatter())
            self.logger.addHandler(console_handler)

        if self.enable_file and self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_file_size,
                backupCount=self.backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(getattr(logging, self.level.value))
            file_handler.setFormatter(self._get_formatter())
            self.logger.addHandler(file_handler)

    def _get_formatter(self) -> logging.Formatter:
        """Formatter for the configured output format."""
        if self.format_type == LogFormat.DETAILED:
            return logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
            )
        elif self.format_type == LogFormat.JSON:
            return JsonFormatter()
        elif self.format_type == LogFormat.STRUCTURED:
            return StructuredFormatter()
        else:
            return logging.Formatter("%(levelname)s: %(message)s")

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message; keyword arguments become record attributes."""
        self.logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(message, extra=kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log critical message."""
        self.logger.critical(message, extra=kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self.logger.exception(message, extra=kwargs)

    def log_search_start(self, query: str, files_count: int, **kwargs: Any) -> None:
        """Log the start of a search batch over the eligible files."""
        self.info(
            f"Searching for: '{query}' across {files_count} files",
            operation="search_start",
            query=query,
            files_count=files_count,
            **kwargs,
        )

    def log_search_complete(
        self, query: str, results_count: int, files_matched: int, elapsed_ms: float, **kwargs: Any
    ) -> None:
        """Log the outcome of a search batch."""
        self.info(
            f"Search completed: query='{query}', results={results_count}, "
            f"files={files_matched}, time={elapsed_ms:.2f}ms",
            operation="search_complete",
            query=query,
            results_count=results_count,
            files_matched=files_matched,
            elapsed_ms=elapsed_ms,
            **kwargs,
        )

    def log_replace_start(self, query: str, replacement: str, **kwargs: Any) -> None:
        """Log the start of a replace batch."""
        self.info(
            f"Replacing '{query}' with '{replacement}'",
            operation="replace_start",
            query=query,
            replacement=replacement,
            **kwargs,
        )

    def log_replace_complete(
        self,
        query: str,
        replacements: int,
        files_modified: int,
        elapsed_ms: float,
        **kwargs: Any,
    ) -> None:
        """Log the outcome of a replace batch."""
        self.info(
            f"Replace completed: query='{query}', replacements={replacements}, "
            f"files={files_modified}, time={elapsed_ms:.2f}ms",
            operation="replace_complete",
            query=query,
            replacements=replacements,
            files_modified=files_modified,
            elapsed_ms=elapsed_ms,
            **kwargs,
        )

    def log_file_error(self, file_path: str, error: str, **kwargs: Any) -> None:
        """Log a per-file failure; the batch it belongs to keeps running."""
        self.warning(
            f"File error: {file_path} - {error}",
            file_path=file_path,
            error=error,
            **kwargs,
        )

    def log_indexing_stats(
        self, files_received: int, files_indexed: int, elapsed_ms: float, **kwargs: Any
    ) -> None:
        """Log how many of the supplied files survived the skip rule."""
        self.info(
            f"Indexing stats: received={files_received}, indexed={files_indexed}, "
            f"time={elapsed_ms:.2f}ms",
            operation="indexing_stats",
            files_received=files_received,
            files_indexed=files_indexed,
            elapsed_ms=elapsed_ms,
            **kwargs,
        )


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed through ``extra``, without the standard LogRecord attributes."""
    return {
        key: value for key, value in record.__dict__.items() if key not in _RESERVED_RECORD_KEYS
    }


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_entry.update(_extra_fields(record))

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class StructuredFormatter(logging.Formatter):
    """Structured formatter for human-readable structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        asctime = self.formatTime(record, self.datefmt)
        base = f"{asctime} [{record.levelname}] {record.name}: {record.getMessage()}"

        extra_fields = [f"{key}={value}" for key, value in _extra_fields(record).items()]
        if extra_fields:
            base += f" | {' '.join(extra_fields)}"

        if record.exc_info:
            base += f"\n{self.formatException(record.exc_info)}"

        return base


# Global logger instance
_global_logger: SearchLogger | None = None


def get_logger() -> SearchLogger:
    """Get the global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = SearchLogger()
    return _global_logger


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    format_type: LogFormat = LogFormat.SIMPLE,
    log_file: Path | None = None,
    enable_console: bool = True,
    enable_file: bool = False,
    **kwargs: Any,
) -> SearchLogger:
    """Configure global logging settings."""
    global _global_logger
    _global_logger = SearchLogger(
        level=level,
        format_type=format_type,
        log_file=log_file,
        enable_console=enable_console,
        enable_file=enable_file,
        **kwargs,
    )
    return _global_logger


def disable_logging() -> None:
    """Disable all logging."""
    global _global_logger
    if _global_logger:
        _global_logger.logger.setLevel(logging.CRITICAL + 1)


def enable_debug_logging() -> None:
    """Enable debug logging for troubleshooting."""
    global _global_logger
    if _global_logger:
        _global_logger.level = LogLevel.DEBUG
        _global_logger.logger.setLevel(logging.DEBUG)
        for handler in _global_logger.logger.handlers:
            handler.setLevel(logging.DEBUG)
