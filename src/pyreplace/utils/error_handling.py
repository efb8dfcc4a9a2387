"""
Error classification and collection for pyreplace.

Search and replace batches never let a per-file or per-match failure escape:
failures are turned into explicit result flags and collected here so callers
can inspect or report them after the batch completes.

Error Categories:
    - PATTERN: Invalid regular expressions
    - INDEX: Files missing from (or evicted out of) the file index
    - REPLACEMENT: A single match that could not be applied
    - CONFIGURATION: Invalid engine configuration
    - VALIDATION: Invalid search/replace options
    - STATE: Engine used in an invalid order (programmer misuse)

Classes:
    ErrorSeverity: Error severity levels (LOW, MEDIUM, HIGH, CRITICAL)
    ErrorCategory: Error classification categories
    ErrorInfo: Detailed error information container
    ErrorCollector: Batch error collection and analysis
    SearchError: Base exception class for pyreplace errors

Example:
    >>> from pyreplace.utils.error_handling import ErrorCollector, PatternCompilationError
    >>>
    >>> collector = ErrorCollector()
    >>> collector.add_error(PatternCompilationError("bad pattern", "[", file_path="a.ts"))
    >>> collector.get_summary()["total_errors"]
    1
"""

from __future__ import annotations

import sys
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    PATTERN = "pattern"
    INDEX = "index"
    REPLACEMENT = "replacement"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    STATE = "state"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    file_path: str | None = None
    line_number: int | None = None
    exception_type: str | None = None
    traceback_str: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)


class SearchError(Exception):
    """Base exception for search and replace errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        file_path: str | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.file_path: str | None = file_path
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class PatternCompilationError(SearchError):
    """The query could not be compiled into a regular expression."""

    def __init__(
        self,
        message: str,
        pattern: str,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["pattern"] = pattern

        super().__init__(
            message,
            category=ErrorCategory.PATTERN,
            severity=ErrorSeverity.LOW,
            file_path=file_path,
            suggestions=[
                "Check the regular expression syntax",
                "Disable regex mode to search for the text literally",
            ],
            context=merged_context,
        )
        self.pattern: str = pattern


class FileNotIndexedError(SearchError):
    """A file targeted by a replacement is no longer in the index."""

    def __init__(self, file_path: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"File not found in index: {file_path}",
            category=ErrorCategory.INDEX,
            severity=ErrorSeverity.MEDIUM,
            file_path=file_path,
            suggestions=[
                "Re-index the file before replacing",
                "Run the search again to refresh match positions",
            ],
            context=context,
        )


class ReplacementApplicationError(SearchError):
    """A single match could not be spliced into the file content."""

    def __init__(
        self,
        message: str,
        file_path: str,
        line_number: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.REPLACEMENT,
            severity=ErrorSeverity.MEDIUM,
            file_path=file_path,
            suggestions=[
                "The file may have changed since it was searched",
                "Run the search again before replacing",
            ],
            context=context,
        )
        self.line_number: int | None = line_number


class ConfigurationError(SearchError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            suggestions=[
                "Verify all limits are positive",
                "Use the default configuration",
            ],
            context=context,
        )


class ValidationError(SearchError):
    """Invalid search or replace options."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.MEDIUM,
            context=context,
        )


class EngineStateError(SearchError):
    """The engine was used in an invalid order."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.STATE,
            severity=ErrorSeverity.HIGH,
            suggestions=["Call index_files() before replacing"],
            context=context,
        )


class ErrorCollector:
    """Collects and manages errors during search and replace batches."""

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}
        self.suppressed_categories: set[ErrorCategory] = set()

    def add_error(
        self,
        exception: Exception | SearchError,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        """Add an error to the collection."""
        if isinstance(exception, SearchError):
            error_category = exception.category
            error_severity = exception.severity
            error_file_path = exception.file_path or file_path
            error_suggestions = exception.suggestions or suggestions or []
            error_context = {**exception.context, **(context or {})}
        else:
            error_category = category or ErrorCategory.UNKNOWN
            error_severity = severity or ErrorSeverity.MEDIUM
            error_file_path = file_path
            error_suggestions = suggestions or []
            error_context = context or {}

        if error_category in self.suppressed_categories:
            return

        error_info = ErrorInfo(
            category=error_category,
            severity=error_severity,
            message=str(exception),
            file_path=error_file_path,
            line_number=getattr(exception, "line_number", None),
            exception_type=type(exception).__name__,
            traceback_str=traceback.format_exc() if sys.exc_info()[0] else None,
            context=error_context,
            suggestions=error_suggestions,
        )

        if len(self.errors) < self.max_errors:
            self.errors.append(error_info)

        self.error_counts[error_category] = self.error_counts.get(error_category, 0) + 1

    def suppress_category(self, category: ErrorCategory) -> None:
        """Suppress errors of a specific category."""
        self.suppressed_categories.add(category)

    def unsuppress_category(self, category: ErrorCategory) -> None:
        """Stop suppressing errors of a specific category."""
        self.suppressed_categories.discard(category)

    def get_errors_by_category(self, category: ErrorCategory) -> list[ErrorInfo]:
        return [error for error in self.errors if error.category == category]

    def get_errors_by_severity(self, severity: ErrorSeverity) -> list[ErrorInfo]:
        return [error for error in self.errors if error.severity == severity]

    def get_critical_errors(self) -> list[ErrorInfo]:
        return self.get_errors_by_severity(ErrorSeverity.CRITICAL)

    def has_critical_errors(self) -> bool:
        return len(self.get_critical_errors()) > 0

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        return {
            "total_errors": len(self.errors),
            "by_category": {category.value: count for category, count in self.error_counts.items()},
            "by_severity": {
                severity.value: len(self.get_errors_by_severity(severity))
                for severity in ErrorSeverity
            },
            "suppressed_categories": [c.value for c in self.suppressed_categories],
            "has_critical": self.has_critical_errors(),
        }

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()
        self.error_counts.clear()


def handle_file_error(
    file_path: str,
    operation: str,
    exception: Exception,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> SearchError:
    """
    Classify a per-file failure, record it and log it.

    Args:
        file_path: Index path of the file that caused the error
        operation: Operation being performed (e.g., "search", "replace")
        exception: The exception that occurred
        error_collector: Optional error collector to add the error to
        logger: Optional SearchLogger to log the error

    Returns:
        The classified SearchError
    """
    error: SearchError
    if isinstance(exception, SearchError):
        error = exception
        if error.file_path is None:
            error.file_path = file_path
    elif isinstance(exception, (IndexError, ValueError)):
        error = ReplacementApplicationError(
            f"Cannot {operation} in file: {exception}", file_path
        )
    else:
        error = SearchError(
            f"Unexpected error during {operation}: {exception}", file_path=file_path
        )

    if error_collector:
        error_collector.add_error(error)

    if logger:
        logger.log_file_error(file_path, str(error), operation=operation)

    return error


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    if not error_collector.errors:
        return "No errors occurred during the operation."

    summary = error_collector.get_summary()

    report = ["Search/Replace Error Report", "=" * 50, ""]

    report.append(f"Total errors: {summary['total_errors']}")
    report.append(f"Critical errors: {summary['by_severity']['critical']}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")
    report.append("")

    report.append("Errors:")
    for error in error_collector.errors:
        location = f" ({error.file_path})" if error.file_path else ""
        report.append(f"  - {error.message}{location}")
        if error.suggestions:
            report.append(f"    Suggestions: {', '.join(error.suggestions)}")

    return "\n".join(report)
