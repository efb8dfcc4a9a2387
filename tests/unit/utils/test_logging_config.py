"""Tests for pyreplace.utils.logging_config module."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from pyreplace.utils import logging_config
from pyreplace.utils.logging_config import (
    JsonFormatter,
    LogFormat,
    LogLevel,
    SearchLogger,
    StructuredFormatter,
    configure_logging,
    disable_logging,
    enable_debug_logging,
    get_logger,
)


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("pyreplace.test", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_global_logger():
    saved = logging_config._global_logger
    stdlib_logger = logging.getLogger("pyreplace")
    saved_level = stdlib_logger.level
    saved_handlers = list(stdlib_logger.handlers)
    yield
    logging_config._global_logger = saved
    stdlib_logger.setLevel(saved_level)
    stdlib_logger.handlers[:] = saved_handlers


class TestSearchLogger:
    def test_console_handler(self) -> None:
        logger = SearchLogger(name="pyreplace.test.console")
        assert len(logger.logger.handlers) == 1
        assert logger.logger.level == logging.INFO

    def test_no_handlers_when_disabled(self) -> None:
        logger = SearchLogger(name="pyreplace.test.quiet", enable_console=False)
        assert logger.logger.handlers == []

    def test_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "pyreplace.log"
        logger = SearchLogger(
            name="pyreplace.test.file",
            enable_console=False,
            enable_file=True,
            log_file=log_file,
            format_type=LogFormat.JSON,
        )
        logger.log_search_start("needle", 3)
        for handler in logger.logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert entry["operation"] == "search_start"
        assert entry["query"] == "needle"
        assert entry["files_count"] == 3

    def test_domain_helpers(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = SearchLogger(name="pyreplace.test.helpers", enable_console=False)
        logger.logger.propagate = True

        with caplog.at_level(logging.INFO, logger="pyreplace.test.helpers"):
            logger.log_search_complete("q", 4, 2, 1.5)
            logger.log_replace_start("q", "r")
            logger.log_replace_complete("q", 4, 2, 2.0)
            logger.log_indexing_stats(10, 8, 3.0)
            logger.log_file_error("a.ts", "stale", operation="replace")

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0] == "Search completed: query='q', results=4, files=2, time=1.50ms"
        assert messages[1] == "Replacing 'q' with 'r'"
        assert messages[2].startswith("Replace completed: query='q', replacements=4")
        assert messages[3] == "Indexing stats: received=10, indexed=8, time=3.00ms"
        assert caplog.records[4].levelno == logging.WARNING
        assert caplog.records[4].operation == "replace"


class TestFormatters:
    def test_json_formatter_includes_extra(self) -> None:
        output = json.loads(JsonFormatter().format(_record(query="x", elapsed_ms=1.0)))
        assert output["message"] == "hello"
        assert output["level"] == "INFO"
        assert output["query"] == "x"
        assert "msg" not in output

    def test_structured_formatter(self) -> None:
        output = StructuredFormatter().format(_record(operation="replace_start"))
        assert "[INFO] pyreplace.test: hello" in output
        assert output.endswith("| operation=replace_start")


class TestGlobalLogger:
    def test_get_logger_is_singleton(self, restore_global_logger) -> None:
        logging_config._global_logger = None
        assert get_logger() is get_logger()

    def test_configure_logging(self, restore_global_logger) -> None:
        logger = configure_logging(
            level=LogLevel.WARNING, format_type=LogFormat.STRUCTURED, enable_console=False
        )
        assert get_logger() is logger
        assert logger.logger.level == logging.WARNING

    def test_disable_and_enable_debug(self, restore_global_logger) -> None:
        logger = configure_logging(enable_console=False)

        disable_logging()
        assert logger.logger.level > logging.CRITICAL

        enable_debug_logging()
        assert logger.logger.level == logging.DEBUG
        assert logger.level == LogLevel.DEBUG
