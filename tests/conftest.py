"""
Shared test fixtures and helpers for pyreplace tests.

Provides quiet loggers, ready-to-use engines and a small in-memory project
so individual tests stay focused on behavior.
"""

from __future__ import annotations

import pytest

from pyreplace import EngineConfig, SearchReplaceEngine
from pyreplace.utils.logging_config import SearchLogger

SAMPLE_TS_FILE = "const x = 1;\nconst y = 2;"

SAMPLE_PROJECT = {
    "src/app.ts": {
        "content": (
            "import { render } from './render';\n"
            "const title = 'Hello';\n"
            "export function main() {\n"
            "  render(title);\n"
            "}\n"
        ),
        "lastModified": 1_700_000_000_000,
    },
    "src/render.ts": {
        "content": "export function render(text: string) {\n  console.log(text);\n}\n",
        "lastModified": 1_700_000_100_000,
    },
    "README.md": {
        "content": "# Demo\n\nCall main() to render the title.\n",
        "lastModified": 1_700_000_200_000,
    },
    "tests/app.test.ts": {
        "content": "import { main } from '../src/app';\nmain();\n",
        "lastModified": 1_700_000_300_000,
    },
}


@pytest.fixture
def quiet_logger() -> SearchLogger:
    """A logger that writes nowhere."""
    return SearchLogger(name="pyreplace.tests", enable_console=False)


@pytest.fixture
def engine(quiet_logger: SearchLogger) -> SearchReplaceEngine:
    return SearchReplaceEngine(logger=quiet_logger)


@pytest.fixture
def project_engine(engine: SearchReplaceEngine) -> SearchReplaceEngine:
    engine.index_files(SAMPLE_PROJECT)
    return engine


@pytest.fixture
def small_history_config() -> EngineConfig:
    return EngineConfig(history_limit=3, suggestion_limit=2)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take longer to run")
