"""Pytest configuration shared by all suites."""

from __future__ import annotations

from typing import Generator

import pytest

from pg_insert.config.settings import get_settings
from pg_insert.utils.logging import configure_logging

# The library never configures logging itself; the suite opts in so caplog
# records carry the JSON-rendered events.
configure_logging(level="INFO", log_to_file=False)

_SETTINGS_ENV = (
    "LOG_LEVEL",
    "PGI_LOG_TO_FILE",
    "PGI_LOG_FILE_DIR",
    "PGI_VALIDATE_ROWS",
    "PGI_LOG_SQL",
    "PGI_ENV_FILE",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Run every test against default settings and a fresh settings cache."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
