"""Shared fixtures for CalendarHub tests."""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from calendarhub.config.settings import CalendarHubSettings, reset_settings
from calendarhub.sources.defaults import DEFAULT_SOURCES
from calendarhub.sources.models import CalendarSource, SourceType
from calendarhub.state.controller import CalendarController


@pytest.fixture
def local_source() -> CalendarSource:
    """Single local source used as an import target."""
    return CalendarSource(id="local", name="Local Calendar", type=SourceType.LOCAL, color="#10B981")


@pytest.fixture
def work_source() -> CalendarSource:
    """A second source with a distinct color."""
    return CalendarSource(id="work", name="Work", type=SourceType.OUTLOOK, color="#0078D4")


@pytest.fixture
def sources() -> list[CalendarSource]:
    """The built-in source list."""
    return list(DEFAULT_SOURCES)


@pytest.fixture
def controller(sources: list[CalendarSource]) -> CalendarController:
    """Controller displaying January 2025 with no events."""
    return CalendarController(sources, current_date=date(2025, 1, 15))


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Working directory without .env files or CALENDARHUB_* variables."""
    for key in list(os.environ):
        if key.upper().startswith("CALENDARHUB_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def isolated_settings(clean_env: Path) -> CalendarHubSettings:
    """Settings that never read the user's config directory or environment."""
    return CalendarHubSettings(config_dir=clean_env / "config", data_dir=clean_env / "data")


@pytest.fixture
def clean_settings() -> Any:
    """Reset the global settings instance around a test."""
    reset_settings()
    yield
    reset_settings()


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "critical_path: Core functionality tests")
    config.addinivalue_line("markers", "integration: Tests spanning several components")


@pytest.fixture
def restore_package_logger() -> Any:
    """Keep handlers added by setup_logging from leaking into other tests."""
    logger = logging.getLogger("calendarhub")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
