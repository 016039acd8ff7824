"""Shared fixtures."""

from datetime import UTC, datetime

import pytest

from picklink.config import reset_settings
from picklink.providers.mock import get_mock_events

FIXED_NOW = datetime(2026, 2, 8, 10, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; re-read them for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def mock_events():
    """All mock events: 4 tennis (Galan, Pegula, Korda, doubles) then 1 NBA."""
    return get_mock_events(now=FIXED_NOW)


@pytest.fixture
def tennis_events():
    return get_mock_events("tennis", now=FIXED_NOW)
