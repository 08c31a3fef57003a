"""Pytest fixtures for trademark pipeline tests."""

import pytest

from trademark_pipeline.config.settings import get_settings
from trademark_pipeline.rate_limit.retrier import BackoffRetrier

from .fixtures.registry_responses import RecordingSleep

_PIPELINE_ENV_VARS = (
    "API_KEY",
    "VERBOSE",
    "LOG_JSON",
    "TRADEMARK_API_URL",
    "REQUEST_TIMEOUT",
    "POOL_TIMEOUT",
    "MAX_PAGE_NUMBER",
    "MAX_DUPLICATES",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test without ambient pipeline configuration.

    Clears pipeline env vars, moves to an empty directory so no .env file
    is picked up, and resets the cached settings.
    """
    for name in _PIPELINE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Sleep that records delays instead of waiting."""
    return RecordingSleep()


@pytest.fixture
def retrier(recording_sleep) -> BackoffRetrier:
    """Registry retrier that never actually sleeps."""
    return BackoffRetrier(sleep=recording_sleep)
