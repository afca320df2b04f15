"""Pytest fixtures: isolated working directory and environment for loader tests."""

import pytest
import structlog


@pytest.fixture
def empty_dir(tmp_path, monkeypatch):
    """Working directory with no config file, so load() falls back to the environment."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def clean_env(monkeypatch):
    """Remove envconf's own CLI variables so defaults apply."""
    monkeypatch.delenv("ENVCONF_DIR", raising=False)
    monkeypatch.delenv("ENVCONF_FILE", raising=False)
    return monkeypatch


@pytest.fixture
def log_events():
    """Captured structlog events for the duration of the test."""
    with structlog.testing.capture_logs() as events:
        yield events
