"""Shared fixtures for loghooks tests."""

import io

import pytest
from hook_fixtures import RecordingHooks

from loghooks.config import clear_config_instance


@pytest.fixture(autouse=True)
def cleanup():
    """Clear the global config between tests."""
    yield
    clear_config_instance()


@pytest.fixture
def raw_stream():
    """In-memory stand-in for the log file stream."""
    return io.BytesIO()


@pytest.fixture
def events():
    """Shared event log for recording hooks."""
    return []


@pytest.fixture
def recorders(events):
    """Three recording hooks A, B, C sharing one event log."""
    return tuple(RecordingHooks(name, events) for name in ("A", "B", "C"))
