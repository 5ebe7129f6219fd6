"""Shared fixtures for notification library tests."""

from datetime import datetime, timezone

import pytest

from notification_library.logging import clear_log_context


@pytest.fixture
def fixed_now():
    """A fixed reference instant at wire precision."""
    return datetime(2025, 11, 4, 12, 0, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def clean_log_context():
    """Clear logging context before and after a test."""
    clear_log_context()
    yield
    clear_log_context()
