"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import logfire
import pytest

# Spans and logs stay in-process during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def future() -> datetime:
    """A publication time one day from now."""
    return datetime.now(timezone.utc) + timedelta(days=1)
