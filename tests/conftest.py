from __future__ import annotations

from datetime import datetime, timezone

import pytest

from timeseries.store import InMemoryProjectionStore
from timeseries.time import FixedClock, get_default_clock, set_default_clock


@pytest.fixture
def clock():
    """Fixed default clock at 2025-06-01T00:00Z, restored afterwards."""
    original = get_default_clock()
    fixed = FixedClock(datetime(2025, 6, 1, tzinfo=timezone.utc))
    set_default_clock(fixed)
    yield fixed
    set_default_clock(original)


@pytest.fixture
def memory_store():
    return InMemoryProjectionStore()
