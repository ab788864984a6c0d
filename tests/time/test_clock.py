"""
Tests for timeseries.time: default clock and temporal window.
"""

import pytest
from datetime import datetime, timezone, timedelta

from timeseries.time.clock import (
    FixedClock,
    SystemClock,
    set_default_clock,
    get_default_clock,
    now_utc,
)
from timeseries.time.temporal import TimeWindow


# ── Clock Tests ──────────────────────────────────────────────

class TestSystemClock:
    def test_returns_utc_datetime(self):
        dt = SystemClock().now_utc()
        assert dt.tzinfo == timezone.utc


class TestFixedClock:
    def test_returns_fixed_time(self):
        fixed = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        assert clock.now_utc() == fixed
        assert clock.now_utc() == fixed

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2025, 1, 1))

    def test_advance(self):
        fixed = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        clock.advance(30, minutes=5)
        assert clock.now_utc() == fixed + timedelta(minutes=5, seconds=30)


class TestDefaultClock:
    def test_set_and_get_default(self):
        original = get_default_clock()
        fixed = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        set_default_clock(fixed)
        try:
            assert get_default_clock() is fixed
            assert now_utc() == datetime(2025, 1, 1, tzinfo=timezone.utc)
        finally:
            set_default_clock(original)


# ── TimeWindow Tests ─────────────────────────────────────────

class TestTimeWindow:
    T = datetime(2025, 6, 1, tzinfo=timezone.utc)

    def test_half_open(self):
        window = TimeWindow(self.T, self.T + timedelta(minutes=5))
        assert window.contains(self.T)
        assert window.contains(self.T + timedelta(minutes=4, seconds=59))
        assert not window.contains(self.T + timedelta(minutes=5))
        assert not window.contains(self.T - timedelta(seconds=1))

    def test_rejects_inverted_window(self):
        with pytest.raises(ValueError, match="must be <="):
            TimeWindow(self.T, self.T - timedelta(seconds=1))

    def test_empty_and_duration(self):
        assert TimeWindow(self.T, self.T).is_empty()
        assert TimeWindow(self.T, self.T + timedelta(hours=1)).duration() == timedelta(hours=1)
