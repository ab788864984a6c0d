"""
Time Series Time — Default Clock
==================================
Aggregation never reads wall-clock time: events carry their own
occurred_at. The default clock is consulted only when a saved model
instance has no timestamp (timeseries.triggers.model_event) and as the
Log model's created_at default in tests.

Tests swap in a FixedClock and step it forward between writes.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Union


class SystemClock:

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Usage:
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        set_default_clock(clock)
        clock.advance(minutes=5)
    """

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._instant = instant

    def now_utc(self) -> datetime:
        return self._instant

    def advance(self, seconds: float = 0, *, minutes: float = 0) -> None:
        self._instant += timedelta(seconds=seconds, minutes=minutes)


Clock = Union[SystemClock, FixedClock]

_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock


def now_utc() -> datetime:
    return _default_clock.now_utc()
