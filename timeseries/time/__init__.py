"""
Time Series Time — Public API
===============================
Default clock and temporal window.
"""

from timeseries.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    now_utc,
    set_default_clock,
)
from timeseries.time.temporal import TimeWindow

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "now_utc",
    "TimeWindow",
]
