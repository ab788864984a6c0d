"""
Time Series Time — Temporal Window
====================================
Half-open interval used for range queries and time-series grids.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class TimeWindow:
    """
    A half-open time interval [start, end).

    Invariant: start <= end (enforced at construction).
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"TimeWindow start ({self.start}) must be <= end ({self.end})."
            )

    def contains(self, dt: datetime) -> bool:
        """Start inclusive, end exclusive."""
        return self.start <= dt < self.end

    def is_empty(self) -> bool:
        return self.start == self.end

    def duration(self) -> timedelta:
        return self.end - self.start
