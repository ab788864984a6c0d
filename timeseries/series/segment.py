"""
Time Series Series — Segment
==============================
The read shape of one bucket: name, period, start, inclusive end, content.
Produced from stored buckets (to_segment()) and as gap-filling placeholders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from timeseries.periods import Period


@dataclass(frozen=True)
class Segment:
    """One bucket of a time series. `stored` is False for placeholders."""

    projection_name: str
    period: str
    start_date: datetime
    end_date: datetime
    content: Any
    stored: bool = field(default=True, compare=False)

    @classmethod
    def placeholder(
        cls, projection_name: str, period: Period, start_date: datetime, content: Any
    ) -> Segment:
        return cls(
            projection_name=projection_name,
            period=period.canonical,
            start_date=start_date,
            end_date=period.end(start_date),
            content=content,
            stored=False,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-ready mapping. Dates are ISO 8601 with offset
        ("2025-06-01T00:00:00+00:00"), not "Y-m-d H:i:s" strings, so the
        UTC offset survives serialization.
        """
        return {
            "projection_name": self.projection_name,
            "period": self.period,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "content": self.content,
        }


class SegmentableMixin:
    """
    Bucket-record behaviour shared by the Django model and in-memory rows.

    Requires: projection_name, period (canonical string), start_date, content.
    """

    @property
    def period_value(self) -> Period:
        return Period.parse(self.period)

    @property
    def end_date(self) -> datetime:
        """Derived, never stored: start_date + duration - 1 second."""
        return self.period_value.end(self.start_date)

    def to_segment(self) -> Segment:
        return Segment(
            projection_name=self.projection_name,
            period=self.period,
            start_date=self.start_date,
            end_date=self.end_date,
            content=self.content,
        )
