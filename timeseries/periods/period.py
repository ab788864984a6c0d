"""
Time Series Periods — Period Value & Bucket Alignment
=======================================================
A Period is a fixed duration parsed from "<magnitude> <unit>".

Alignment reference (program-wide):
    Buckets are floored to multiples of the period measured from the
    Unix epoch (1970-01-01T00:00:00Z). Every period that divides a day
    therefore also lines up with UTC midnight. Week buckets start on
    Thursdays, the weekday of the epoch.

Rules:
- Duration granularity is one second; duration > 0
- Units: second, minute, hour, day, week (singular or plural)
- Months and years are NOT fixed durations and are rejected
- Canonical form uses the largest unit dividing the duration
  ("60 minutes" -> "1 hour") and round-trips through parse()
- Equality and ordering are by duration
- Instants must be timezone-aware
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import total_ordering

from timeseries.periods.errors import InvalidPeriodExpression

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# One time unit: the inclusive bucket end is start + duration - RESOLUTION.
RESOLUTION = timedelta(seconds=1)

# Largest first, canonical form picks the first unit that divides evenly.
UNIT_SECONDS = (
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)

_UNITS = dict(UNIT_SECONDS)
_EXPRESSION = re.compile(r"^\s*(?P<magnitude>[+-]?\d+)\s+(?P<unit>[A-Za-z]+)\s*$")


def _require_aware(instant: datetime) -> None:
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError(
            f"Period arithmetic requires timezone-aware datetime, got {instant!r}."
        )


@total_ordering
@dataclass(frozen=True, eq=False)
class Period:
    """
    Fixed-width bucket duration.

    Usage:
        period = Period.parse("5 minutes")
        start = period.aligned_start(instant)
        period.end(start)  # start + 5 minutes - 1 second
    """

    seconds: int

    def __post_init__(self) -> None:
        if not isinstance(self.seconds, int) or self.seconds <= 0:
            raise InvalidPeriodExpression(
                str(self.seconds), "duration must be a positive number of seconds"
            )

    # ── Parsing ───────────────────────────────────────────────

    @classmethod
    def parse(cls, expression: "str | Period") -> Period:
        """Parse "5 minutes", "1 hour", "2 days"... into a Period."""
        if isinstance(expression, Period):
            return expression
        if not isinstance(expression, str):
            raise InvalidPeriodExpression(
                repr(expression), "expression must be a string"
            )

        match = _EXPRESSION.match(expression)
        if match is None:
            raise InvalidPeriodExpression(
                expression, "expected '<magnitude> <unit>', e.g. '5 minutes'"
            )

        magnitude = int(match.group("magnitude"))
        unit = match.group("unit").lower()
        if unit.endswith("s"):
            unit = unit[:-1]

        if unit not in _UNITS:
            raise InvalidPeriodExpression(
                expression,
                f"unknown unit '{match.group('unit')}' "
                f"(supported: {', '.join(name for name, _ in UNIT_SECONDS)})",
            )
        if magnitude <= 0:
            raise InvalidPeriodExpression(expression, "magnitude must be > 0")

        return cls(seconds=magnitude * _UNITS[unit])

    # ── Arithmetic ────────────────────────────────────────────

    @property
    def duration(self) -> timedelta:
        return timedelta(seconds=self.seconds)

    def aligned_start(self, instant: datetime) -> datetime:
        """Floor `instant` to the start of its bucket (UTC)."""
        _require_aware(instant)
        steps = (instant - EPOCH) // self.duration
        return EPOCH + steps * self.duration

    def end(self, bucket_start: datetime) -> datetime:
        """Inclusive bucket end: start + duration - 1 second."""
        return bucket_start + self.duration - RESOLUTION

    def next_start(self, bucket_start: datetime) -> datetime:
        return bucket_start + self.duration

    def bucket_starts(self, start: datetime, end: datetime) -> list[datetime]:
        """
        Every bucket start b with aligned_start(start) <= b < end.

        A window ending exactly on a boundary excludes that boundary's
        bucket; a window ending mid-bucket includes the partial bucket.
        """
        cursor = self.aligned_start(start)
        _require_aware(end)
        starts = []
        while cursor < end:
            starts.append(cursor)
            cursor = self.next_start(cursor)
        return starts

    # ── Canonical form ────────────────────────────────────────

    @property
    def canonical(self) -> str:
        for unit, unit_seconds in UNIT_SECONDS:
            if self.seconds % unit_seconds == 0:
                magnitude = self.seconds // unit_seconds
                suffix = "" if magnitude == 1 else "s"
                return f"{magnitude} {unit}{suffix}"
        raise AssertionError("second always divides a positive duration")

    def __str__(self) -> str:
        return self.canonical

    def __repr__(self) -> str:
        return f"Period('{self.canonical}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return self.seconds == other.seconds

    def __lt__(self, other: Period) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return self.seconds < other.seconds

    def __hash__(self) -> int:
        return hash(self.seconds)
