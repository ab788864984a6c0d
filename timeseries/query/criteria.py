"""
Time Series Query — Projection Criteria
=========================================
Immutable, composable filters over bucket records.

All filters compose conjunctively. Each builder method returns a new
ProjectionQuery; the receiver is never mutated.

between(start, end):
- requires by_name() then by_period(), checked in that order
- floors both bounds to the period's bucket start
- keeps buckets with rounded(start) <= start_date < rounded(end)

The same criteria drive the in-memory store (matches()) and the
Django queryset (ProjectionQuerySet.matching()).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple, Union

from timeseries.periods import Period
from timeseries.query.errors import (
    MissingProjectionNameException,
    MissingProjectionPeriodException,
)
from timeseries.time import TimeWindow

KeyFilter = Union[None, str, int, Iterable[Union[str, int]]]


def normalize_keys(keys: KeyFilter) -> Tuple[str, ...]:
    """A single key or an iterable of keys, as a tuple of strings."""
    if keys is None:
        raise ValueError("Key filter requires at least one key.")
    if isinstance(keys, (str, int)):
        return (str(keys),)
    return tuple(dict.fromkeys(str(key) for key in keys))


@dataclass(frozen=True)
class ProjectionQuery:
    """
    Usage:
        query = (
            ProjectionQuery()
            .by_name("page_views")
            .by_period("5 minutes")
            .between(start, end)
        )
        store.query(query)
    """

    name: Optional[str] = None
    period: Optional[Period] = None
    keys: Optional[Tuple[str, ...]] = None
    window: Optional[TimeWindow] = None
    source_type: Optional[str] = None
    source_id: Optional[str] = None

    # ── Builders ──────────────────────────────────────────────

    def by_name(self, name: Any) -> ProjectionQuery:
        """Exact match on projection name (a definition is accepted too)."""
        return replace(self, name=getattr(name, "name", name))

    def by_period(self, period: "str | Period") -> ProjectionQuery:
        return replace(self, period=Period.parse(period))

    def by_key(self, keys: KeyFilter) -> ProjectionQuery:
        return replace(self, keys=normalize_keys(keys))

    def from_source(
        self, source_type: str, source_id: Optional[Any] = None
    ) -> ProjectionQuery:
        return replace(
            self,
            source_type=source_type,
            source_id=None if source_id is None else str(source_id),
        )

    def require_name_and_period(self) -> Period:
        if self.name is None:
            raise MissingProjectionNameException()
        if self.period is None:
            raise MissingProjectionPeriodException()
        return self.period

    def rounded_window(self, start: datetime, end: datetime) -> TimeWindow:
        period = self.require_name_and_period()
        return TimeWindow(period.aligned_start(start), period.aligned_start(end))

    def between(self, start: datetime, end: datetime) -> ProjectionQuery:
        return replace(self, window=self.rounded_window(start, end))

    # ── Evaluation ────────────────────────────────────────────

    def matches(self, record: Any, sources: Iterable[Tuple[str, str]] = ()) -> bool:
        """In-memory evaluation against a bucket record."""
        if self.name is not None and record.projection_name != self.name:
            return False
        if self.period is not None and record.period != self.period.canonical:
            return False
        if self.keys is not None and record.key not in self.keys:
            return False
        if self.window is not None and not self.window.contains(record.start_date):
            return False
        if self.source_type is not None:
            return any(
                source_type == self.source_type
                and (self.source_id is None or source_id == self.source_id)
                for source_type, source_id in sources
            )
        return True
