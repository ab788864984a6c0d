"""
Time Series Series — Time-Series Materializer
===============================================
Turns sparse stored buckets into a dense, gap-filled sequence.

Grid:
    every bucket start b with aligned_start(start) <= b < end,
    stepping by the period duration.

For each grid instant the stored bucket (same name, period, key) is
emitted as a Segment; missing instants get a placeholder Segment carrying
a fresh copy of the definition's seed. Placeholders are never persisted.

Output length = number of grid steps, ascending by start_date.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional

from timeseries.definitions import ProjectionRegistry, get_default_registry
from timeseries.periods import Period
from timeseries.query import ProjectionQuery
from timeseries.series.segment import Segment
from timeseries.time import TimeWindow

logger = logging.getLogger("timeseries.series")


def time_series_window(period: Period, start: datetime, end: datetime) -> TimeWindow:
    """Window covering every bucket the [start, end) range touches."""
    if end < start:
        raise ValueError(
            f"Time series end ({end}) must be >= start ({start})."
        )
    return TimeWindow(period.aligned_start(start), end)


def require_series_key(definition: Any, has_key: bool) -> None:
    """A keyed definition yields one series per key; an unkeyed one has none."""
    if definition.key is not None and not has_key:
        raise ValueError(
            f"Projection '{definition.name}' is keyed; a time series needs one key."
        )


def fill_gaps(
    projection_name: str,
    period: Period,
    start: datetime,
    end: datetime,
    buckets: Iterable[Any],
    seed: Callable[[], Any],
) -> List[Segment]:
    """
    Lay stored buckets onto the dense grid.

    buckets: records with start_date and to_segment(); at most one per
             start_date (callers filter by key).
    seed:    factory for placeholder content.
    """
    by_start = {}
    for bucket in buckets:
        if bucket.start_date in by_start:
            raise ValueError(
                f"Several '{projection_name}' buckets start at "
                f"{bucket.start_date.isoformat()}; filter by key first."
            )
        by_start[bucket.start_date] = bucket

    segments = []
    for bucket_start in period.bucket_starts(start, end):
        bucket = by_start.get(bucket_start)
        if bucket is not None:
            segments.append(bucket.to_segment())
        else:
            segments.append(
                Segment.placeholder(projection_name, period, bucket_start, seed())
            )
    return segments


class TimeSeriesMaterializer:
    """
    Usage:
        materializer = TimeSeriesMaterializer(store, registry)
        materializer.to_time_series("page_views", "5 minutes", start, end)
    """

    def __init__(self, store: Any, registry: Optional[ProjectionRegistry] = None):
        self._store = store
        self._registry = registry

    @property
    def registry(self) -> ProjectionRegistry:
        return self._registry if self._registry is not None else get_default_registry()

    def to_time_series(
        self,
        projection_name: str,
        period: "str | Period",
        start: datetime,
        end: datetime,
        key: Optional[Any] = None,
    ) -> List[Segment]:
        definition = self.registry.get(getattr(projection_name, "name", projection_name))
        require_series_key(definition, key is not None)
        period = Period.parse(period)
        window = time_series_window(period, start, end)

        criteria = ProjectionQuery(
            name=definition.name,
            period=period,
            keys=(None if key is None else str(key),),
            window=window,
        )
        buckets = self._store.query(criteria)

        segments = fill_gaps(
            definition.name, period, start, end, buckets, definition.seed_content
        )
        logger.debug(
            f"Time series {definition.name} [{period}] {window.start.isoformat()} → "
            f"{window.end.isoformat()}: {len(buckets)} stored, "
            f"{len(segments) - len(buckets)} placeholder(s)"
        )
        return segments
