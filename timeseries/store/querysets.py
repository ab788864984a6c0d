"""
Time Series Store — Projection QuerySet
=========================================
Composable ORM filters over bucket rows.

Each filter also records itself on a ProjectionQuery carried through
queryset clones, so between() and to_time_series() can check that a
name and a period were applied first and round to that period.

    Projection.objects.named("page_views").for_period("5 minutes").between(a, b)
"""

from __future__ import annotations

import operator
from dataclasses import replace
from datetime import datetime
from functools import reduce
from typing import Any, Iterable, List, Optional

from django.db import models
from django.db.models import Q

from timeseries.definitions import ProjectionRegistry, get_default_registry
from timeseries.events import source_label
from timeseries.query import ProjectionQuery
from timeseries.query.criteria import KeyFilter
from timeseries.series import Segment, fill_gaps, require_series_key, time_series_window


def keys_q(keys: Iterable[Optional[str]]) -> Q:
    """Key membership; a None key matches unkeyed buckets."""
    keys = tuple(keys)
    present = [key for key in keys if key is not None]
    clauses = []
    if present:
        clauses.append(Q(key__in=present))
    if None in keys:
        clauses.append(Q(key__isnull=True))
    if not clauses:
        return Q(pk__in=[])
    return reduce(operator.or_, clauses)


class ProjectionQuerySet(models.QuerySet):

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._criteria = ProjectionQuery()

    def _clone(self):
        clone = super()._clone()
        clone._criteria = self._criteria
        return clone

    def _narrow(self, criteria: ProjectionQuery, condition: Q) -> ProjectionQuerySet:
        clone = self.filter(condition)
        clone._criteria = criteria
        return clone

    @property
    def criteria(self) -> ProjectionQuery:
        return self._criteria

    # ── Filters ───────────────────────────────────────────────

    def named(self, name: Any) -> ProjectionQuerySet:
        criteria = self._criteria.by_name(name)
        return self._narrow(criteria, Q(projection_name=criteria.name))

    def for_period(self, period: Any) -> ProjectionQuerySet:
        criteria = self._criteria.by_period(period)
        return self._narrow(criteria, Q(period=criteria.period.canonical))

    def for_key(self, keys: KeyFilter) -> ProjectionQuerySet:
        criteria = self._criteria.by_key(keys)
        return self._narrow(criteria, keys_q(criteria.keys))

    def between(self, start: datetime, end: datetime) -> ProjectionQuerySet:
        """
        Buckets with rounded(start) <= start_date < rounded(end).

        Raises:
            MissingProjectionNameException:   named() not applied
            MissingProjectionPeriodException: for_period() not applied
        """
        criteria = self._criteria.between(start, end)
        return self._narrow(
            criteria,
            Q(start_date__gte=criteria.window.start, start_date__lt=criteria.window.end),
        )

    def from_source(self, source: Any, source_id: Optional[Any] = None) -> ProjectionQuerySet:
        criteria = self._criteria.from_source(source_label(source), source_id)
        condition = Q(sources__source_type=criteria.source_type)
        if criteria.source_id is not None:
            condition &= Q(sources__source_id=criteria.source_id)
        return self._narrow(criteria, condition).distinct()

    def matching(self, criteria: ProjectionQuery) -> ProjectionQuerySet:
        """Apply a complete ProjectionQuery (used by DjangoProjectionStore)."""
        queryset = self
        if criteria.name is not None:
            queryset = queryset.named(criteria.name)
        if criteria.period is not None:
            queryset = queryset.for_period(criteria.period)
        if criteria.keys is not None:
            queryset = queryset._narrow(
                replace(queryset._criteria, keys=criteria.keys),
                keys_q(criteria.keys),
            )
        if criteria.window is not None:
            queryset = queryset._narrow(
                replace(queryset._criteria, window=criteria.window),
                Q(start_date__gte=criteria.window.start, start_date__lt=criteria.window.end),
            )
        if criteria.source_type is not None:
            queryset = queryset.from_source(criteria.source_type, criteria.source_id)
        return queryset.order_by("start_date", "id")

    # ── Materialization ───────────────────────────────────────

    def to_segments(self) -> List[Segment]:
        return [projection.to_segment() for projection in self.order_by("start_date", "id")]

    def to_time_series(
        self,
        start: datetime,
        end: datetime,
        registry: Optional[ProjectionRegistry] = None,
    ) -> List[Segment]:
        """
        Dense series over [start, end) for the named projection and period.

        Rows matched by this queryset fill the grid; other grid instants
        get placeholders seeded from the registered definition. With a
        keyed definition, narrow to a single key first or ValueError is
        raised.
        """
        period = self._criteria.require_name_and_period()
        keys = self._criteria.keys
        if keys is not None and len(keys) > 1:
            raise ValueError(
                "to_time_series() needs at most one key; "
                f"got {len(keys)} from for_key()."
            )

        registry = registry if registry is not None else get_default_registry()
        definition = registry.get(self._criteria.name)
        require_series_key(definition, keys is not None)
        window = time_series_window(period, start, end)

        buckets = self.filter(
            start_date__gte=window.start, start_date__lt=window.end
        ).order_by("start_date", "id")
        return fill_gaps(
            definition.name, period, start, end, buckets, definition.seed_content
        )
