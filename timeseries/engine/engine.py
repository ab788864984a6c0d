"""
Time Series Engine — Projection Engine
========================================
Turns one event into bucket mutations.

Apply flow, per applicable definition and per period:
    1. key          = definition.key_for(event)        (may be None)
    2. bucket start = period.aligned_start(event.occurred_at)
    3. store.merge(bucket, seed, combine)               (atomic per tuple)
         absent  → content = merge(seed, event)
         present → content = merge(existing, event)

Rules:
- Exactly one bucket created or mutated per (definition, period) pair
- A failing merge aborts that pair, leaves the bucket untouched and
  raises MergeFailed immediately; pairs already applied stay applied
- No caching of bucket state across calls; every merge re-reads
- Store errors propagate unchanged
- No scheduling: the caller decides when apply() runs

The engine is agnostic to how it is invoked; see timeseries.triggers.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List

from timeseries.definitions import ProjectionDefinition
from timeseries.engine.errors import MergeFailed
from timeseries.events import ProjectableEvent
from timeseries.periods import Period
from timeseries.store.base import BucketKey, ProjectionStore, SourceRef

logger = logging.getLogger("timeseries.engine")


class ProjectionEngine:

    def __init__(self, store: ProjectionStore):
        self.store = store

    def bucket_for(
        self,
        definition: ProjectionDefinition,
        period: Period,
        event: ProjectableEvent,
    ) -> BucketKey:
        return BucketKey(
            projection_name=definition.name,
            period=period.canonical,
            key=definition.key_for(event),
            start_date=period.aligned_start(event.occurred_at),
        )

    def apply(
        self,
        event: ProjectableEvent,
        definitions: Iterable[ProjectionDefinition],
    ) -> List[Any]:
        """
        Aggregate `event` into every applicable (definition, period) bucket.

        Returns the stored bucket records, one per mutated bucket.

        Raises:
            MergeFailed: a merge function raised; that bucket is unchanged.
        """
        source = None
        if event.source_id is not None:
            source = SourceRef(event.source_type, str(event.source_id))

        applied = []
        for definition in definitions:
            if not definition.applies_to(event):
                continue
            for period in definition.periods:
                bucket = self.bucket_for(definition, period, event)
                applied.append(
                    self.store.merge(
                        bucket,
                        definition.seed_content(),
                        self._combiner(definition, period, event),
                        source=source,
                    )
                )
                logger.debug(
                    f"Merged {event.source_type} into {bucket.projection_name} "
                    f"[{bucket.period}] key={bucket.key} "
                    f"start={bucket.start_date.isoformat()}"
                )
        return applied

    @staticmethod
    def _combiner(definition: ProjectionDefinition, period: Period, event: Any):
        def combine(current: Any) -> Any:
            try:
                return definition.merge(current, event)
            except Exception as exc:
                logger.error(
                    f"Merge failed: {definition.name} [{period}] for "
                    f"{event.source_type} (source_id: {event.source_id}): {exc}"
                )
                raise MergeFailed(definition.name, period.canonical, exc) from exc

        return combine
