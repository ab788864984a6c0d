"""
Time Series Store — Django Store
==================================
Store boundary backed by the Django ORM.

Atomic merge (per bucket tuple):
    1. transaction.atomic()
    2. SELECT ... FOR UPDATE the bucket row
    3. absent  → INSERT merge(seed) inside a savepoint
                 IntegrityError (lost insert race) → re-lock the row
                 that now exists and merge into it
       present → UPDATE content = merge(existing)
    4. link the contributing source

If the merge function raises, the exception leaves the transaction and
everything is rolled back. Database errors are never reinterpreted.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from django.db import IntegrityError, transaction

from timeseries.query import ProjectionQuery
from timeseries.store.base import BucketKey, Combine, SourceRef
from timeseries.store.models import Projection, ProjectionSource

logger = logging.getLogger("timeseries.store")


class DjangoProjectionStore:

    def __init__(self, using: Optional[str] = None):
        self.using = using

    def _projections(self):
        return Projection.objects.db_manager(self.using)

    def _locked(self, bucket: BucketKey) -> Optional[Projection]:
        return (
            self._projections()
            .select_for_update()
            .filter(**bucket.as_fields())
            .first()
        )

    def _replace(self, projection: Projection, content: Any) -> None:
        projection.content = content
        projection.save(using=self.using, update_fields=["content", "updated_at"])

    def _write(
        self,
        bucket: BucketKey,
        compute: Callable[[Optional[Projection]], Any],
        source: Optional[SourceRef],
    ) -> Projection:
        with transaction.atomic(using=self.using):
            projection = self._locked(bucket)
            if projection is None:
                try:
                    with transaction.atomic(using=self.using):
                        projection = self._projections().create(
                            content=compute(None), **bucket.as_fields()
                        )
                except IntegrityError:
                    projection = self._locked(bucket)
                    if projection is None:
                        raise
                    logger.debug(f"Insert race lost for {projection}; merging into winner.")
                    self._replace(projection, compute(projection))
            else:
                self._replace(projection, compute(projection))

            if source is not None:
                ProjectionSource.objects.db_manager(self.using).get_or_create(
                    projection=projection,
                    source_type=source.source_type,
                    source_id=source.source_id,
                )
        return projection

    # ── Boundary ──────────────────────────────────────────────

    def find(self, bucket: BucketKey) -> Optional[Projection]:
        return self._projections().filter(**bucket.as_fields()).first()

    def upsert(
        self, bucket: BucketKey, content: Any, source: Optional[SourceRef] = None
    ) -> Projection:
        return self._write(bucket, lambda _existing: content, source)

    def merge(
        self,
        bucket: BucketKey,
        seed: Any,
        combine: Combine,
        source: Optional[SourceRef] = None,
    ) -> Projection:
        def compute(existing: Optional[Projection]) -> Any:
            return combine(seed if existing is None else existing.content)

        return self._write(bucket, compute, source)

    def query(self, criteria: ProjectionQuery) -> List[Projection]:
        return list(self._projections().matching(criteria))
