"""
Time Series Store — In-Memory Store
=====================================
Process-local implementation of the store boundary.

Concurrency:
- One Lock per bucket tuple (single-writer per tuple)
- A short guard lock only protects the lock table and row index
- Different tuples merge fully in parallel

Returned records are copies; callers never hold live state.
"""

from __future__ import annotations

import copy
import itertools
import logging
from threading import Lock
from typing import Any, Dict, List, Optional

from timeseries.query import ProjectionQuery
from timeseries.store.base import BucketKey, Combine, SourceRef, StoredProjection

logger = logging.getLogger("timeseries.store")


class InMemoryProjectionStore:

    def __init__(self) -> None:
        self._rows: Dict[BucketKey, StoredProjection] = {}
        self._bucket_locks: Dict[BucketKey, Lock] = {}
        self._guard = Lock()
        self._ids = itertools.count(1)

    def _bucket_lock(self, bucket: BucketKey) -> Lock:
        with self._guard:
            lock = self._bucket_locks.get(bucket)
            if lock is None:
                lock = self._bucket_locks[bucket] = Lock()
            return lock

    def _write(
        self, bucket: BucketKey, content: Any, source: Optional[SourceRef]
    ) -> StoredProjection:
        # Caller holds the bucket lock.
        with self._guard:
            row = self._rows.get(bucket)
            if row is None:
                row = StoredProjection(
                    id=next(self._ids), content=content, **bucket.as_fields()
                )
                self._rows[bucket] = row
            else:
                row.content = content
            if source is not None:
                row.sources.add((source.source_type, source.source_id))
            return copy.deepcopy(row)

    # ── Boundary ──────────────────────────────────────────────

    def find(self, bucket: BucketKey) -> Optional[StoredProjection]:
        with self._guard:
            row = self._rows.get(bucket)
            return copy.deepcopy(row) if row is not None else None

    def upsert(
        self, bucket: BucketKey, content: Any, source: Optional[SourceRef] = None
    ) -> StoredProjection:
        with self._bucket_lock(bucket):
            return self._write(bucket, content, source)

    def merge(
        self,
        bucket: BucketKey,
        seed: Any,
        combine: Combine,
        source: Optional[SourceRef] = None,
    ) -> StoredProjection:
        with self._bucket_lock(bucket):
            with self._guard:
                row = self._rows.get(bucket)
                current = copy.deepcopy(row.content) if row is not None else seed
            content = combine(current)
            return self._write(bucket, content, source)

    def query(self, criteria: ProjectionQuery) -> List[StoredProjection]:
        with self._guard:
            matched = [
                copy.deepcopy(row)
                for row in self._rows.values()
                if criteria.matches(row, row.sources)
            ]
        return sorted(matched, key=lambda row: (row.start_date, row.id))

    def __len__(self) -> int:
        return len(self._rows)
