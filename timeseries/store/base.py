"""
Time Series Store — Store Boundary
====================================
The persistence collaborator consumed by the engine, the query layer and
the materializer.

Contract:
- find(bucket)                         -> record | None
- upsert(bucket, content, source)      -> record (replace content)
- merge(bucket, seed, combine, source) -> record, ATOMIC per bucket tuple
- query(criteria)                      -> records ordered by start_date

merge() is the read-modify-write used by the engine. It must behave as if
serialized per (projection_name, period, key, start_date). If combine()
raises, nothing is written and the exception propagates unchanged.

Store failures are passed through. No retry policy lives here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Protocol, Sequence, Set, Tuple

from timeseries.query import ProjectionQuery
from timeseries.series.segment import SegmentableMixin


@dataclass(frozen=True)
class BucketKey:
    """Natural primary key of a bucket: the unit of merge atomicity."""

    projection_name: str
    period: str
    key: Optional[str]
    start_date: datetime

    def as_fields(self) -> Dict[str, Any]:
        return {
            "projection_name": self.projection_name,
            "period": self.period,
            "key": self.key,
            "start_date": self.start_date,
        }


@dataclass(frozen=True)
class SourceRef:
    """Entity that contributed to a bucket."""

    source_type: str
    source_id: str


Combine = Callable[[Any], Any]


class ProjectionStore(Protocol):
    def find(self, bucket: BucketKey) -> Optional[Any]: ...

    def upsert(
        self, bucket: BucketKey, content: Any, source: Optional[SourceRef] = None
    ) -> Any: ...

    def merge(
        self,
        bucket: BucketKey,
        seed: Any,
        combine: Combine,
        source: Optional[SourceRef] = None,
    ) -> Any: ...

    def query(self, criteria: ProjectionQuery) -> Sequence[Any]: ...


@dataclass
class StoredProjection(SegmentableMixin):
    """Bucket row held by InMemoryProjectionStore."""

    id: int
    projection_name: str
    period: str
    key: Optional[str]
    start_date: datetime
    content: Any
    sources: Set[Tuple[str, str]] = field(default_factory=set)

    @property
    def bucket(self) -> BucketKey:
        return BucketKey(self.projection_name, self.period, self.key, self.start_date)
