"""
Time Series Projections
=========================
Aggregates timestamped events into fixed-width time buckets and reads
them back as ranges or dense, gap-filled series.

Data flow:
    event → ProjectionEngine.apply() → Period.aligned_start() →
    store.merge() (atomic per bucket) → ProjectionQuery / TimeSeriesMaterializer

Importing this package never touches Django models. The ORM pieces live
in timeseries.store.models and timeseries.store.django_store.
"""

from timeseries.definitions import (
    ProjectionDefinition,
    ProjectionRegistry,
    get_default_registry,
)
from timeseries.engine import MergeFailed, ProjectionEngine
from timeseries.errors import TimeSeriesError
from timeseries.events import ProjectableEvent, SourceEvent
from timeseries.periods import InvalidPeriodExpression, Period
from timeseries.query import (
    MissingProjectionNameException,
    MissingProjectionPeriodException,
    ProjectionQuery,
)
from timeseries.series import Segment, TimeSeriesMaterializer
from timeseries.store import InMemoryProjectionStore

__all__ = [
    "Period",
    "ProjectionDefinition",
    "ProjectionRegistry",
    "get_default_registry",
    "ProjectionEngine",
    "ProjectableEvent",
    "SourceEvent",
    "ProjectionQuery",
    "Segment",
    "TimeSeriesMaterializer",
    "InMemoryProjectionStore",
    "TimeSeriesError",
    "InvalidPeriodExpression",
    "MergeFailed",
    "MissingProjectionNameException",
    "MissingProjectionPeriodException",
]
