"""
Time Series Store — Public API
================================
Store boundary types and the in-memory store.

The Django pieces (models, DjangoProjectionStore) live in
timeseries.store.models and timeseries.store.django_store and are
imported only once the app registry is ready.
"""

from timeseries.store.base import BucketKey, ProjectionStore, SourceRef, StoredProjection
from timeseries.store.memory import InMemoryProjectionStore

__all__ = [
    "BucketKey",
    "ProjectionStore",
    "SourceRef",
    "StoredProjection",
    "InMemoryProjectionStore",
]
