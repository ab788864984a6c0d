"""
Time Series Query — Public API
================================
"""

from timeseries.query.criteria import ProjectionQuery, normalize_keys
from timeseries.query.errors import (
    MissingProjectionNameException,
    MissingProjectionPeriodException,
    QueryError,
)

__all__ = [
    "ProjectionQuery",
    "normalize_keys",
    "QueryError",
    "MissingProjectionNameException",
    "MissingProjectionPeriodException",
]
