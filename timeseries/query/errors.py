"""
Time Series Query — Errors
============================
Raised when a range query is built without its prerequisites.
These are programming errors: surfaced immediately, never retried.
"""

from timeseries.errors import TimeSeriesError


class QueryError(TimeSeriesError):
    """Base error for projection queries."""
    pass


class MissingProjectionNameException(QueryError):
    """between()/to_time_series() used before a projection name filter."""

    def __init__(self):
        super().__init__(
            "A projection name filter must be applied before a date range."
        )


class MissingProjectionPeriodException(QueryError):
    """between()/to_time_series() used before a period filter."""

    def __init__(self):
        super().__init__(
            "A projection period filter must be applied before a date range."
        )
