"""
Time Series — Base Errors
===========================
Every error raised by the library derives from TimeSeriesError.
Store-layer errors (django.db.Error) are never wrapped.
"""


class TimeSeriesError(Exception):
    """Base error for time series projections."""
    pass
