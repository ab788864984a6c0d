"""
Time Series Engine — Errors
=============================
"""

from timeseries.errors import TimeSeriesError


class MergeFailed(TimeSeriesError):
    """
    A definition's merge function raised during apply().

    The bucket is left exactly as it was. The original exception is
    chained as __cause__ and kept on `cause`.
    """

    def __init__(self, projection_name: str, period: str, cause: BaseException):
        self.projection_name = projection_name
        self.period = period
        self.cause = cause
        super().__init__(
            f"Merge failed for projection '{projection_name}' "
            f"[{period}]: {type(cause).__name__}: {cause}"
        )
