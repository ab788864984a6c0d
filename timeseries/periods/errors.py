"""
Time Series Periods — Errors
==============================
A bad period silently degrades every downstream computation,
so parse failures are always raised, never recovered.
"""

from timeseries.errors import TimeSeriesError


class InvalidPeriodExpression(TimeSeriesError):
    """Period expression could not be parsed into a fixed duration."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(
            f"Invalid period expression '{expression}': {reason}"
        )
