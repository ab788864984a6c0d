"""
Time Series Periods — Public API
==================================
Period parsing and bucket-alignment arithmetic.
"""

from timeseries.periods.errors import InvalidPeriodExpression
from timeseries.periods.period import EPOCH, RESOLUTION, Period

__all__ = [
    "EPOCH",
    "RESOLUTION",
    "Period",
    "InvalidPeriodExpression",
]
