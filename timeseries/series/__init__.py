"""
Time Series Series — Public API
=================================
Segments and gap-filled time-series materialization.
"""

from timeseries.series.materializer import (
    TimeSeriesMaterializer,
    fill_gaps,
    require_series_key,
    time_series_window,
)
from timeseries.series.segment import Segment, SegmentableMixin

__all__ = [
    "Segment",
    "SegmentableMixin",
    "TimeSeriesMaterializer",
    "fill_gaps",
    "require_series_key",
    "time_series_window",
]
