"""
Time Series Engine — Public API
=================================
"""

from timeseries.engine.engine import ProjectionEngine
from timeseries.engine.errors import MergeFailed

__all__ = [
    "ProjectionEngine",
    "MergeFailed",
]
