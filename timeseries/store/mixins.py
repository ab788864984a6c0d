"""
Time Series Store — Projectable Model Mixin
=============================================
Gives host models access to the buckets they fed.

    class Log(Projectable, models.Model):
        ...

    log.projections().named("log_count")
    log.first_projection()
"""

from __future__ import annotations

from typing import Optional

from timeseries.events import source_label


class Projectable:

    @classmethod
    def projection_source_type(cls) -> str:
        return source_label(cls)

    def projections(self):
        from timeseries.store.models import Projection

        return Projection.objects.from_source(self.projection_source_type(), self.pk)

    def first_projection(self) -> Optional["Projection"]:
        return self.projections().order_by("id").first()
