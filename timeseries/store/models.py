"""
Time Series Store — Projection Bucket Model
=============================================
One row per (projection_name, period, key, start_date).

RULES:
- The 4-tuple is the natural key and the unit of merge atomicity
- Created on the first event landing in a bucket
- content is replaced on every later event in the same bucket
- Never deleted by the engine (retention is external)
- end_date is derived, never stored

Two conditional unique constraints enforce the natural key because SQL
treats NULL keys as distinct.
"""

from __future__ import annotations

from typing import Any

from django.db import models
from django.db.models import Q

from timeseries.events import source_label
from timeseries.series.segment import SegmentableMixin
from timeseries.store.base import BucketKey
from timeseries.store.querysets import ProjectionQuerySet


class Projection(SegmentableMixin, models.Model):
    """Aggregated bucket of one projection definition."""

    projection_name = models.CharField(
        max_length=255,
        help_text="Name of the ProjectionDefinition that owns this bucket.",
    )

    period = models.CharField(
        max_length=64,
        help_text="Canonical period string, e.g. '5 minutes'.",
    )

    key = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Partition key. Null = single bucket stream keyed by time.",
    )

    start_date = models.DateTimeField(
        help_text="Aligned bucket start (inclusive, UTC).",
    )

    content = models.JSONField(
        default=dict,
        blank=True,
        null=True,
        help_text="Opaque payload produced by the definition's merge function. Null when the merge returns None.",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProjectionQuerySet.as_manager()

    class Meta:
        db_table = "timeseries_projections"
        ordering = ["start_date", "id"]
        indexes = [
            models.Index(
                fields=["projection_name", "period", "start_date"],
                name="idx_proj_name_period_start",
            ),
            models.Index(
                fields=["key"],
                name="idx_proj_key",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["projection_name", "period", "key", "start_date"],
                condition=Q(key__isnull=False),
                name="uq_proj_keyed_bucket",
            ),
            models.UniqueConstraint(
                fields=["projection_name", "period", "start_date"],
                condition=Q(key__isnull=True),
                name="uq_proj_unkeyed_bucket",
            ),
        ]

    def __str__(self):
        key = f" key={self.key}" if self.key is not None else ""
        return f"{self.projection_name} [{self.period}]{key} @ {self.start_date.isoformat()}"

    @property
    def bucket(self) -> BucketKey:
        return BucketKey(self.projection_name, self.period, self.key, self.start_date)

    def source_ids(self, source: Any) -> list[str]:
        return list(
            self.sources.filter(source_type=source_label(source))
            .order_by("id")
            .values_list("source_id", flat=True)
        )

    def source_objects(self, model: Any) -> models.QuerySet:
        """Rows of `model` that contributed to this bucket."""
        return model._default_manager.filter(pk__in=self.source_ids(model))


class ProjectionSource(models.Model):
    """Link from a bucket to a source entity that fed it."""

    projection = models.ForeignKey(
        Projection,
        on_delete=models.CASCADE,
        related_name="sources",
    )
    source_type = models.CharField(
        max_length=255,
        help_text="Source label, e.g. 'analytics.PageView'.",
    )
    source_id = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "timeseries_projection_sources"
        ordering = ["id"]
        indexes = [
            models.Index(
                fields=["source_type", "source_id"],
                name="idx_proj_src_type_id",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["projection", "source_type", "source_id"],
                name="uq_proj_src_link",
            ),
        ]

    def __str__(self):
        return f"{self.source_type}:{self.source_id} → {self.projection_id}"
