import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Projection",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "projection_name",
                    models.CharField(
                        help_text="Name of the ProjectionDefinition that owns this bucket.",
                        max_length=255,
                    ),
                ),
                (
                    "period",
                    models.CharField(help_text="Canonical period string, e.g. '5 minutes'.", max_length=64),
                ),
                (
                    "key",
                    models.CharField(
                        blank=True,
                        help_text="Partition key. Null = single bucket stream keyed by time.",
                        max_length=255,
                        null=True,
                    ),
                ),
                ("start_date", models.DateTimeField(help_text="Aligned bucket start (inclusive, UTC).")),
                (
                    "content",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Opaque payload produced by the definition's merge function. Null when the merge returns None.",
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "timeseries_projections",
                "ordering": ["start_date", "id"],
                "indexes": [
                    models.Index(
                        fields=["projection_name", "period", "start_date"],
                        name="idx_proj_name_period_start",
                    ),
                    models.Index(fields=["key"], name="idx_proj_key"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("key__isnull", False)),
                        fields=("projection_name", "period", "key", "start_date"),
                        name="uq_proj_keyed_bucket",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("key__isnull", True)),
                        fields=("projection_name", "period", "start_date"),
                        name="uq_proj_unkeyed_bucket",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProjectionSource",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "source_type",
                    models.CharField(help_text="Source label, e.g. 'analytics.PageView'.", max_length=255),
                ),
                ("source_id", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "projection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sources",
                        to="timeseries.projection",
                    ),
                ),
            ],
            options={
                "db_table": "timeseries_projection_sources",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["source_type", "source_id"], name="idx_proj_src_type_id"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("projection", "source_type", "source_id"),
                        name="uq_proj_src_link",
                    ),
                ],
            },
        ),
    ]
