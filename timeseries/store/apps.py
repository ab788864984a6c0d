"""
Time Series Store — App Configuration
=======================================
Owns the projection bucket tables.

On ready():
- builds the default ProjectionRegistry from settings.TIME_SERIES
- locks it
- connects post_save triggers for TIME_SERIES["TRIGGER_MODELS"]

Bad configuration raises ImproperlyConfigured and prevents startup.
"""

from django.apps import AppConfig


class TimeSeriesStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "timeseries.store"
    label = "timeseries"
    verbose_name = "Time Series Projections"

    def ready(self):
        from timeseries.bootstrap import bootstrap_from_settings
        bootstrap_from_settings()
