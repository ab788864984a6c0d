"""
Time Series — Settings
========================
Library settings live in one Django setting:

    TIME_SERIES = {
        "DEFINITIONS": ["analytics.projections.page_views"],
        "TRIGGER_MODELS": ["analytics.PageView"],
        "TIMESTAMP_FIELD": "created_at",
    }

DEFINITIONS:     dotted paths to ProjectionDefinition objects.
TRIGGER_MODELS:  model labels whose creation feeds the engine.
TIMESTAMP_FIELD: instance attribute used as the event time; the default
                 clock is used when the attribute is missing or empty.
"""

from typing import Any

from django.conf import settings

DEFAULTS = {
    "DEFINITIONS": (),
    "TRIGGER_MODELS": (),
    "TIMESTAMP_FIELD": "created_at",
}


def get_setting(name: str) -> Any:
    if name not in DEFAULTS:
        raise KeyError(f"Unknown TIME_SERIES setting '{name}'.")
    return getattr(settings, "TIME_SERIES", {}).get(name, DEFAULTS[name])
