"""
Time Series — Bootstrap
=========================
Builds process-wide state once, at Django app start:

    1. Import every TIME_SERIES["DEFINITIONS"] entry
    2. Register them in a new ProjectionRegistry and lock it
    3. Install it as the default registry
    4. Connect post_save triggers for TIME_SERIES["TRIGGER_MODELS"]

Any failure raises ImproperlyConfigured. No fallback, no partial boot.
"""

from __future__ import annotations

import logging
from typing import Iterable

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from timeseries.conf import get_setting
from timeseries.definitions import (
    DefinitionRegistryError,
    ProjectionDefinition,
    ProjectionRegistry,
    set_default_registry,
)
from timeseries.errors import TimeSeriesError

logger = logging.getLogger("timeseries.bootstrap")


def load_definitions(paths: Iterable[str]) -> list[ProjectionDefinition]:
    definitions = []
    for path in paths:
        try:
            definition = import_string(path)
        except ImportError as exc:
            raise ImproperlyConfigured(
                f"TIME_SERIES definition '{path}' cannot be imported: {exc}"
            ) from exc
        except (TimeSeriesError, ValueError, TypeError) as exc:
            raise ImproperlyConfigured(
                f"TIME_SERIES definition '{path}' is invalid: {exc}"
            ) from exc
        if not isinstance(definition, ProjectionDefinition):
            raise ImproperlyConfigured(
                f"TIME_SERIES definition '{path}' is a {type(definition).__name__}, "
                f"not a ProjectionDefinition."
            )
        definitions.append(definition)
    return definitions


def build_registry(paths: Iterable[str]) -> ProjectionRegistry:
    registry = ProjectionRegistry()
    try:
        for definition in load_definitions(paths):
            registry.register(definition)
    except DefinitionRegistryError as exc:
        raise ImproperlyConfigured(str(exc)) from exc
    registry.lock()
    return registry


def bootstrap_from_settings() -> ProjectionRegistry:
    registry = build_registry(get_setting("DEFINITIONS"))
    set_default_registry(registry)

    trigger_models = get_setting("TRIGGER_MODELS")
    if trigger_models:
        from timeseries.engine import ProjectionEngine
        from timeseries.store.django_store import DjangoProjectionStore
        from timeseries.triggers import ProjectionTrigger, connect_model

        trigger = ProjectionTrigger(ProjectionEngine(DjangoProjectionStore()))
        for label in trigger_models:
            try:
                model = apps.get_model(label)
            except (LookupError, ValueError) as exc:
                raise ImproperlyConfigured(
                    f"TIME_SERIES trigger model '{label}' not found: {exc}"
                ) from exc
            connect_model(
                model,
                trigger,
                timestamp_field=get_setting("TIMESTAMP_FIELD"),
            )

    logger.info(
        f"Time series bootstrap complete: {len(registry)} definition(s), "
        f"{len(trigger_models)} trigger model(s)"
    )
    return registry
