"""
Time Series — Triggers
========================
Collaborators that decide WHEN the engine runs.

ProjectionTrigger:
    Explicit entry point. Resolves the definitions registered for the
    event's source and calls ProjectionEngine.apply(). MergeFailed is
    surfaced to the caller, never dropped.

connect_model():
    Opt-in Django post_save wiring. On creation of a model instance a
    SourceEvent is built and handed to the trigger, inside the caller's
    transaction.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from django.db.models.signals import post_save

from timeseries.definitions import ProjectionRegistry, get_default_registry
from timeseries.engine import ProjectionEngine
from timeseries.events import ProjectableEvent, SourceEvent, source_label
from timeseries.time import now_utc

logger = logging.getLogger("timeseries.triggers")


class ProjectionTrigger:

    def __init__(
        self,
        engine: ProjectionEngine,
        registry: Optional[ProjectionRegistry] = None,
    ):
        self.engine = engine
        self._registry = registry

    @property
    def registry(self) -> ProjectionRegistry:
        return self._registry if self._registry is not None else get_default_registry()

    def handle(self, event: ProjectableEvent) -> List[Any]:
        definitions = self.registry.definitions_for(event.source_type)
        if not definitions:
            logger.debug(f"No projections registered for source '{event.source_type}'")
            return []
        return self.engine.apply(event, definitions)

    __call__ = handle


def model_event(instance: Any, timestamp_field: str = "created_at") -> SourceEvent:
    """SourceEvent for a saved model instance."""
    occurred_at = getattr(instance, timestamp_field, None) or now_utc()
    return SourceEvent(
        source_type=source_label(instance),
        source_id=str(instance.pk),
        occurred_at=occurred_at,
        subject=instance,
    )


def connect_model(
    model: Any,
    trigger: ProjectionTrigger,
    *,
    timestamp_field: str = "created_at",
    dispatch_uid: Optional[str] = None,
) -> None:
    """Feed every newly created `model` instance to `trigger`."""
    label = source_label(model)

    def on_created(sender, instance, created, raw=False, **kwargs):
        if not created or raw:
            return
        trigger.handle(model_event(instance, timestamp_field))

    post_save.connect(
        on_created,
        sender=model,
        weak=False,
        dispatch_uid=dispatch_uid or f"timeseries.trigger.{label}",
    )
    logger.info(f"Projection trigger connected: {label} (post_save)")


def disconnect_model(model: Any, *, dispatch_uid: Optional[str] = None) -> bool:
    label = source_label(model)
    return post_save.disconnect(
        sender=model,
        dispatch_uid=dispatch_uid or f"timeseries.trigger.{label}",
    )
