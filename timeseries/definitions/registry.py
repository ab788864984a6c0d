"""
Time Series Definitions — Projection Registry
===============================================
Process-wide catalog of projection definitions.

Rules:
- Each definition name registers exactly once
- Registry locks after bootstrap (no dynamic injection)
- Lookups require a locked registry
- Thread-safe for concurrent access
- Immutable after lock

Lifecycle:
    1. Create registry
    2. Register definitions (during bootstrap / AppConfig.ready)
    3. Lock registry
    4. Resolve definitions per event source
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Iterable, Optional

from timeseries.definitions.definition import ProjectionDefinition
from timeseries.definitions.errors import (
    DuplicateDefinitionError,
    RegistryLockedError,
    RegistryNotLockedError,
    UnknownDefinitionError,
)

logger = logging.getLogger("timeseries.registry")


class ProjectionRegistry:
    """
    Usage:
        registry = ProjectionRegistry()
        registry.register(page_views)
        registry.lock()

        registry.definitions_for("analytics.PageView")  # (page_views,)
    """

    def __init__(self, definitions: Iterable[ProjectionDefinition] = ()):
        self._definitions: dict[str, ProjectionDefinition] = {}
        self._locked: bool = False
        self._lock = Lock()
        for definition in definitions:
            self.register(definition)

    # ── Registration phase ────────────────────────────────────

    def register(self, definition: ProjectionDefinition) -> None:
        if not isinstance(definition, ProjectionDefinition):
            raise TypeError(
                f"Expected ProjectionDefinition, got {type(definition)}."
            )

        with self._lock:
            if self._locked:
                raise RegistryLockedError()
            if definition.name in self._definitions:
                raise DuplicateDefinitionError(definition.name)
            self._definitions[definition.name] = definition

        logger.info(
            f"Projection registered: {definition.name} "
            f"(periods: {', '.join(str(p) for p in definition.periods)})"
        )

    def lock(self) -> None:
        with self._lock:
            if self._locked:
                return
            self._locked = True

        logger.info(
            f"Projection registry locked with {len(self._definitions)} definition(s)."
        )

    @property
    def is_locked(self) -> bool:
        return self._locked

    # ── Lookup phase ──────────────────────────────────────────

    def _require_locked(self) -> None:
        if not self._locked:
            raise RegistryNotLockedError()

    def get(self, projection_name: str) -> ProjectionDefinition:
        self._require_locked()
        try:
            return self._definitions[projection_name]
        except KeyError:
            raise UnknownDefinitionError(projection_name) from None

    def find(self, projection_name: str) -> Optional[ProjectionDefinition]:
        self._require_locked()
        return self._definitions.get(projection_name)

    def definitions_for(self, source_type: str) -> tuple[ProjectionDefinition, ...]:
        """Definitions applicable to a source, in registration order."""
        self._require_locked()
        return tuple(
            definition
            for definition in self._definitions.values()
            if not definition.source_types or source_type in definition.source_types
        )

    def all(self) -> tuple[ProjectionDefinition, ...]:
        self._require_locked()
        return tuple(self._definitions.values())

    def __contains__(self, projection_name: object) -> bool:
        return projection_name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


# ══════════════════════════════════════════════════════════════
# DEFAULT REGISTRY (built at app start)
# ══════════════════════════════════════════════════════════════

_default_registry: Optional[ProjectionRegistry] = None


def set_default_registry(registry: Optional[ProjectionRegistry]) -> None:
    global _default_registry
    _default_registry = registry


def get_default_registry() -> ProjectionRegistry:
    if _default_registry is None:
        raise RegistryNotLockedError()
    return _default_registry
