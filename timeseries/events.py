"""
Time Series — Projectable Events
==================================
The engine aggregates anything that exposes a source type, an optional
source id and a timezone-aware timestamp. SourceEvent is the concrete
value used by the bundled trigger adapters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Protocol


class ProjectableEvent(Protocol):
    """Structural contract for events fed to ProjectionEngine.apply()."""

    @property
    def source_type(self) -> str: ...

    @property
    def source_id(self) -> Optional[str]: ...

    @property
    def occurred_at(self) -> datetime: ...


@dataclass(frozen=True)
class SourceEvent:
    """
    An occurrence on a source entity.

    source_type: stable label of the source (e.g. "testapp.Log").
    source_id:   id of the entity, recorded on every bucket it feeds.
    occurred_at: timezone-aware instant used for bucket alignment.
    payload:     free-form data read by key extractors and merge functions.
    subject:     the originating object itself, when one exists.
    """

    source_type: str
    occurred_at: datetime
    source_id: Optional[str] = None
    payload: Mapping[str, Any] = field(default_factory=dict)
    subject: Any = None

    def __post_init__(self) -> None:
        if not self.source_type:
            raise ValueError("SourceEvent requires a source_type.")
        if self.occurred_at.tzinfo is None:
            raise ValueError("SourceEvent requires timezone-aware occurred_at.")
        if self.source_id is not None and not isinstance(self.source_id, str):
            object.__setattr__(self, "source_id", str(self.source_id))


def source_label(source: Any) -> str:
    """Stable source type for a label, a Django model class or an instance."""
    if isinstance(source, str):
        return source
    meta = getattr(source, "_meta", None)
    if meta is None:
        raise TypeError(
            f"Cannot derive a source type from {source!r}; "
            f"pass a label string or a Django model."
        )
    return meta.label
