"""
Time Series Definitions — Projection Definition
=================================================
Static description of one named aggregation.

A definition states:
- which periods it maintains (non-empty)
- which event sources it applies to (empty = every source)
- an optional key extractor (event -> str | None)
- a seed value for new buckets
- a merge function (current content, event) -> new content

Merge functions must be pure and total over JSON-serializable content.
The engine may call them more than once for a single event when it
loses an insert race; only the last result is stored.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Optional, Tuple

from timeseries.periods import Period

KeyExtractor = Callable[[Any], Optional[Any]]
MergeFunction = Callable[[Any, Any], Any]


@dataclass(frozen=True, eq=False)
class ProjectionDefinition:
    """
    Usage:
        page_views = ProjectionDefinition(
            name="page_views",
            periods=("5 minutes", "1 hour"),
            seed={"count": 0},
            merge=lambda content, event: {"count": content["count"] + 1},
            source_types=frozenset({"analytics.PageView"}),
        )
    """

    name: str
    periods: Tuple[Period, ...]
    merge: MergeFunction
    seed: Any = None
    key: Optional[KeyExtractor] = None
    source_types: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.name or not isinstance(self.name, str):
            raise ValueError("ProjectionDefinition requires a non-empty name.")
        if not callable(self.merge):
            raise ValueError(
                f"Definition '{self.name}': merge must be callable, "
                f"got {type(self.merge)}."
            )
        if self.key is not None and not callable(self.key):
            raise ValueError(
                f"Definition '{self.name}': key extractor must be callable."
            )

        periods = self.periods
        if isinstance(periods, (str, Period)):
            periods = (periods,)
        parsed = []
        for expression in periods:
            period = Period.parse(expression)
            if period not in parsed:
                parsed.append(period)
        if not parsed:
            raise ValueError(
                f"Definition '{self.name}' must declare at least one period."
            )
        object.__setattr__(self, "periods", tuple(parsed))
        object.__setattr__(self, "source_types", frozenset(self.source_types))

    def applies_to(self, event: Any) -> bool:
        if not self.source_types:
            return True
        return event.source_type in self.source_types

    def key_for(self, event: Any) -> Optional[str]:
        """Partition key for the event; None means no key partition."""
        if self.key is None:
            return None
        value = self.key(event)
        return None if value is None else str(value)

    def seed_content(self) -> Any:
        """A fresh copy of the seed, safe for merge functions to mutate."""
        return copy.deepcopy(self.seed)

    def has_period(self, period: "str | Period") -> bool:
        return Period.parse(period) in self.periods
