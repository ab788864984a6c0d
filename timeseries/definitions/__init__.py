"""
Time Series Definitions — Public API
======================================
"""

from timeseries.definitions.definition import ProjectionDefinition
from timeseries.definitions.errors import (
    DefinitionRegistryError,
    DuplicateDefinitionError,
    RegistryLockedError,
    RegistryNotLockedError,
    UnknownDefinitionError,
)
from timeseries.definitions.registry import (
    ProjectionRegistry,
    get_default_registry,
    set_default_registry,
)

__all__ = [
    "ProjectionDefinition",
    "ProjectionRegistry",
    "get_default_registry",
    "set_default_registry",
    "DefinitionRegistryError",
    "DuplicateDefinitionError",
    "RegistryLockedError",
    "RegistryNotLockedError",
    "UnknownDefinitionError",
]
