"""
Time Series Definitions — Registry Errors
===========================================
"""

from timeseries.errors import TimeSeriesError


class DefinitionRegistryError(TimeSeriesError):
    """Base error for projection definition registry operations."""
    pass


class DuplicateDefinitionError(DefinitionRegistryError):
    """A definition with this name is already registered."""

    def __init__(self, projection_name: str):
        self.projection_name = projection_name
        super().__init__(
            f"Projection definition '{projection_name}' is already registered."
        )


class UnknownDefinitionError(DefinitionRegistryError):
    """No definition registered under this name."""

    def __init__(self, projection_name: str):
        self.projection_name = projection_name
        super().__init__(
            f"Projection definition '{projection_name}' is not registered."
        )


class RegistryLockedError(DefinitionRegistryError):
    """Registry is locked; no modifications allowed."""

    def __init__(self):
        super().__init__(
            "Projection registry is locked after bootstrap. "
            "No dynamic registration allowed."
        )


class RegistryNotLockedError(DefinitionRegistryError):
    """Lookup requires a locked registry."""

    def __init__(self):
        super().__init__(
            "Projection registry must be locked before lookups. "
            "Call lock() after all definitions are registered."
        )
