"""Exception hierarchy for plughealth."""


class PlugHealthError(Exception):
    """Base exception for plughealth errors."""


class RegistryError(PlugHealthError):
    """Raised when installed plugins cannot be enumerated."""


class StoreError(PlugHealthError):
    """Raised when the settings store cannot be read or written."""
