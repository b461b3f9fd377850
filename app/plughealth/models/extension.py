"""Extension descriptor model.

Descriptors are supplied by the host's extension registry and are
never modified by the health engine.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ExtensionDescriptor:
    """An installed extension as reported by the registry.

    Attributes:
        id: Unique extension identifier (e.g., 'dataview').
        name: Human-readable display name.
        version: Installed version string.
    """

    id: str
    name: str
    version: str

    def __post_init__(self) -> None:
        """Validate descriptor data after initialization."""
        if not self.id:
            msg = "Extension id cannot be empty"
            raise ValueError(msg)
