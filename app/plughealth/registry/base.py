"""Abstract collaborators consumed by the scan engine.

This module defines the ExtensionRegistry and TimestampProvider
interfaces that host integrations must implement.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from plughealth.models.extension import ExtensionDescriptor


class ExtensionRegistry(ABC):
    """Abstract base class for installed-extension registries.

    Registries enumerate the extensions installed in a host
    application. Enumeration is synchronous and read-only.

    Example:
        >>> registry = ManifestDirectoryRegistry(Path(".obsidian/plugins"))
        >>> if registry.is_available():
        ...     for ext in registry.enumerate():
        ...         print(f"{ext.name}: {ext.version}")
    """

    @abstractmethod
    def enumerate(self) -> Iterator[ExtensionDescriptor]:
        """Yield every installed extension.

        Yields:
            ExtensionDescriptor instances in registry order.

        Raises:
            RegistryError: If the registry cannot be read at all.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the registry can be enumerated.

        Returns:
            True if enumerate() is expected to succeed, False otherwise.
        """


class TimestampProvider(ABC):
    """Abstract base class for last-modified lookups.

    Providers answer, per extension id, when the extension's manifest
    artifact last changed. Lookups may suspend on I/O and may fail;
    callers treat failures as an unknown timestamp.
    """

    @abstractmethod
    async def last_modified(self, extension_id: str) -> int | None:
        """Look up the last-modified time of an extension.

        Args:
            extension_id: Identifier of the extension.

        Returns:
            Epoch milliseconds, or None if no usable timestamp exists.

        Raises:
            OSError: If the underlying artifact cannot be read.
        """
