"""Extension registries and timestamp providers.

This module exports the collaborator interfaces and the plugin-directory
implementations used by the scan engine.
"""

from plughealth.registry.base import ExtensionRegistry, TimestampProvider
from plughealth.registry.manifest import ManifestDirectoryRegistry, ManifestMtimeProvider

__all__ = [
    "ExtensionRegistry",
    "ManifestDirectoryRegistry",
    "ManifestMtimeProvider",
    "TimestampProvider",
]
