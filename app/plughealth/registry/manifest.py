"""Plugin-directory registry and manifest timestamp provider.

Reads a host plugin directory laid out as ``<plugins_dir>/<id>/manifest.json``.
The directory name is the extension id; name and version come from the
manifest JSON.
"""

import asyncio
import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from plughealth.core.errors import RegistryError
from plughealth.models.extension import ExtensionDescriptor
from plughealth.registry.base import ExtensionRegistry, TimestampProvider

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"

# Version shown when a manifest omits one
UNKNOWN_VERSION = "unknown"


def manifest_path(plugins_dir: Path, extension_id: str) -> Path:
    """Path to the manifest file of an extension."""
    return plugins_dir / extension_id / MANIFEST_FILENAME


class ManifestDirectoryRegistry(ExtensionRegistry):
    """Registry backed by a directory of plugin folders.

    Each sub-directory containing a ``manifest.json`` is one installed
    extension. Directories without a manifest, or with an unreadable
    one, are skipped with a warning.

    Args:
        plugins_dir: Directory holding one folder per installed plugin.
    """

    def __init__(self, plugins_dir: Path) -> None:
        self._plugins_dir = plugins_dir

    @property
    def plugins_dir(self) -> Path:
        """Directory being enumerated."""
        return self._plugins_dir

    def is_available(self) -> bool:
        """Check that the plugins directory exists."""
        return self._plugins_dir.is_dir()

    def enumerate(self) -> Iterator[ExtensionDescriptor]:
        """Yield a descriptor for each plugin folder, sorted by folder name.

        Yields:
            ExtensionDescriptor for each readable manifest.

        Raises:
            RegistryError: If the plugins directory is missing or unreadable.
        """
        if not self.is_available():
            msg = f"Plugins directory not found: {self._plugins_dir}"
            raise RegistryError(msg)

        try:
            entries = sorted(p for p in self._plugins_dir.iterdir() if p.is_dir())
        except OSError as e:
            msg = f"Cannot read plugins directory {self._plugins_dir}: {e}"
            raise RegistryError(msg) from e

        for entry in entries:
            descriptor = self._read_descriptor(entry)
            if descriptor is not None:
                yield descriptor

    def _read_descriptor(self, plugin_dir: Path) -> ExtensionDescriptor | None:
        """Parse one plugin folder's manifest.

        Args:
            plugin_dir: Folder of a single plugin.

        Returns:
            ExtensionDescriptor, or None if the manifest is missing or invalid.
        """
        path = plugin_dir / MANIFEST_FILENAME
        try:
            if not path.is_file():
                logger.debug("No manifest in %s, skipping", plugin_dir)
                return None
            data: Any = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Skipping unreadable manifest %s: %s", path, e)
            return None

        if not isinstance(data, dict):
            logger.warning("Skipping manifest %s: expected a JSON object", path)
            return None

        extension_id = plugin_dir.name
        name = data.get("name")
        version = data.get("version")
        return ExtensionDescriptor(
            id=extension_id,
            name=name if isinstance(name, str) and name else extension_id,
            version=version if isinstance(version, str) and version else UNKNOWN_VERSION,
        )


class ManifestMtimeProvider(TimestampProvider):
    """Reports a plugin's manifest modification time as its last update.

    The blocking ``stat`` call runs in a worker thread so that a slow
    filesystem does not stall the event loop.

    Args:
        plugins_dir: Directory holding one folder per installed plugin.
    """

    def __init__(self, plugins_dir: Path) -> None:
        self._plugins_dir = plugins_dir

    async def last_modified(self, extension_id: str) -> int | None:
        """Return the manifest mtime in epoch milliseconds.

        Returns:
            Epoch milliseconds, or None when the mtime is zero.

        Raises:
            OSError: If the manifest cannot be stat'ed.
        """
        path = manifest_path(self._plugins_dir, extension_id)
        stat = await asyncio.to_thread(path.stat)
        mtime_ms = stat.st_mtime_ns // 1_000_000
        if mtime_ms <= 0:
            return None
        return mtime_ms
