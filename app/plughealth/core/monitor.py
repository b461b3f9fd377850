"""Wiring of the scan engine.

Loads the persisted state, hydrates the snapshot cache and assembles
the aggregator and scheduler around a plugin directory.
"""

import logging
from pathlib import Path

from plughealth.core.aggregator import ScanAggregator
from plughealth.core.cache import SnapshotCache
from plughealth.core.notify import ConsoleNotifier, Notifier
from plughealth.core.paths import get_default_plugins_dir
from plughealth.core.scheduler import ScanScheduler
from plughealth.core.settings import MonitorSettings
from plughealth.core.store import SettingsStore
from plughealth.registry.base import ExtensionRegistry, TimestampProvider
from plughealth.registry.manifest import ManifestDirectoryRegistry, ManifestMtimeProvider
from plughealth.utils.clock import Clock, now_ms

logger = logging.getLogger(__name__)


def resolve_plugins_dir(settings: MonitorSettings, override: Path | None = None) -> Path:
    """Pick the plugin directory to inspect.

    Priority: explicit override, then the stored setting, then the
    default location.
    """
    if override is not None:
        return override
    if settings.plugins_dir:
        return Path(settings.plugins_dir).expanduser()
    return get_default_plugins_dir()


def build_scheduler(
    store: SettingsStore | None = None,
    *,
    plugins_dir: Path | None = None,
    registry: ExtensionRegistry | None = None,
    timestamps: TimestampProvider | None = None,
    notifier: Notifier | None = None,
    clock: Clock = now_ms,
) -> ScanScheduler:
    """Create a scheduler with its cache hydrated from storage.

    Args:
        store: Settings store (default location if None).
        plugins_dir: Plugin directory override.
        registry: Registry override (plugin-directory registry by default).
        timestamps: Timestamp provider override (manifest mtime by default).
        notifier: Notice sink (console by default).
        clock: Current time in epoch milliseconds.

    Returns:
        A ScanScheduler ready for start() or request_scan().
    """
    store = store if store is not None else SettingsStore()
    stored = store.load()
    settings = stored.settings

    directory = resolve_plugins_dir(settings, plugins_dir)
    logger.debug("Inspecting plugins in %s", directory)

    cache = SnapshotCache(store, lambda: settings)
    cache.hydrate(stored.snapshot)

    aggregator = ScanAggregator(
        registry if registry is not None else ManifestDirectoryRegistry(directory),
        timestamps if timestamps is not None else ManifestMtimeProvider(directory),
        clock=clock,
        lookup_timeout=settings.lookup_timeout_seconds,
    )

    return ScanScheduler(
        aggregator,
        cache,
        store,
        notifier if notifier is not None else ConsoleNotifier(),
        settings,
    )
