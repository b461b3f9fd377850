"""Snapshot cache.

Holds the most recent Snapshot in memory, mirrors it to the settings
store on every replacement, and tells subscribers when it changes.
"""

import logging
from collections.abc import Callable

from plughealth.core.settings import MonitorSettings
from plughealth.core.store import SettingsStore
from plughealth.models.health import Snapshot

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[Snapshot], None]


class SnapshotCache:
    """Latest-snapshot holder with write-through persistence.

    Every replacement supersedes the previous snapshot entirely; no
    history is kept.

    Args:
        store: Settings store the snapshot is persisted through.
        settings: Returns the settings to persist alongside the snapshot.
    """

    def __init__(self, store: SettingsStore, settings: Callable[[], MonitorSettings]) -> None:
        self._store = store
        self._settings = settings
        self._snapshot: Snapshot | None = None
        self._listeners: list[SnapshotListener] = []

    def hydrate(self, snapshot: Snapshot | None) -> None:
        """Seed the cache from storage at startup, without persisting or notifying."""
        self._snapshot = snapshot

    def get(self) -> Snapshot | None:
        """Return the cached snapshot, or None if no scan data exists yet."""
        return self._snapshot

    def replace(self, snapshot: Snapshot) -> None:
        """Swap in a new snapshot, persist it, and notify listeners.

        The in-memory swap stands and listeners run even when persisting
        fails, so the current session keeps the fresh data.

        Args:
            snapshot: The newly completed snapshot.

        Raises:
            StoreError: If the snapshot could not be persisted.
        """
        self._snapshot = snapshot
        try:
            self._store.save(self._settings(), snapshot)
        finally:
            self._notify(snapshot)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener called after every replacement.

        Args:
            listener: Callable receiving the new snapshot.

        Returns:
            Function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, snapshot: Snapshot) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)
