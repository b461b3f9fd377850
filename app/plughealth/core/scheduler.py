"""Single-flight scan scheduler.

Decides when scans run: at most one scan is in progress at any time,
overlapping requests are rejected rather than queued, and an optional
repeating timer triggers silent periodic scans.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from plughealth.core.aggregator import ScanAggregator
from plughealth.core.cache import SnapshotCache, SnapshotListener
from plughealth.core.errors import RegistryError, StoreError
from plughealth.core.notify import Notifier
from plughealth.core.settings import MonitorSettings
from plughealth.core.store import SettingsStore
from plughealth.models.health import ScanOrigin, Snapshot

logger = logging.getLogger(__name__)

SCAN_COMPLETED_NOTICE = "Plugin health scan completed"
SCAN_RUNNING_NOTICE = "Plugin health scan already running"


@dataclass(slots=True)
class ScanState:
    """Mutable scheduler state.

    Attributes:
        scanning: True while a scan is in progress.
        timer: Task driving periodic scans, or None when not armed.
        last_error: Failure message of the most recent scan, if any.
    """

    scanning: bool = False
    timer: asyncio.Task[None] | None = None
    last_error: str | None = None

    @property
    def timer_armed(self) -> bool:
        """Check if a periodic timer is currently running."""
        return self.timer is not None and not self.timer.done()


class ScanScheduler:
    """Runs scans one at a time and owns the auto-scan timer.

    All methods must be called from the event loop thread. The
    scanning flag is checked and set without an intervening ``await``,
    which is what makes the gate single-flight.

    Args:
        aggregator: Produces snapshots.
        cache: Receives each completed snapshot.
        store: Persists settings changes.
        notifier: Sink for user-visible notices.
        settings: Live settings, shared with the cache.
        state: Optional pre-built state (fresh state by default).
    """

    def __init__(
        self,
        aggregator: ScanAggregator,
        cache: SnapshotCache,
        store: SettingsStore,
        notifier: Notifier,
        settings: MonitorSettings,
        *,
        state: ScanState | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._cache = cache
        self._store = store
        self._notifier = notifier
        self._settings = settings
        self._state = state if state is not None else ScanState()

    @property
    def state(self) -> ScanState:
        """Current scheduler state."""
        return self._state

    @property
    def settings(self) -> MonitorSettings:
        """Live monitor settings."""
        return self._settings

    def get_cached_snapshot(self) -> Snapshot | None:
        """Return the latest snapshot, or None if no scan data exists yet."""
        return self._cache.get()

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a callback invoked after every snapshot replacement."""
        return self._cache.subscribe(listener)

    # === Scan lifecycle ===

    async def start(self) -> Snapshot | None:
        """Initialize scheduling and run the startup scan.

        The timer is armed only if auto-scan is enabled; the startup scan
        always runs so that a fresh install has data.

        Returns:
            The startup snapshot, or None if the scan did not complete.
        """
        self.arm_timer()
        return await self.request_scan(ScanOrigin.STARTUP)

    async def request_scan(self, origin: ScanOrigin = ScanOrigin.MANUAL) -> Snapshot | None:
        """Run a scan unless one is already in progress.

        Args:
            origin: What triggered the request. Only MANUAL requests
                announce completion or rejection.

        Returns:
            The new snapshot, or None if the request was rejected or the
            registry could not be read.
        """
        if self._state.scanning:
            if origin is ScanOrigin.MANUAL:
                self._notifier.info(SCAN_RUNNING_NOTICE)
            else:
                logger.debug("Skipping %s scan: a scan is already running", origin.value)
            return None

        self._state.scanning = True
        self._state.last_error = None
        try:
            return await self._run_scan(origin)
        finally:
            self._state.scanning = False

    async def _run_scan(self, origin: ScanOrigin) -> Snapshot | None:
        logger.debug("Starting %s scan", origin.value)
        try:
            snapshot = await self._aggregator.aggregate()
        except RegistryError as e:
            message = f"Plugin health scan failed: {e}"
            self._state.last_error = message
            if origin is ScanOrigin.MANUAL:
                self._notifier.error(message)
            else:
                logger.warning(message)
            return None

        try:
            self._cache.replace(snapshot)
        except StoreError as e:
            message = f"Could not save plugin health results: {e}"
            self._state.last_error = message
            self._notifier.error(message)
            return snapshot

        logger.debug(
            "Scan finished: %d plugins, %d at risk",
            len(snapshot.results),
            snapshot.summary.at_risk,
        )
        if origin is ScanOrigin.MANUAL:
            self._notifier.success(SCAN_COMPLETED_NOTICE)
        return snapshot

    # === Timer ===

    def arm_timer(self) -> bool:
        """Arm the periodic timer from the current settings.

        Any previously armed timer is cancelled first. Requires a
        running event loop.

        Returns:
            True if a timer was armed, False if auto-scan is disabled.
        """
        self.disarm_timer()
        if not self._settings.enable_auto_scan:
            return False

        period = self._settings.interval_ms / 1000
        logger.debug(
            "Arming auto-scan every %.1f hours",
            self._settings.effective_interval_hours,
        )
        self._state.timer = asyncio.create_task(self._run_timer(period))
        return True

    def disarm_timer(self) -> None:
        """Cancel and release the periodic timer, if armed."""
        timer = self._state.timer
        self._state.timer = None
        if timer is not None and not timer.done():
            timer.cancel()

    def reschedule(self) -> bool:
        """Re-arm the timer so that changed settings take effect.

        Returns:
            True if a timer is now armed.
        """
        return self.arm_timer()

    async def _run_timer(self, period: float) -> None:
        while True:
            await asyncio.sleep(period)
            try:
                # Shielded so that disarming never interrupts a running scan
                await asyncio.shield(self.request_scan(ScanOrigin.TIMER))
            except Exception as e:
                logger.exception("Scheduled scan failed: %s", e)
                self._state.last_error = f"Plugin health scan failed: {e}"

    async def shutdown(self) -> None:
        """Cancel the timer. An in-flight scan is not waited for.

        Never raises: scheduled scans log their own failures.
        """
        timer = self._state.timer
        self.disarm_timer()
        if timer is not None:
            try:
                await timer
            except asyncio.CancelledError:
                pass

    # === Settings hooks ===

    def set_auto_scan_enabled(self, enabled: bool) -> bool:
        """Toggle auto-scan and persist the change.

        Disabling releases the armed timer immediately; enabling takes
        effect on the next start() or reschedule().

        Returns:
            True if the change was persisted.
        """
        self._settings.enable_auto_scan = enabled
        if not enabled:
            self.disarm_timer()
        return self.save_settings()

    def set_interval_hours(self, hours: object) -> bool:
        """Change the auto-scan interval and persist it.

        Non-numeric values fall back to the default; the value is clamped
        when the timer is next armed, not here.

        Returns:
            True if the change was persisted.
        """
        self._settings.auto_scan_interval_hours = hours  # type: ignore[assignment]
        return self.save_settings()

    def save_settings(self) -> bool:
        """Persist the live settings together with the cached snapshot.

        Failures are reported through the notifier, never raised.

        Returns:
            True if the settings were written.
        """
        try:
            self._store.save(self._settings, self._cache.get())
        except StoreError as e:
            self._notifier.error(str(e))
            return False
        return True
