"""Scan aggregator.

Walks the installed extensions, looks up each one's last-modified time,
classifies it, and assembles a sorted, summarized Snapshot.
"""

import asyncio
import logging

from plughealth.core.classifier import classify
from plughealth.models.extension import ExtensionDescriptor
from plughealth.models.health import HealthRecord, HealthSummary, Snapshot
from plughealth.registry.base import ExtensionRegistry, TimestampProvider
from plughealth.utils.clock import Clock, now_ms

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT = 5.0


class ScanAggregator:
    """Builds one Snapshot from the registry and a timestamp provider.

    A failed or slow timestamp lookup only affects its own extension,
    which is then scored as having no known update date.

    Args:
        registry: Source of installed extension descriptors.
        timestamps: Per-extension last-modified lookup.
        clock: Returns the current time in epoch milliseconds.
        lookup_timeout: Seconds to wait for a single timestamp lookup.
    """

    def __init__(
        self,
        registry: ExtensionRegistry,
        timestamps: TimestampProvider,
        *,
        clock: Clock = now_ms,
        lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT,
    ) -> None:
        self._registry = registry
        self._timestamps = timestamps
        self._clock = clock
        self._lookup_timeout = lookup_timeout

    async def aggregate(self) -> Snapshot:
        """Scan every installed extension.

        Returns:
            Snapshot with one record per distinct extension id.

        Raises:
            RegistryError: If the registry cannot be enumerated.
        """
        lookups: list[tuple[ExtensionDescriptor, int | None]] = []
        seen: set[str] = set()
        for descriptor in self._registry.enumerate():
            if descriptor.id in seen:
                logger.warning("Duplicate extension id %s, keeping first", descriptor.id)
                continue
            seen.add(descriptor.id)
            lookups.append((descriptor, await self._lookup(descriptor.id)))

        # One reference time for the whole scan, also used as checked_at
        checked_at = self._clock()
        records = [self._build_record(d, ts, checked_at) for d, ts in lookups]

        # sorted() is stable, so equal severities keep registry order
        records.sort(key=lambda r: r.health_status.severity, reverse=True)

        return Snapshot(
            checked_at=checked_at,
            results=tuple(records),
            summary=HealthSummary.from_records(records),
        )

    async def _lookup(self, extension_id: str) -> int | None:
        """Fetch a timestamp, mapping every failure to None."""
        try:
            return await asyncio.wait_for(
                self._timestamps.last_modified(extension_id),
                timeout=self._lookup_timeout,
            )
        except TimeoutError:
            logger.warning(
                "Timed out after %.1fs reading timestamp for %s",
                self._lookup_timeout,
                extension_id,
            )
        except OSError as e:
            logger.warning("Failed to read manifest for %s: %s", extension_id, e)
        except Exception:
            logger.exception("Unexpected error reading timestamp for %s", extension_id)
        return None

    @staticmethod
    def _build_record(
        descriptor: ExtensionDescriptor,
        last_updated: int | None,
        now: int,
    ) -> HealthRecord:
        scores = classify(last_updated, now)
        return HealthRecord(
            id=descriptor.id,
            name=descriptor.name,
            version=descriptor.version,
            last_updated=last_updated,
            update_score=scores.update_score,
            support_score=scores.support_score,
            activity_score=scores.activity_score,
            compatibility_score=scores.compatibility_score,
            health_score=scores.health_score,
            health_status=scores.health_status,
            summary=scores.summary,
        )
