"""Health record and snapshot models.

This module defines the immutable results of a scan: one HealthRecord
per extension, a HealthSummary of counts per status, and the Snapshot
that groups them. Serialization uses the camelCase layout of the
persisted settings blob.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class HealthStatus(str, Enum):
    """Discrete health band of an extension.

    Attributes:
        GREEN: Recently maintained.
        YELLOW: Worth keeping an eye on.
        RED: Concerning maintenance signals.
        BLACK: Abandoned or unknown.
    """

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    BLACK = "black"

    @property
    def severity(self) -> int:
        """Sort rank, higher is more severe (black=4 ... green=1)."""
        return _SEVERITY[self]

    @property
    def label(self) -> str:
        """Human-readable status label."""
        return _LABELS[self]


class ScanOrigin(str, Enum):
    """What triggered a scan request.

    Attributes:
        MANUAL: Explicit user action; completion is announced.
        TIMER: Periodic auto-scan; completes silently.
        STARTUP: The initial scan run on scheduler start; silent.
    """

    MANUAL = "manual"
    TIMER = "timer"
    STARTUP = "startup"


_SEVERITY: dict[HealthStatus, int] = {
    HealthStatus.BLACK: 4,
    HealthStatus.RED: 3,
    HealthStatus.YELLOW: 2,
    HealthStatus.GREEN: 1,
}

_LABELS: dict[HealthStatus, str] = {
    HealthStatus.GREEN: "Healthy",
    HealthStatus.YELLOW: "Monitor",
    HealthStatus.RED: "Concerning",
    HealthStatus.BLACK: "Abandoned",
}


def _check_score(name: str, value: int) -> None:
    if not (0 <= value <= 100):
        msg = f"{name} must be between 0 and 100, got {value}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class HealthRecord:
    """Health classification of a single extension.

    Created fresh on every scan and superseded wholesale by the next
    scan's record for the same identifier.

    Attributes:
        id: Extension identifier.
        name: Extension display name.
        version: Installed version string.
        last_updated: Manifest modification time in epoch milliseconds,
            or None when it could not be determined.
        update_score: Recency score (0-100).
        support_score: Support baseline (0-100).
        activity_score: Activity baseline (0-100).
        compatibility_score: Compatibility baseline (0-100).
        health_score: Weighted overall score (0-100).
        health_status: Status band derived from score and recency.
        summary: Human-readable recency phrase and status label.
    """

    id: str
    name: str
    version: str
    last_updated: int | None
    update_score: int
    support_score: int
    activity_score: int
    compatibility_score: int
    health_score: int
    health_status: HealthStatus
    summary: str

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.id:
            msg = "Record id cannot be empty"
            raise ValueError(msg)
        _check_score("update_score", self.update_score)
        _check_score("support_score", self.support_score)
        _check_score("activity_score", self.activity_score)
        _check_score("compatibility_score", self.compatibility_score)
        _check_score("health_score", self.health_score)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the record.
        """
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "lastUpdated": self.last_updated,
            "healthScore": self.health_score,
            "healthStatus": self.health_status.value,
            "updateScore": self.update_score,
            "supportScore": self.support_score,
            "activityScore": self.activity_score,
            "compatibilityScore": self.compatibility_score,
            "summary": self.summary,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HealthRecord:
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing record data.

        Returns:
            HealthRecord instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If the status or a score is invalid.
        """
        last_updated = data.get("lastUpdated")
        return cls(
            id=data["id"],
            name=data["name"],
            version=data["version"],
            last_updated=int(last_updated) if last_updated is not None else None,
            update_score=int(data["updateScore"]),
            support_score=int(data["supportScore"]),
            activity_score=int(data["activityScore"]),
            compatibility_score=int(data["compatibilityScore"]),
            health_score=int(data["healthScore"]),
            health_status=HealthStatus(data["healthStatus"]),
            summary=data.get("summary", ""),
        )


@dataclass(frozen=True, slots=True)
class HealthSummary:
    """Count of records per health status."""

    green: int = 0
    yellow: int = 0
    red: int = 0
    black: int = 0

    @property
    def total(self) -> int:
        """Total number of counted records."""
        return self.green + self.yellow + self.red + self.black

    @property
    def at_risk(self) -> int:
        """Records in the red or black band."""
        return self.red + self.black

    def count(self, status: HealthStatus) -> int:
        """Return the count for a single status."""
        return int(getattr(self, status.value))

    @classmethod
    def from_records(cls, records: Iterable[HealthRecord]) -> HealthSummary:
        """Count statuses across records.

        Args:
            records: Records to count.

        Returns:
            HealthSummary with one count per status.
        """
        counts = dict.fromkeys((s.value for s in HealthStatus), 0)
        for record in records:
            counts[record.health_status.value] += 1
        return cls(**counts)

    def to_dict(self) -> dict[str, int]:
        """Serialize to dictionary for JSON storage."""
        return {
            "green": self.green,
            "yellow": self.yellow,
            "red": self.red,
            "black": self.black,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HealthSummary:
        """Deserialize from dictionary, treating missing counts as zero."""
        return cls(
            green=int(data.get("green", 0)),
            yellow=int(data.get("yellow", 0)),
            red=int(data.get("red", 0)),
            black=int(data.get("black", 0)),
        )


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Complete, immutable result of one scan cycle.

    Attributes:
        checked_at: Scan completion time in epoch milliseconds.
        results: Records sorted by descending severity; equal severities
            keep registry enumeration order.
        summary: Status counts over ``results``.
    """

    checked_at: int
    results: tuple[HealthRecord, ...]
    summary: HealthSummary

    def __post_init__(self) -> None:
        """Validate that the summary accounts for every record."""
        if self.summary.total != len(self.results):
            msg = (
                f"Summary counts {self.summary.total} records "
                f"but snapshot holds {len(self.results)}"
            )
            raise ValueError(msg)

    def get(self, extension_id: str) -> HealthRecord | None:
        """Find the record for an extension id.

        Args:
            extension_id: Identifier to look up.

        Returns:
            The matching HealthRecord, or None.
        """
        for record in self.results:
            if record.id == extension_id:
                return record
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "checkedAt": self.checked_at,
            "results": [record.to_dict() for record in self.results],
            "summary": self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing snapshot data.

        Returns:
            Snapshot instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If a record is invalid or the summary disagrees
                with the records.
        """
        results = tuple(HealthRecord.from_dict(r) for r in data["results"])
        return cls(
            checked_at=int(data["checkedAt"]),
            results=results,
            summary=HealthSummary.from_dict(data["summary"]),
        )

    def to_json(self) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict())
