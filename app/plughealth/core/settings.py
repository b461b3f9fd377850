"""Monitor settings and interval clamping.

This module defines the user-facing settings persisted by the settings
store, and the helpers that turn the configured interval into the
period of the auto-scan timer.
"""

import math
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_INTERVAL_HOURS = 24.0
MIN_INTERVAL_HOURS = 1.0
MAX_INTERVAL_HOURS = 168.0

HOUR_MS = 60 * 60 * 1000


def clamp_interval_hours(value: object) -> float:
    """Coerce a configured interval into the supported range.

    Non-numeric values fall back to DEFAULT_INTERVAL_HOURS; numbers are
    pulled to the nearest bound of [MIN_INTERVAL_HOURS, MAX_INTERVAL_HOURS].
    Never raises.

    Args:
        value: Interval in hours, as configured (number or string).

    Returns:
        Interval in hours within the supported range.
    """
    hours = coerce_interval_hours(value)
    return min(max(hours, MIN_INTERVAL_HOURS), MAX_INTERVAL_HOURS)


def coerce_interval_hours(value: object) -> float:
    """Parse an interval without clamping it.

    Args:
        value: Interval in hours (number or numeric string).

    Returns:
        The value as a float, or DEFAULT_INTERVAL_HOURS if it is not a
        finite number.
    """
    if isinstance(value, bool):
        return DEFAULT_INTERVAL_HOURS
    try:
        hours = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_INTERVAL_HOURS
    if math.isnan(hours):
        return DEFAULT_INTERVAL_HOURS
    return hours


def interval_ms(hours: object) -> int:
    """Clamp an interval and convert it to milliseconds."""
    return int(clamp_interval_hours(hours) * HOUR_MS)


class MonitorSettings(BaseModel):
    """Persisted monitor settings.

    Serialized with camelCase keys (``enableAutoScan``,
    ``autoScanIntervalHours``, ...) alongside the cached snapshot.

    Attributes:
        enable_auto_scan: Arm the periodic scan timer on start.
        auto_scan_interval_hours: Hours between periodic scans, as entered.
            Clamped to [1, 168] only when the timer is armed.
        lookup_timeout_seconds: Bound on a single timestamp lookup.
        plugins_dir: Plugin directory to inspect (None = default location).
        github_token: Reserved for a future GitHub integration; stored only.
        community_api_url: Reserved for a future directory integration; stored only.
    """

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    enable_auto_scan: Annotated[
        bool,
        Field(description="Run scans on a schedule"),
    ] = True
    auto_scan_interval_hours: Annotated[
        float,
        Field(description="Hours between automatic scans"),
    ] = DEFAULT_INTERVAL_HOURS
    lookup_timeout_seconds: Annotated[
        float,
        Field(ge=0.1, le=60.0, description="Timeout per timestamp lookup (0.1-60s)"),
    ] = 5.0
    plugins_dir: Annotated[
        str | None,
        Field(description="Plugin directory to inspect"),
    ] = None
    github_token: Annotated[
        str,
        Field(description="GitHub token for future API integration"),
    ] = ""
    community_api_url: Annotated[
        str,
        Field(description="Community directory endpoint for future checks"),
    ] = ""

    @field_validator("auto_scan_interval_hours", mode="before")
    @classmethod
    def validate_interval(cls, v: object) -> float:
        """Replace non-numeric intervals with the default."""
        return coerce_interval_hours(v)

    @field_validator("github_token", "community_api_url", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        """Trim surrounding whitespace from free-text settings."""
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def effective_interval_hours(self) -> float:
        """Interval the timer is armed with."""
        return clamp_interval_hours(self.auto_scan_interval_hours)

    @property
    def interval_ms(self) -> int:
        """Timer period in milliseconds."""
        return interval_ms(self.auto_scan_interval_hours)
