"""Data models for plughealth.

This module exports the core data structures used throughout the application.
"""

from plughealth.models.extension import ExtensionDescriptor
from plughealth.models.health import (
    HealthRecord,
    HealthStatus,
    HealthSummary,
    ScanOrigin,
    Snapshot,
)

__all__ = [
    "ExtensionDescriptor",
    "HealthRecord",
    "HealthStatus",
    "HealthSummary",
    "ScanOrigin",
    "Snapshot",
]
