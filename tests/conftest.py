"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from fakes import DAY_MS, NOW_MS, FakeRegistry, FakeTimestamps, RecordingNotifier
from plughealth.models.extension import ExtensionDescriptor
from plughealth.models.health import HealthRecord, HealthStatus, HealthSummary, Snapshot


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config/state directories at a temporary location."""
    home = tmp_path / "home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))
    monkeypatch.delenv("PLUGHEALTH_PLUGINS_DIR", raising=False)
    return home


@pytest.fixture
def now_ms() -> int:
    """Fixed reference time in epoch milliseconds."""
    return NOW_MS


@pytest.fixture
def clock() -> Callable[[], int]:
    """Clock always returning NOW_MS."""
    return lambda: NOW_MS


@pytest.fixture
def descriptors() -> list[ExtensionDescriptor]:
    """Sample installed extensions."""
    return [
        ExtensionDescriptor(id="dataview", name="Dataview", version="0.5.66"),
        ExtensionDescriptor(id="calendar", name="Calendar", version="1.5.10"),
        ExtensionDescriptor(id="old-theme", name="Old Theme", version="0.1.0"),
        ExtensionDescriptor(id="mystery", name="Mystery", version="2.0.0"),
    ]


@pytest.fixture
def timestamps() -> FakeTimestamps:
    """Timestamps matching the ``descriptors`` fixture.

    dataview: 10 days (yellow), calendar: 200 days (yellow),
    old-theme: 30 months (black), mystery: unknown (black).
    """
    return FakeTimestamps(
        {
            "dataview": NOW_MS - 10 * DAY_MS,
            "calendar": NOW_MS - 200 * DAY_MS,
            "old-theme": NOW_MS - 30 * 30 * DAY_MS,
            "mystery": None,
        }
    )


@pytest.fixture
def registry(descriptors: list[ExtensionDescriptor]) -> FakeRegistry:
    """Registry over the ``descriptors`` fixture."""
    return FakeRegistry(descriptors)


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Notifier that records messages."""
    return RecordingNotifier()


@pytest.fixture
def plugins_dir(tmp_path: Path) -> Path:
    """Empty plugin directory."""
    path = tmp_path / "plugins"
    path.mkdir()
    return path


@pytest.fixture
def make_plugin(plugins_dir: Path) -> Callable[..., Path]:
    """Factory creating ``<plugins_dir>/<id>/manifest.json`` with a given mtime."""

    def _make(
        extension_id: str,
        name: str | None = None,
        version: str | None = "1.0.0",
        mtime_ms: int | None = None,
    ) -> Path:
        plugin_dir = plugins_dir / extension_id
        plugin_dir.mkdir(parents=True, exist_ok=True)
        manifest: dict[str, str] = {"id": extension_id}
        if name is not None:
            manifest["name"] = name
        if version is not None:
            manifest["version"] = version
        path = plugin_dir / "manifest.json"
        path.write_text(json.dumps(manifest))
        if mtime_ms is not None:
            os.utime(path, ns=(mtime_ms * 1_000_000, mtime_ms * 1_000_000))
        return path

    return _make


@pytest.fixture
def sample_records() -> list[HealthRecord]:
    """Two classified records, most severe first."""
    return [
        HealthRecord(
            id="old-theme",
            name="Old Theme",
            version="0.1.0",
            last_updated=None,
            update_score=0,
            support_score=40,
            activity_score=50,
            compatibility_score=70,
            health_score=31,
            health_status=HealthStatus.BLACK,
            summary="Last update date unavailable · Abandoned",
        ),
        HealthRecord(
            id="dataview",
            name="Dataview",
            version="0.5.66",
            last_updated=NOW_MS - 10 * DAY_MS,
            update_score=100,
            support_score=40,
            activity_score=50,
            compatibility_score=70,
            health_score=71,
            health_status=HealthStatus.YELLOW,
            summary="Last update this month · Monitor",
        ),
    ]


@pytest.fixture
def snapshot(sample_records: list[HealthRecord]) -> Snapshot:
    """Snapshot over ``sample_records``."""
    return Snapshot(
        checked_at=NOW_MS,
        results=tuple(sample_records),
        summary=HealthSummary.from_records(sample_records),
    )
