"""Unit tests for SettingsStore.

Tests for the persisted settings blob and cached snapshot.
"""

import json
import logging
from pathlib import Path

import pytest
from plughealth.core.errors import StoreError
from plughealth.core.paths import get_settings_path
from plughealth.core.settings import MonitorSettings
from plughealth.core.store import SNAPSHOT_KEY, SettingsStore
from plughealth.models.health import Snapshot


@pytest.fixture
def store(tmp_path: Path) -> SettingsStore:
    """Create a SettingsStore in a temporary directory."""
    return SettingsStore(tmp_path / "settings.json")


class TestSettingsStoreInit:
    """Tests for SettingsStore initialization."""

    def test_default_path(self) -> None:
        """Without a path the XDG state location is used."""
        assert SettingsStore().path == get_settings_path()

    def test_custom_path(self, tmp_path: Path) -> None:
        """A custom path is used as given."""
        assert SettingsStore(tmp_path / "x.json").path == tmp_path / "x.json"


class TestLoad:
    """Tests for SettingsStore.load method."""

    def test_missing_file_gives_defaults(self, store: SettingsStore) -> None:
        """A fresh install has default settings and no snapshot."""
        state = store.load()

        assert state.settings == MonitorSettings()
        assert state.snapshot is None

    def test_corrupt_json_gives_defaults(
        self, store: SettingsStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unparseable files are ignored with a warning."""
        store.path.write_text("{not json")

        with caplog.at_level(logging.WARNING):
            state = store.load()

        assert state.settings == MonitorSettings()
        assert state.snapshot is None
        assert "unreadable" in caplog.text

    def test_non_object_gives_defaults(self, store: SettingsStore) -> None:
        """A JSON value that is not an object is ignored."""
        store.path.write_text("[1, 2, 3]")

        assert store.load().settings == MonitorSettings()

    def test_invalid_field_keeps_other_settings(
        self, store: SettingsStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Only the field failing validation falls back to its default."""
        store.path.write_text(
            json.dumps(
                {
                    "enableAutoScan": False,
                    "autoScanIntervalHours": 6,
                    "lookupTimeoutSeconds": 0,
                }
            )
        )

        with caplog.at_level(logging.WARNING):
            settings = store.load().settings

        assert settings.enable_auto_scan is False
        assert settings.auto_scan_interval_hours == 6
        assert settings.lookup_timeout_seconds == MonitorSettings().lookup_timeout_seconds
        assert "lookupTimeoutSeconds" in caplog.text

    def test_invalid_settings_give_defaults(self, store: SettingsStore) -> None:
        """Settings failing validation fall back to defaults."""
        store.path.write_text(json.dumps({"lookupTimeoutSeconds": 999}))

        assert store.load().settings == MonitorSettings()

    def test_invalid_settings_keep_snapshot(
        self, store: SettingsStore, snapshot: Snapshot
    ) -> None:
        """Bad settings do not discard a valid snapshot."""
        store.path.write_text(
            json.dumps({"lookupTimeoutSeconds": 999, SNAPSHOT_KEY: snapshot.to_dict()})
        )

        assert store.load().snapshot == snapshot

    def test_corrupt_snapshot_dropped(self, store: SettingsStore) -> None:
        """A malformed snapshot is dropped but settings survive."""
        store.path.write_text(
            json.dumps({"autoScanIntervalHours": 6, SNAPSHOT_KEY: {"checkedAt": 1}})
        )

        state = store.load()

        assert state.snapshot is None
        assert state.settings.auto_scan_interval_hours == 6

    def test_inconsistent_summary_dropped(self, store: SettingsStore, snapshot: Snapshot) -> None:
        """A snapshot whose summary disagrees with its records is dropped."""
        data = snapshot.to_dict()
        data["summary"]["green"] = 5
        store.path.write_text(json.dumps({SNAPSHOT_KEY: data}))

        assert store.load().snapshot is None

    def test_non_numeric_interval_tolerated(self, store: SettingsStore) -> None:
        """A hand-edited, non-numeric interval reads as the default."""
        store.path.write_text(json.dumps({"autoScanIntervalHours": "weekly"}))

        assert store.load().settings.auto_scan_interval_hours == 24


class TestSave:
    """Tests for SettingsStore.save method."""

    def test_round_trip(self, store: SettingsStore, snapshot: Snapshot) -> None:
        """Saved settings and snapshot read back equal."""
        settings = MonitorSettings(enable_auto_scan=False, auto_scan_interval_hours=6)

        store.save(settings, snapshot)
        state = store.load()

        assert state.settings == settings
        assert state.snapshot == snapshot

    def test_camel_case_layout(self, store: SettingsStore, snapshot: Snapshot) -> None:
        """The file uses camelCase keys for settings and records."""
        store.save(MonitorSettings(), snapshot)

        data = json.loads(store.path.read_text())
        assert data["enableAutoScan"] is True
        assert data["autoScanIntervalHours"] == 24
        cached = data[SNAPSHOT_KEY]
        assert cached["checkedAt"] == snapshot.checked_at
        assert cached["summary"] == {"green": 0, "yellow": 1, "red": 0, "black": 1}
        record = cached["results"][0]
        assert record["healthStatus"] == "black"
        assert record["lastUpdated"] is None

    def test_null_snapshot(self, store: SettingsStore) -> None:
        """Saving without a snapshot writes null."""
        store.save(MonitorSettings(), None)

        assert json.loads(store.path.read_text())[SNAPSHOT_KEY] is None

    def test_overwrites_previous(self, store: SettingsStore, snapshot: Snapshot) -> None:
        """Each save replaces the whole blob."""
        store.save(MonitorSettings(), snapshot)
        store.save(MonitorSettings(), None)

        assert store.load().snapshot is None

    def test_no_temp_files_left(self, store: SettingsStore) -> None:
        """The atomic write leaves only the settings file."""
        store.save(MonitorSettings(), None)

        assert store.path.exists()
        assert list(store.path.parent.glob("*.tmp")) == []

    def test_creates_default_state_dir(self) -> None:
        """The default location is created on first save."""
        store = SettingsStore()

        store.save(MonitorSettings(), None)

        assert store.path.exists()

    def test_unwritable_location_raises(self, tmp_path: Path) -> None:
        """Write failures surface as StoreError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = SettingsStore(blocker / "settings.json")

        with pytest.raises(StoreError, match="Failed to write settings"):
            store.save(MonitorSettings(), None)
