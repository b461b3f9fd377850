"""Settings store.

Persists the monitor settings and the last snapshot as one JSON blob
in the state directory:

    {"enableAutoScan": true, "autoScanIntervalHours": 24, ...,
     "cachedSnapshot": {"checkedAt": ..., "results": [...], "summary": {...}}}
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from pydantic import ValidationError

from plughealth.core.errors import StoreError
from plughealth.core.paths import ensure_state_dir, get_settings_path, get_state_dir
from plughealth.core.settings import MonitorSettings
from plughealth.models.health import Snapshot

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "cachedSnapshot"


@dataclass(slots=True)
class StoredState:
    """Contents of the settings store.

    Attributes:
        settings: Monitor settings (defaults when nothing is stored).
        snapshot: Last persisted snapshot, or None if no scan has run yet.
    """

    settings: MonitorSettings = field(default_factory=MonitorSettings)
    snapshot: Snapshot | None = None


class SettingsStore:
    """Loads and saves the settings blob.

    Storage location: ~/.local/state/plughealth/settings.json

    Reads never fail: a missing or corrupt file yields defaults.
    Writes are atomic (temporary file + ``os.replace``) and raise
    StoreError on failure.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize SettingsStore.

        Args:
            path: Optional override for the settings file.
                  Default: ~/.local/state/plughealth/settings.json
        """
        self._path = path if path is not None else get_settings_path()

    @property
    def path(self) -> Path:
        """Path to the settings file."""
        return self._path

    def load(self) -> StoredState:
        """Read settings and the cached snapshot.

        Returns:
            StoredState; defaults for anything missing or unreadable.
        """
        if not self._path.exists():
            return StoredState()

        try:
            data: Any = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self._path, e)
            return StoredState()

        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: expected a JSON object", self._path)
            return StoredState()

        raw_snapshot = data.pop(SNAPSHOT_KEY, None)
        return StoredState(
            settings=self._parse_settings(data),
            snapshot=self._parse_snapshot(raw_snapshot),
        )

    def save(self, settings: MonitorSettings, snapshot: Snapshot | None) -> Path:
        """Write settings and snapshot atomically.

        Args:
            settings: Settings to persist.
            snapshot: Snapshot to persist, or None.

        Returns:
            Path where the blob was saved.

        Raises:
            StoreError: If the file cannot be written.
        """
        data: dict[str, Any] = settings.model_dump(by_alias=True)
        data[SNAPSHOT_KEY] = snapshot.to_dict() if snapshot is not None else None

        tmp_path: Path | None = None
        try:
            self._ensure_parent()
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                json.dump(data, f, indent=2)
            # os.replace() is atomic on POSIX
            os.replace(tmp_path, self._path)
        except (OSError, RuntimeError) as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise StoreError(f"Failed to write settings: {e}") from e

        return self._path

    def _ensure_parent(self) -> None:
        if self._path.parent == get_state_dir():
            ensure_state_dir()
        else:
            self._path.parent.mkdir(parents=True, exist_ok=True)

    def _parse_settings(self, data: dict[str, Any]) -> MonitorSettings:
        """Validate stored settings, dropping only the fields that fail."""
        try:
            return MonitorSettings.model_validate(data)
        except ValidationError as e:
            invalid = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
            logger.warning(
                "Ignoring invalid settings in %s: %s", self._path, ", ".join(sorted(invalid))
            )

        valid = {key: value for key, value in data.items() if key not in invalid}
        try:
            return MonitorSettings.model_validate(valid)
        except ValidationError as e:
            logger.warning("Invalid settings in %s, using defaults: %s", self._path, e)
            return MonitorSettings()

    def _parse_snapshot(self, raw: object) -> Snapshot | None:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            logger.warning("Dropping cached snapshot: expected a JSON object")
            return None
        try:
            return Snapshot.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Dropping corrupt cached snapshot: %s", e)
            return None
