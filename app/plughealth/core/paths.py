"""XDG-compliant path management for plughealth.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/plughealth/
- State: ~/.local/state/plughealth/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "plughealth"

# Environment override for the inspected plugins directory
PLUGINS_DIR_ENV = "PLUGHEALTH_PLUGINS_DIR"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/plughealth/ (or XDG_CONFIG_HOME/plughealth/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the persisted settings blob and the last
    snapshot, which should survive restarts but is not hand-edited.

    Returns:
        Path to ~/.local/state/plughealth/ (or XDG_STATE_HOME/plughealth/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_settings_path() -> Path:
    """Get the settings store file path.

    Returns:
        Path to ~/.local/state/plughealth/settings.json.
    """
    return get_state_dir() / "settings.json"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/plughealth/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_default_plugins_dir() -> Path:
    """Get the plugins directory to inspect when none is configured.

    Honors PLUGHEALTH_PLUGINS_DIR, otherwise falls back to
    ``.obsidian/plugins`` under the current working directory.

    Returns:
        Path to the plugins directory.
    """
    override = os.environ.get(PLUGINS_DIR_ENV)
    if override:
        return Path(override)
    return Path.cwd() / ".obsidian" / "plugins"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Returns:
        Path to the state directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")
