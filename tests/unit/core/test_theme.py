"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from plughealth.core.paths import get_theme_path
from plughealth.core.theme import (
    ThemeColors,
    build_rich_theme,
    get_bundled_theme_path,
    get_theme,
    load_theme,
    read_theme_file,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.status_green == "#03b971"
        assert colors.status_black == "#8e8e8e"

    def test_short_hex_accepted(self) -> None:
        """#RGB colors are valid."""
        assert ThemeColors(status_red="#f00").status_red == "#f00"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(status_yellow="ffff00")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestReadThemeFile:
    """Tests for read_theme_file function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads colors from valid TOML file."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\nstatus_red = "#aa0000"\n')

        assert read_theme_file(theme_file) == {"status_red": "#aa0000"}

    def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """Returns None when file doesn't exist."""
        assert read_theme_file(tmp_path / "nonexistent.toml") is None

    def test_returns_none_for_invalid_toml(self, tmp_path: Path) -> None:
        """Returns None for malformed TOML."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        assert read_theme_file(theme_file) is None

    def test_ignores_non_string_values(self, tmp_path: Path) -> None:
        """Non-string entries are dropped."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = 5\nmuted = "#111111"\n')

        assert read_theme_file(theme_file) == {"muted": "#111111"}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_bundled_theme_exists(self) -> None:
        """The default theme ships with the package."""
        assert Path(get_bundled_theme_path()).is_file()

    def test_loads_bundled_theme(self) -> None:
        """Loads theme from bundled data file."""
        colors = load_theme()

        assert colors.status_yellow == "#faf870"
        assert colors.header == "#69B9A1"

    def test_user_theme_overrides_bundled(self) -> None:
        """A partial user theme in the config dir overrides bundled values."""
        user_theme = get_theme_path()
        user_theme.parent.mkdir(parents=True)
        user_theme.write_text('[colors]\nstatus_black = "#444444"\n')

        colors = load_theme()

        assert colors.status_black == "#444444"
        assert colors.status_green == "#03b971"

    def test_graceful_fallback_on_invalid_user_theme(self, tmp_path: Path) -> None:
        """Falls back to bundled theme when user theme is invalid."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "red"\n')

        with patch("plughealth.core.theme.get_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()


class TestBuildRichTheme:
    """Tests for build_rich_theme function."""

    def test_includes_status_styles(self) -> None:
        """Every health status has a style."""
        theme = build_rich_theme(ThemeColors())

        for status in ("green", "yellow", "red", "black"):
            assert f"status.{status}" in theme.styles

    def test_includes_convenience_styles(self) -> None:
        """Theme includes the styles used by tables and messages."""
        theme = build_rich_theme(ThemeColors())

        assert "bold_header" in theme.styles
        assert "plugin.name" in theme.styles
        assert "muted" in theme.styles


class TestGetTheme:
    """Tests for get_theme caching function."""

    def test_caches_theme(self) -> None:
        """get_theme returns cached instance on subsequent calls."""
        get_theme.cache_clear()

        theme1 = get_theme()
        theme2 = get_theme()

        assert isinstance(theme1, Theme)
        assert theme1 is theme2
