"""Color theme for the plughealth CLI.

The bundled ``data/theme.toml`` defines every color; a user file at
``~/.config/plughealth/theme.toml`` may override any subset of them.
"""

import logging
import re
import tomllib
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from plughealth.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


def _check_hex(value: str) -> str:
    color = value.strip()
    if not color.startswith("#"):
        msg = f"color must start with '#', got {color!r}"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = f"color must be #RGB or #RRGGBB format, got {color!r}"
        raise ValueError(msg)
    if not _HEX_DIGITS.fullmatch(digits):
        msg = f"invalid hex color {color!r}"
        raise ValueError(msg)
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Palette used by the CLI, one hex color per role."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    status_green: HexColor = "#03b971"
    status_yellow: HexColor = "#faf870"
    status_red: HexColor = "#f53263"
    status_black: HexColor = "#8e8e8e"


def get_bundled_theme_path() -> Path:
    """Path of the theme file shipped with the package."""
    return Path(str(resources.files("plughealth.data").joinpath("theme.toml")))


def read_theme_file(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string entries are ignored.

    Args:
        path: TOML file to read.

    Returns:
        Color name to value mapping, or None if the file is missing or
        cannot be parsed.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] must be a table", path)
        return None
    return {name: value for name, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the bundled palette with the user's overrides.

    An invalid merged palette falls back to the built-in defaults.
    """
    colors = read_theme_file(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme is missing or unreadable; using defaults")
        colors = {}

    user_path = get_theme_path()
    overrides = read_theme_file(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def build_rich_theme(colors: ThemeColors) -> Theme:
    """Translate a palette into named Rich styles."""
    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "dim": colors.muted,
            "header": colors.header,
            "bold_header": f"bold {colors.header}",
            "border": colors.border,
            "success": colors.success,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "info": colors.info,
            "plugin.name": f"bold {colors.text}",
            "status.green": colors.status_green,
            "status.yellow": colors.status_yellow,
            "status.red": f"bold {colors.status_red}",
            "status.black": f"bold {colors.status_black}",
        }
    )


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    return build_rich_theme(load_theme())
