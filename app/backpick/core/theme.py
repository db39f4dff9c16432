"""Console colors for backpick.

The bundled ``data/theme.toml`` provides the defaults. Any subset of the
``[colors]`` table can be overridden in ~/.config/backpick/theme.toml.
"""

import logging
import re
import tomllib
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme

from backpick.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Named colors used by the tree picker and status messages."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    selected: str = "#c1ff62"
    directory: str = "#0e8ac8"
    file: str = "#ffffff"

    @field_validator("*")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        """Accept #RGB or #RRGGBB only."""
        color = v.strip()
        if not _HEX_COLOR.fullmatch(color):
            msg = f"expected a #RGB or #RRGGBB color, got '{v}'"
            raise ValueError(msg)
        return color


def _read_colors(path: Path) -> dict[str, str]:
    """Read the [colors] table of a theme file.

    A missing, unreadable, or malformed file yields an empty mapping.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return {}
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the user overrides over the bundled colors.

    Invalid colors fall back to the built-in defaults as a whole.
    """
    bundled = resources.files("backpick.data").joinpath("theme.toml")
    colors = _read_colors(Path(str(bundled)))
    colors.update(_read_colors(get_user_theme_path()))

    try:
        return ThemeColors(**colors)
    except ValueError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme whose style names the CLI markup uses."""
    c = colors or load_theme()
    return Theme(
        {
            "text": c.text,
            "muted": c.muted,
            "dim": c.muted,
            "header": c.header,
            "bold_header": f"bold {c.header}",
            "border": c.border,
            "success": c.success,
            "warning": c.warning,
            "error": f"bold {c.error}",
            "info": c.info,
            "selected": f"bold {c.selected}",
            "directory": f"bold {c.directory}",
            "file": c.file,
        }
    )


_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _theme
    if _theme is None:
        _theme = get_rich_theme()
    return _theme
