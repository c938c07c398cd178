"""Output colors for safe-rm.

The bundled ``data/theme.toml`` provides every color; a user file at
``~/.config/safe-rm/theme.toml`` may replace any subset of them.
"""

import logging
import sys
import tomllib
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from rich.theme import Theme

from saferm.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _hex_color(value: object) -> str:
    if not isinstance(value, str):
        msg = "color must be a string"
        raise ValueError(msg)
    color = value.strip()
    digits = color.removeprefix("#")
    if digits == color or len(digits) not in (3, 6):
        msg = f"'{color}' is not a #RGB or #RRGGBB color"
        raise ValueError(msg)
    if any(ch not in "0123456789abcdefABCDEF" for ch in digits):
        msg = f"'{color}' contains non-hex digits"
        raise ValueError(msg)
    return color


HexColor = Annotated[str, BeforeValidator(_hex_color)]


class ThemeColors(BaseModel):
    """Named colors used by the console styles.

    Verdict colors (``removed``, ``blocked``, ``bypassed``) tint the
    per-path lines; the rest cover tables and general messages.
    """

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"
    removed: HexColor = "#c1ff62"
    blocked: HexColor = "#f53263"
    bypassed: HexColor = "#0e8ac8"


# style name -> (color field, bold)
_STYLES: dict[str, tuple[str, bool]] = {
    "text": ("text", False),
    "muted": ("muted", False),
    "dim": ("muted", False),
    "header": ("header", False),
    "bold_header": ("header", True),
    "border": ("border", False),
    "success": ("success", False),
    "warning": ("warning", False),
    "error": ("error", True),
    "info": ("info", False),
    "removed": ("removed", False),
    "blocked": ("blocked", True),
    "bypassed": ("bypassed", False),
}


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Returns:
        String-valued colors, or None when the file is absent or unreadable.
    """
    if not path.is_file():
        return None
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors")
    if not isinstance(table, dict):
        logger.warning("Theme file %s has no [colors] table", path)
        return None
    return {name: color for name, color in table.items() if isinstance(color, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Merge bundled and user colors into a validated palette.

    Args:
        user_path: Override file; the per-user config location when None.

    Returns:
        ThemeColors. An invalid merge falls back to the built-in palette.
    """
    bundled = Path(str(resources.files("saferm.data") / "theme.toml"))
    merged = dict(_load_toml_colors(bundled) or {})
    merged.update(_load_toml_colors(user_path or get_user_theme_path()) or {})

    try:
        return ThemeColors.model_validate(merged)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using built-in palette: %s", e)
        print(f"safe-rm: warning: invalid theme: {e}", file=sys.stderr)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a palette (the loaded one when None)."""
    palette = colors if colors is not None else load_theme()
    styles = {}
    for style, (field, bold) in _STYLES.items():
        color = getattr(palette, field)
        styles[style] = f"bold {color}" if bold else color
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Rich theme for this process, built on first call."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
