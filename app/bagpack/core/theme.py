"""Color theme for bagpack output.

Colors come from the bundled ``data/theme.toml`` and can be overridden key
by key in ``~/.config/bagpack/theme.toml``. Rich style names are derived
from them, e.g. ``status.outdated`` for packages with a newer version.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from bagpack.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _check_hex(value: str) -> str:
    color = value.strip()
    if not color.startswith("#"):
        raise ValueError("color must start with '#'")
    digits = color[1:]
    if len(digits) not in (3, 6):
        raise ValueError("color must be #RGB or #RRGGBB format")
    try:
        int(digits, 16)
    except ValueError:
        raise ValueError(f"invalid hex color '{color}'") from None
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Named colors used by the console styles."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#7de5ff"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    status_current: HexColor = "#7de5ff"
    status_outdated: HexColor = "#f97316"
    status_unknown: HexColor = "#a1a1aa"


# Rich style name -> (ThemeColors field, extra style attributes)
_STYLES: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "dim": ("muted", ""),
    "header": ("header", ""),
    "bold_header": ("header", "bold"),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "status.current": ("status_current", ""),
    "status.outdated": ("status_outdated", "bold"),
    "status.unknown": ("status_unknown", ""),
    "package.name": ("text", "bold"),
    "package.version": ("muted", ""),
}


def _parse_colors(text: str, source: str) -> dict[str, Any]:
    """Return the ``[colors]`` table of a theme document, or {} if unusable."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring theme %s: %s", source, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme %s: 'colors' is not a table", source)
        return {}
    return colors


def load_theme() -> ThemeColors:
    """Load the bundled colors merged with the user's overrides.

    An invalid user override falls back to the built-in defaults.
    """
    bundled = resources.files("bagpack.data").joinpath("theme.toml")
    colors = _parse_colors(bundled.read_text(encoding="utf-8"), "bagpack.data/theme.toml")

    user_path = get_user_theme_path()
    try:
        user_text = user_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Cannot read theme %s: %s", user_path, e)
    else:
        logger.debug("Applying theme overrides from %s", user_path)
        colors = {**colors, **_parse_colors(user_text, str(user_path))}

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for ``colors`` (loaded from disk if omitted)."""
    colors = colors or load_theme()
    styles = {
        name: f"{extra} {getattr(colors, field)}".strip()
        for name, (field, extra) in _STYLES.items()
    }
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Return the Rich theme, built once per process."""
    return get_rich_theme()
