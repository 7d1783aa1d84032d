"""Console colours for the sd CLI.

The defaults can be overridden per user in
``~/.config/stardestroyer/theme.toml``::

    [colors]
    block_removed = "#ff0000"

An unreadable or invalid override is logged and ignored.
"""

import logging
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from rich.theme import Theme

from stardestroyer.core.paths import get_user_config_dir

logger = logging.getLogger(__name__)

THEME_FILENAME = "theme.toml"


def _hex_color(value: object) -> str:
    if not isinstance(value, str):
        raise ValueError("color must be a string")
    color = value.strip()
    digits = color.removeprefix("#")
    if color == digits or len(digits) not in (3, 6):
        raise ValueError(f"'{color}' is not a #RGB or #RRGGBB color")
    try:
        int(digits, 16)
    except ValueError:
        raise ValueError(f"'{color}' is not a hex color") from None
    return color


HexColor = Annotated[str, BeforeValidator(_hex_color)]


class ThemeColors(BaseModel):
    """Hex colours of every named console style."""

    model_config = ConfigDict(extra="forbid", validate_default=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    block_active: HexColor = "#69B9A1"
    block_removed: HexColor = "#f53263"
    block_unused: HexColor = "#faf870"


# Style name -> (colour field, style prefix)
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
    "block_active": ("block_active", "bold"),
    "block_removed": ("block_removed", ""),
    "block_unused": ("block_unused", ""),
}


def get_user_theme_path() -> Path:
    """Path of the user's theme override file."""
    return get_user_config_dir() / THEME_FILENAME


def _read_override(path: Path) -> dict[str, object]:
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
        logger.warning("Ignoring theme file %s: [colors] must be a table", path)
        return {}
    return colors


def load_theme() -> ThemeColors:
    """Load the colours, applying the user's override when it is valid."""
    override = _read_override(get_user_theme_path())
    if not override:
        return ThemeColors()
    try:
        return ThemeColors.model_validate(override)
    except ValidationError as e:
        logger.warning("Invalid theme override, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a set of colours.

    Args:
        colors: Colours to use. Loaded with :func:`load_theme` if None.

    Returns:
        Rich Theme defining every style the CLI prints with.
    """
    colors = colors or load_theme()
    values = colors.model_dump()
    return Theme(
        {
            name: f"{prefix} {values[field]}".strip()
            for name, (field, prefix) in _STYLES.items()
        }
    )


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme shared by all consoles, loaded once."""
    return get_rich_theme()
