# colors.py
"""
Resolves the network's colors from the active theme.

Theme colors are translucent CSS-style color strings such as
``rgba(180,200,255,0.28)``. The stepper tints them per link with
``with_alpha`` and the renderer turns them into concrete RGBA tuples with
``parse_rgba``. Nothing in here raises on bad input: unknown or malformed
colors fall back to defaults or pass through unchanged.
"""
import re
from functools import lru_cache
from typing import Mapping, NamedTuple, Optional, Tuple

from constants import (
    NODE_COLOR_PROPERTY, LINK_COLOR_PROPERTY, CURSOR_COLOR_PROPERTY,
    DEFAULT_NODE_COLOR, DEFAULT_LINK_COLOR, DEFAULT_CURSOR_COLOR
)

# --- Data Contracts ---
#
# read_theme_colors(style: Mapping[str, str]) -> ThemeColors:
#   - Inputs: the custom properties of the current theme (e.g. "--net-node").
#   - Outputs: a ThemeColors triple. Missing or blank properties are
#     replaced with the DEFAULT_*_COLOR constants.
#
# with_alpha(base_color: str, alpha: float) -> str:
#   - Outputs: "rgba(r, g, b, a)" with the channels of base_color and
#     alpha clamped to [0, 1]. Returns base_color unchanged if it is not an
#     rgb()/rgba() string.

_RGB_PATTERN = re.compile(r"rgba?\s*\(([^)]+)\)", re.IGNORECASE)


class ThemeColors(NamedTuple):
    node: str = DEFAULT_NODE_COLOR
    link: str = DEFAULT_LINK_COLOR
    cursor: str = DEFAULT_CURSOR_COLOR


def _property(style: Mapping[str, str], name: str, default: str) -> str:
    value = style.get(name)
    if value is None:
        return default
    return str(value).strip() or default


def read_theme_colors(style: Optional[Mapping[str, str]] = None) -> ThemeColors:
    """Reads the three network colors from a theme's custom properties."""
    style = style or {}
    return ThemeColors(
        node=_property(style, NODE_COLOR_PROPERTY, DEFAULT_NODE_COLOR),
        link=_property(style, LINK_COLOR_PROPERTY, DEFAULT_LINK_COLOR),
        cursor=_property(style, CURSOR_COLOR_PROPERTY, DEFAULT_CURSOR_COLOR),
    )


def _channels(color: str) -> Optional[list]:
    match = _RGB_PATTERN.search(color)
    if not match:
        return None
    parts = [part.strip() for part in match.group(1).split(',')]
    if len(parts) < 3:
        return None
    return parts


@lru_cache(maxsize=4096)
def with_alpha(base_color: str, alpha: float) -> str:
    """
    Returns base_color with its alpha channel replaced.

    Any alpha already present in base_color is ignored.
    """
    parts = _channels(base_color)
    if parts is None:
        return base_color
    r, g, b = parts[:3]
    alpha = max(0.0, min(1.0, alpha))
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def parse_rgba(color: str) -> Optional[Tuple[int, int, int, float]]:
    """
    Parses an rgb()/rgba() string into (r, g, b, alpha).

    Channels are clamped to 0-255 and alpha to [0, 1]. A missing alpha
    means fully opaque. Returns None if the string cannot be parsed.
    """
    parts = _channels(color)
    if parts is None:
        return None
    try:
        r, g, b = (int(round(max(0.0, min(255.0, float(p))))) for p in parts[:3])
        alpha = float(parts[3]) if len(parts) > 3 else 1.0
    except ValueError:
        return None
    return r, g, b, max(0.0, min(1.0, alpha))
