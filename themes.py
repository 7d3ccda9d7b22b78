# themes.py
"""
Theme and accent handling.

A theme name encodes a mode and an accent: "light" and "dark" are the
classic themes, "light-<accent>" and "dark-<accent>" add an accent. The
ThemeBook maps a theme name to its custom style properties (the values
colors.read_theme_colors reads), and the ThemeController keeps the current
theme, persists it and tells its listeners whenever it changes.
"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional

from utils import load_json, save_json

CLASSIC_ACCENT = "classic"
DARK = "dark"
LIGHT = "light"

ThemeListener = Callable[[str], None]

# --- Data Contracts ---
#
# class ThemeBook:
#   - __init__(self, config: Dict[str, Any]):
#     - Inputs: the "themes" section of config.json.
#       - "modes": {"dark": {prop: value}, "light": {prop: value}}
#       - "accents": {accent: {prop: value}}
#     - Raises ValueError if "modes" or "accents" is not a mapping.
#   - style_for(self, theme: str) -> Dict[str, str]:
#     - Outputs: the mode's properties overlaid with the accent's.
#       Unknown modes and accents contribute nothing.
#
# class ThemeController:
#   - apply_theme(self, theme: str) -> None:
#     - Side Effects: Sets current theme, writes the state file (if any),
#       calls every listener with the theme name.


def is_dark_theme(theme: Optional[str]) -> bool:
    return bool(theme) and theme.startswith(DARK)


def accent_from_theme(theme: str) -> str:
    """The accent part of a theme name; bare modes have the classic accent."""
    if theme in (LIGHT, DARK):
        return CLASSIC_ACCENT
    return theme.replace(f"{DARK}-", "").replace(f"{LIGHT}-", "")


def theme_name(dark: bool, accent: str) -> str:
    mode = DARK if dark else LIGHT
    return mode if accent == CLASSIC_ACCENT else f"{mode}-{accent}"


def toggled_theme(theme: str) -> str:
    """Flips light/dark, keeping the accent."""
    return theme_name(not is_dark_theme(theme), accent_from_theme(theme))


def theme_with_accent(theme: str, accent: str) -> str:
    """Keeps the mode of `theme` and switches to `accent`."""
    return theme_name(is_dark_theme(theme), accent)


class ThemeBook:
    """
    Custom style properties for every theme, built from configuration.
    """
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        config = config or {}
        self.modes = config.get('modes', {})
        self.accents = config.get('accents', {})
        for section, value in (('modes', self.modes), ('accents', self.accents)):
            if not isinstance(value, dict):
                msg = f"Configuration error: themes.{section} must be an object, got {type(value).__name__}."
                logging.critical(msg)
                raise ValueError(msg)

        names = [CLASSIC_ACCENT] + [a for a in self.accents if a != CLASSIC_ACCENT]
        self.accent_names: List[str] = names
        logging.info(f"ThemeBook loaded {len(self.modes)} modes and {len(self.accents)} accents.")

    def style_for(self, theme: str) -> Dict[str, str]:
        mode = DARK if is_dark_theme(theme) else LIGHT
        style = dict(self.modes.get(mode, {}))
        style.update(self.accents.get(accent_from_theme(theme), {}))
        return style

    def next_accent(self, theme: str) -> str:
        """The accent after the theme's current one, wrapping around."""
        current = accent_from_theme(theme)
        if current not in self.accent_names:
            return self.accent_names[0]
        index = self.accent_names.index(current)
        return self.accent_names[(index + 1) % len(self.accent_names)]


class ThemeController:
    """
    Holds the current theme and dispatches theme-change notifications.
    """
    def __init__(self, book: ThemeBook, default_theme: str = DARK, state_file: Optional[str] = None):
        self.book = book
        self.default_theme = default_theme
        self.state_file = state_file
        self.current: Optional[str] = None
        self._listeners: List[ThemeListener] = []

    def subscribe(self, listener: ThemeListener) -> None:
        self._listeners.append(listener)

    def style(self) -> Dict[str, str]:
        return self.book.style_for(self.current or self.default_theme)

    def load_saved_theme(self) -> str:
        """Returns the persisted theme, or the default if there is none."""
        if not self.state_file:
            return self.default_theme
        try:
            state = load_json(self.state_file)
        except FileNotFoundError:
            return self.default_theme
        except (OSError, json.JSONDecodeError) as e:
            logging.warning(f"Ignoring unreadable theme state {self.state_file}: {e}")
            return self.default_theme
        theme = state.get('theme') if isinstance(state, dict) else None
        return theme if isinstance(theme, str) and theme else self.default_theme

    def start(self) -> str:
        """Applies the saved (or default) theme and returns it."""
        theme = self.load_saved_theme()
        self.apply_theme(theme)
        return theme

    def apply_theme(self, theme: str) -> None:
        self.current = theme
        if self.state_file:
            try:
                save_json(self.state_file, {'theme': theme})
            except OSError as e:
                logging.warning(f"Could not persist theme to {self.state_file}: {e}")
        logging.info(f"Theme changed to '{theme}'.")
        for listener in self._listeners:
            listener(theme)

    def toggle(self) -> str:
        theme = toggled_theme(self.current or self.default_theme)
        self.apply_theme(theme)
        return theme

    def select_accent(self, accent: str) -> str:
        theme = theme_with_accent(self.current or self.default_theme, accent)
        self.apply_theme(theme)
        return theme

    def cycle_accent(self) -> str:
        current = self.current or self.default_theme
        return self.select_accent(self.book.next_accent(current))
