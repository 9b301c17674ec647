"""Theme framework constants."""

from __future__ import annotations

DEFAULT_LIGHT_THEME_ID = "default_light_theme"
DEFAULT_DARK_THEME_ID = "default_dark_theme"
DEFAULT_PURPLE_THEME_ID = "default_purple_theme"

MAX_DESCRIPTION_LEN = 30

LIGHT_TOKENS: dict[str, str] = {
    "canvas": "#fafafa",
    "surface": "#ffffff",
    "line": "#e0e0e0",
    "text_primary": "#212121",
    "text_muted": "#757575",
    "accent": "#2196f3",
    "accent_hover": "#1e88e5",
    "danger": "#d32f2f",
    "success": "#388e3c",
}

DARK_TOKENS: dict[str, str] = {
    "canvas": "#121212",
    "surface": "#1e1e1e",
    "line": "#2c2c2c",
    "text_primary": "#eeeeee",
    "text_muted": "#9e9e9e",
    "accent": "#64b5f6",
    "accent_hover": "#90caf9",
    "danger": "#ef5350",
    "success": "#66bb6a",
}

PURPLE_TOKENS: dict[str, str] = {
    **LIGHT_TOKENS,
    "accent": "#9c27b0",
    "accent_hover": "#e91e63",
}
