"""Theme record, registry and theme file exports."""

from themekeeper.themes.constants import (
    DEFAULT_DARK_THEME_ID,
    DEFAULT_LIGHT_THEME_ID,
    DEFAULT_PURPLE_THEME_ID,
)
from themekeeper.themes.loader import load_theme_dir, load_theme_file
from themekeeper.themes.models import Theme, default_themes
from themekeeper.themes.registry import ThemeRegistry

__all__ = [
    "DEFAULT_DARK_THEME_ID",
    "DEFAULT_LIGHT_THEME_ID",
    "DEFAULT_PURPLE_THEME_ID",
    "Theme",
    "ThemeRegistry",
    "default_themes",
    "load_theme_dir",
    "load_theme_file",
]
