"""Runtime theme selection with persisted choice and change notification."""

from themekeeper.config.settings import ThemeSettings
from themekeeper.controller import Subscription, ThemeChange, ThemeController
from themekeeper.errors import (
    ActiveThemeRemovalError,
    ConflictingInitPolicyError,
    DuplicateThemeIdError,
    ErrorCode,
    PersistenceError,
    ThemeError,
    ThemeFileError,
    ThemeValidationError,
    UnknownDefaultThemeIdError,
    UnknownThemeIdError,
)
from themekeeper.logging_setup import configure_logging
from themekeeper.persistence import (
    JsonFileThemeStore,
    MemoryThemeStore,
    QSettingsThemeStore,
    ThemeStore,
    scope_key_for,
)
from themekeeper.policy import CustomInit, LoadFromDisk, NoInit, PendingThemeLoad
from themekeeper.themes import Theme, ThemeRegistry, default_themes, load_theme_dir, load_theme_file

__version__ = "0.1.0"

__all__ = [
    "ActiveThemeRemovalError",
    "ConflictingInitPolicyError",
    "CustomInit",
    "DuplicateThemeIdError",
    "ErrorCode",
    "JsonFileThemeStore",
    "LoadFromDisk",
    "MemoryThemeStore",
    "NoInit",
    "PendingThemeLoad",
    "PersistenceError",
    "QSettingsThemeStore",
    "Subscription",
    "Theme",
    "ThemeChange",
    "ThemeController",
    "ThemeError",
    "ThemeFileError",
    "ThemeRegistry",
    "ThemeSettings",
    "ThemeStore",
    "ThemeValidationError",
    "UnknownDefaultThemeIdError",
    "UnknownThemeIdError",
    "configure_logging",
    "default_themes",
    "load_theme_dir",
    "load_theme_file",
    "scope_key_for",
]
