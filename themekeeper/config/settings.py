"""Theme settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings


class ThemeSettings:
    """Wraps QSettings for persisted theme selection and host defaults."""

    def __init__(
        self,
        organization: str = "Themekeeper",
        application: str = "Themekeeper",
        qsettings: QSettings | None = None,
    ) -> None:
        self._qs = qsettings if qsettings is not None else QSettings(organization, application)

    # -- saved selection --

    def saved_theme_id(self, scope_key: str) -> str | None:
        raw = self._qs.value(scope_key, "", type=str)
        value = (raw or "").strip()
        return value or None

    def set_saved_theme_id(self, scope_key: str, theme_id: str) -> None:
        self._qs.setValue(scope_key, theme_id)
        self._qs.sync()

    def clear_saved_theme_id(self, scope_key: str) -> None:
        self._qs.remove(scope_key)
        self._qs.sync()

    # -- controller defaults --

    @property
    def persist_on_change(self) -> bool:
        return self._qs.value("controller/persist_on_change", False, type=bool)

    @persist_on_change.setter
    def persist_on_change(self, value: bool) -> None:
        self._qs.setValue("controller/persist_on_change", bool(value))

    @property
    def load_on_init(self) -> bool:
        return self._qs.value("controller/load_on_init", False, type=bool)

    @load_on_init.setter
    def load_on_init(self, value: bool) -> None:
        self._qs.setValue("controller/load_on_init", bool(value))

    @property
    def default_theme_id(self) -> str | None:
        raw = self._qs.value("controller/default_theme_id", "", type=str)
        value = (raw or "").strip()
        return value or None

    @default_theme_id.setter
    def default_theme_id(self, value: str | None) -> None:
        cleaned = (value or "").strip()
        if cleaned:
            self._qs.setValue("controller/default_theme_id", cleaned)
        else:
            self._qs.remove("controller/default_theme_id")

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def themes_dir(self) -> Path:
        path = self.app_data_dir / "themes"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def logs_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def state_file(self) -> Path:
        return self.app_data_dir / "theme_state.json"

    @staticmethod
    def _app_data_dir() -> Path:
        override = os.environ.get("THEMEKEEPER_HOME")
        if override:
            return Path(override)
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themekeeper"
