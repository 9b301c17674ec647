"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication, QSettings

from themekeeper.config.settings import ThemeSettings
from themekeeper.persistence import MemoryThemeStore
from themekeeper.themes.models import Theme


@pytest.fixture
def abc_themes() -> list[Theme]:
    return [
        Theme(id="a", description="Theme A", payload={"accent": "#aa0000"}),
        Theme(id="b", description="Theme B", payload={"accent": "#00bb00"}),
        Theme(id="c", description="Theme C", payload={"accent": "#0000cc"}),
    ]


@pytest.fixture
def store() -> MemoryThemeStore:
    return MemoryThemeStore()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch) -> ThemeSettings:
    monkeypatch.setenv("THEMEKEEPER_HOME", str(tmp_path / "home"))
    qs = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return ThemeSettings(qsettings=qs)


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    return QCoreApplication.instance() or QCoreApplication([])
