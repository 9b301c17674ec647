"""Storage backends for the selected theme id."""

from __future__ import annotations

import asyncio
import contextlib
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

from themekeeper.config.settings import ThemeSettings
from themekeeper.errors import PersistenceError


def scope_key_for(provider_id: str) -> str:
    """Storage key for one controller's selection."""
    return f"themes/{provider_id}/current"


@runtime_checkable
class ThemeStore(Protocol):
    """Async capability the controller uses to persist its selection."""

    async def load(self, scope_key: str) -> str | None: ...

    async def save(self, scope_key: str, theme_id: str) -> None: ...

    async def clear(self, scope_key: str) -> None: ...


class MemoryThemeStore:
    """Dict-backed store, for tests and hosts without durable storage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    async def load(self, scope_key: str) -> str | None:
        return self._values.get(scope_key)

    async def save(self, scope_key: str, theme_id: str) -> None:
        self.writes.append((scope_key, theme_id))
        self._values[scope_key] = theme_id

    async def clear(self, scope_key: str) -> None:
        self._values.pop(scope_key, None)


class JsonFileThemeStore:
    """Keeps every scope's selection in one JSON object on disk.

    File access runs in a worker thread; writes replace the file atomically.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def load(self, scope_key: str) -> str | None:
        data = await asyncio.to_thread(self._read)
        value = data.get(scope_key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    async def save(self, scope_key: str, theme_id: str) -> None:
        await asyncio.to_thread(self._update, scope_key, theme_id)

    async def clear(self, scope_key: str) -> None:
        await asyncio.to_thread(self._update, scope_key, None)

    def _read(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            content = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Unable to read {self._path}: {exc}") from exc
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Invalid JSON in {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"Expected JSON object in {self._path}")
        return data

    def _update(self, scope_key: str, theme_id: str | None) -> None:
        with self._lock:
            data = self._read()
            if theme_id is None:
                if scope_key not in data:
                    return
                data.pop(scope_key)
            else:
                data[scope_key] = theme_id
            self._write(data)

    def _write(self, data: dict[str, object]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
        except OSError as exc:
            raise PersistenceError(f"Unable to write {self._path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except (OSError, TypeError, ValueError) as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise PersistenceError(f"Unable to write {self._path}: {exc}") from exc


class QSettingsThemeStore:
    """Store backed by :class:`ThemeSettings` (QSettings)."""

    def __init__(self, settings: ThemeSettings | None = None) -> None:
        self._settings = settings if settings is not None else ThemeSettings()

    @property
    def settings(self) -> ThemeSettings:
        return self._settings

    async def load(self, scope_key: str) -> str | None:
        return self._settings.saved_theme_id(scope_key)

    async def save(self, scope_key: str, theme_id: str) -> None:
        self._settings.set_saved_theme_id(scope_key, theme_id)

    async def clear(self, scope_key: str) -> None:
        self._settings.clear_saved_theme_id(scope_key)
