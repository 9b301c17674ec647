"""Theme file parsing and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from themekeeper.errors import ThemeFileError, ThemeValidationError
from themekeeper.themes.models import Theme

_ALLOWED_KEYS = frozenset({"id", "description", "payload", "options"})
_MAX_THEME_FILE_BYTES = 64 * 1024
_MAX_THEME_FILE_CANDIDATES = 512


def load_theme_file(path: Path) -> Theme:
    """Load and validate a single JSON theme file."""
    if not path.exists() or not path.is_file():
        raise ThemeFileError(f"Theme path is not a file: {path}")
    if path.is_symlink():
        raise ThemeFileError(f"Theme file cannot be a symlink: {path}")

    data = _load_json(path)
    unknown = sorted(key for key in data.keys() if key not in _ALLOWED_KEYS)
    if unknown:
        raise ThemeFileError(f"{path}: unsupported keys found: {', '.join(unknown)}")

    theme_id = data.get("id")
    description = data.get("description")
    if not isinstance(theme_id, str):
        raise ThemeFileError(f"{path}: field 'id' must be a string")
    if not isinstance(description, str):
        raise ThemeFileError(f"{path}: field 'description' must be a string", theme_id=theme_id)
    payload = data.get("payload", {})
    if not isinstance(payload, dict):
        raise ThemeFileError(f"{path}: field 'payload' must be an object", theme_id=theme_id)

    try:
        return Theme(
            id=theme_id,
            description=description,
            payload=payload,
            options=data.get("options"),
        )
    except ThemeValidationError as exc:
        raise ThemeFileError(f"{path}: {exc.message}", theme_id=theme_id) from exc


def load_theme_dir(root: Path) -> tuple[list[Theme], list[str]]:
    """Load every ``*.json`` theme under ``root`` in file-name order.

    Invalid files are skipped and reported in the returned error list, as
    are later files reusing an id that was already loaded.
    """
    themes: list[Theme] = []
    errors: list[str] = []
    if not root.exists():
        return themes, errors
    try:
        all_files = sorted(path for path in root.iterdir() if path.suffix.lower() == ".json")
    except OSError as exc:
        errors.append(f"Failed to list themes in {root}: {exc}")
        return themes, errors

    candidates: list[Path] = []
    for path in all_files:
        if path.is_symlink():
            errors.append(f"Skipping symlink theme file: {path}")
            continue
        candidates.append(path)
    if len(candidates) > _MAX_THEME_FILE_CANDIDATES:
        errors.append(
            f"Theme file limit exceeded in {root}; "
            f"only first {_MAX_THEME_FILE_CANDIDATES} files were read."
        )
        candidates = candidates[:_MAX_THEME_FILE_CANDIDATES]

    seen: set[str] = set()
    for path in candidates:
        try:
            theme = load_theme_file(path)
        except ThemeFileError as exc:
            errors.append(str(exc))
            continue
        if theme.id in seen:
            errors.append(f"Duplicate theme id {theme.id!r} at {path}; skipping.")
            continue
        seen.add(theme.id)
        themes.append(theme)
    return themes, errors


def _load_json(path: Path) -> Mapping[str, object]:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise ThemeFileError(f"Unable to stat {path}: {exc}") from exc
    if size > _MAX_THEME_FILE_BYTES:
        raise ThemeFileError(f"{path}: file exceeds max size ({_MAX_THEME_FILE_BYTES} bytes)")
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeFileError(f"Unable to read {path}: {exc}") from exc
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ThemeFileError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ThemeFileError(f"Expected JSON object in {path}")
    return data
