"""Tests for JSON theme file loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from themekeeper.errors import ThemeFileError, ThemeValidationError
from themekeeper.themes.loader import load_theme_dir, load_theme_file


def _write_json(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _theme_data(theme_id: str, accent: str = "#22aa66") -> dict[str, object]:
    return {
        "id": theme_id,
        "description": f"{theme_id} theme",
        "payload": {"accent": accent},
    }


def test_load_theme_file_valid(tmp_path: Path) -> None:
    path = tmp_path / "ocean.json"
    data = _theme_data("ocean")
    data["options"] = {"button": "#123456"}
    _write_json(path, data)

    theme = load_theme_file(path)
    assert theme.id == "ocean"
    assert theme.payload == {"accent": "#22aa66"}
    assert theme.options == {"button": "#123456"}


def test_load_theme_file_rejects_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    data = _theme_data("bad")
    data["sql"] = "DROP TABLE themes"
    _write_json(path, data)

    with pytest.raises(ThemeFileError, match="unsupported keys"):
        load_theme_file(path)


def test_load_theme_file_rejects_invalid_record(tmp_path: Path) -> None:
    path = tmp_path / "upper.json"
    _write_json(path, _theme_data("Upper Case"))

    with pytest.raises(ThemeValidationError) as excinfo:
        load_theme_file(path)
    assert isinstance(excinfo.value, ThemeFileError)


@pytest.mark.parametrize("content", ["{broken", "[1, 2]", '{"id": 3, "description": "x"}'])
def test_load_theme_file_rejects_malformed_json(tmp_path: Path, content: str) -> None:
    path = tmp_path / "broken.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ThemeFileError):
        load_theme_file(path)


def test_load_theme_file_rejects_non_object_payload(tmp_path: Path) -> None:
    path = tmp_path / "list_payload.json"
    data = _theme_data("list_payload")
    data["payload"] = ["#fff"]
    _write_json(path, data)
    with pytest.raises(ThemeFileError, match="payload"):
        load_theme_file(path)


def test_load_theme_file_rejects_oversize(tmp_path: Path) -> None:
    path = tmp_path / "huge.json"
    data = _theme_data("huge")
    data["payload"] = {"blob": "x" * (70 * 1024)}
    _write_json(path, data)
    with pytest.raises(ThemeFileError, match="max size"):
        load_theme_file(path)


def test_load_theme_dir_orders_and_collects_errors(tmp_path: Path) -> None:
    _write_json(tmp_path / "20-dusk.json", _theme_data("dusk"))
    _write_json(tmp_path / "10-dawn.json", _theme_data("dawn"))
    _write_json(tmp_path / "30-dawn-again.json", _theme_data("dawn", accent="#000000"))
    _write_json(tmp_path / "40-broken.json", {"id": "x"})
    (tmp_path / "notes.txt").write_text("not a theme", encoding="utf-8")

    themes, errors = load_theme_dir(tmp_path)

    assert [theme.id for theme in themes] == ["dawn", "dusk"]
    assert themes[0].payload["accent"] == "#22aa66"
    assert any("Duplicate theme id 'dawn'" in msg for msg in errors)
    assert any("40-broken.json" in msg for msg in errors)
    assert len(errors) == 2


def test_load_theme_dir_missing_root(tmp_path: Path) -> None:
    assert load_theme_dir(tmp_path / "nope") == ([], [])
