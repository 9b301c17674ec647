"""Tests for the theme record."""

from __future__ import annotations

import pytest

from themekeeper.errors import ThemeValidationError
from themekeeper.themes.models import Theme, default_themes


def test_equality_and_hash_use_id_only() -> None:
    first = Theme(id="ocean", description="Ocean", payload={"accent": "#0000ff"})
    second = Theme(id="ocean", description="Other", payload={"accent": "#ff0000"})

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1
    assert first != Theme(id="forest", description="Forest")


@pytest.mark.parametrize("bad_id", ["", "Dark", "my theme", "tab\tid", "new\nline"])
def test_invalid_ids_rejected(bad_id: str) -> None:
    with pytest.raises(ThemeValidationError):
        Theme(id=bad_id, description="Bad")


def test_description_must_be_shorter_than_thirty_chars() -> None:
    Theme(id="ok", description="x" * 29)
    with pytest.raises(ThemeValidationError) as excinfo:
        Theme(id="too_long", description="x" * 30)
    assert excinfo.value.theme_id == "too_long"
    assert excinfo.value.details["length"] == 30


def test_theme_is_immutable() -> None:
    theme = Theme.light()
    with pytest.raises(AttributeError):
        theme.id = "changed"  # type: ignore[misc]


def test_builtin_factories_and_custom_ids() -> None:
    assert Theme.light().id == "default_light_theme"
    assert Theme.dark().id == "default_dark_theme"
    assert Theme.purple().id == "default_purple_theme"
    assert Theme.dark(id="night").id == "night"
    assert Theme.purple().payload["accent"] == "#9c27b0"


def test_copy_with_replaces_id_and_keeps_other_fields() -> None:
    base = Theme.light()
    copy = base.copy_with(id="light_theme", options="Hello")

    assert copy.id == "light_theme"
    assert copy.description == base.description
    assert copy.payload is base.payload
    assert copy.options == "Hello"
    assert copy != base


def test_default_themes_are_light_then_dark() -> None:
    assert [theme.id for theme in default_themes()] == [
        "default_light_theme",
        "default_dark_theme",
    ]
