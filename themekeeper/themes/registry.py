"""Ordered, id-unique theme registry."""

from __future__ import annotations

from typing import Iterable, Iterator

from themekeeper.errors import (
    DuplicateThemeIdError,
    ThemeValidationError,
    UnknownDefaultThemeIdError,
    UnknownThemeIdError,
)
from themekeeper.themes.models import Theme


class ThemeRegistry:
    """Holds themes in insertion order and resolves the default selection.

    Insertion order defines cycling order for :meth:`next_id` and the fallback
    default (first entry) when no default id is given.
    """

    def __init__(self, themes: Iterable[Theme], default_id: str | None = None) -> None:
        ordered = list(themes)
        if not ordered:
            raise ThemeValidationError("At least one theme is required")
        self._check_unique_ids(ordered)
        self._themes: list[Theme] = ordered
        self._by_id: dict[str, Theme] = {theme.id: theme for theme in ordered}

        if default_id is None:
            self._default = ordered[0]
        else:
            default = self._by_id.get(default_id)
            if default is None:
                raise UnknownDefaultThemeIdError(
                    f"No app theme with the default theme id: {default_id}",
                    theme_id=default_id,
                )
            self._default = default

    @staticmethod
    def _check_unique_ids(themes: list[Theme]) -> None:
        seen: set[str] = set()
        for theme in themes:
            if theme.id in seen:
                raise DuplicateThemeIdError(
                    f"Conflicting theme ids found: {theme.id} is already registered",
                    theme_id=theme.id,
                )
            seen.add(theme.id)

    @property
    def default(self) -> Theme:
        return self._default

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(theme.id for theme in self._themes)

    def __len__(self) -> int:
        return len(self._themes)

    def __iter__(self) -> Iterator[Theme]:
        return iter(tuple(self._themes))

    def __contains__(self, theme_id: object) -> bool:
        return isinstance(theme_id, str) and theme_id in self._by_id

    def themes(self) -> tuple[Theme, ...]:
        return tuple(self._themes)

    def lookup(self, theme_id: object) -> Theme | None:
        """Return the stored theme for ``theme_id`` or ``None``."""
        if not isinstance(theme_id, str):
            return None
        return self._by_id.get(theme_id)

    def add(self, theme: Theme) -> None:
        if theme.id in self._by_id:
            raise DuplicateThemeIdError(
                f"{theme.id} is already being used as a theme.", theme_id=theme.id
            )
        self._themes.append(theme)
        self._by_id[theme.id] = theme

    def remove(self, theme_id: str) -> Theme:
        theme = self._by_id.pop(theme_id, None)
        if theme is None:
            raise UnknownThemeIdError(f"{theme_id} does not exist.", theme_id=theme_id)
        self._themes.remove(theme)
        return theme

    def next_id(self, current_id: str) -> str:
        """Return the id after ``current_id``, wrapping to the first entry."""
        index = self.ids.index(current_id)
        return self._themes[(index + 1) % len(self._themes)].id
