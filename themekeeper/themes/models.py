"""Theme record model."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from themekeeper.errors import ThemeValidationError
from themekeeper.themes.constants import (
    DARK_TOKENS,
    DEFAULT_DARK_THEME_ID,
    DEFAULT_LIGHT_THEME_ID,
    DEFAULT_PURPLE_THEME_ID,
    LIGHT_TOKENS,
    MAX_DESCRIPTION_LEN,
    PURPLE_TOKENS,
)


@dataclass(frozen=True, slots=True, eq=False)
class Theme:
    """One selectable theme.

    ``id`` has to be a non-empty lowercase string without whitespace, for
    example ``my_theme`` or ``dark_extended_theme``. Keep it short and put
    human-readable text in ``description`` (under 30 characters).

    ``payload`` is the style data handed to whatever renders the theme and
    ``options`` is any extra object the host wants associated with it. Neither
    is inspected here.

    Two themes are equal when their ids are equal, whatever their payloads.
    """

    id: str
    description: str
    payload: Any = field(default=None)
    options: Any = field(default=None)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ThemeValidationError("Id cannot be empty", theme_id=self.id)
        if self.id.lower() != self.id:
            raise ThemeValidationError("Id has to be a lowercase string", theme_id=self.id)
        if any(ch.isspace() for ch in self.id):
            raise ThemeValidationError(
                "Id cannot contain spaces. (Use _ for spaces)", theme_id=self.id
            )
        if not isinstance(self.description, str):
            raise ThemeValidationError("Description must be a string", theme_id=self.id)
        if len(self.description) >= MAX_DESCRIPTION_LEN:
            raise ThemeValidationError(
                f"Theme description too long (max {MAX_DESCRIPTION_LEN - 1} characters)",
                theme_id=self.id,
                details={"length": len(self.description)},
            )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Theme):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def copy_with(
        self,
        *,
        id: str,
        description: str | None = None,
        payload: Any = None,
        options: Any = None,
    ) -> Theme:
        """Return a copy with the given fields replaced. The id is always replaced."""
        return Theme(
            id=id,
            description=self.description if description is None else description,
            payload=self.payload if payload is None else payload,
            options=self.options if options is None else options,
        )

    @classmethod
    def light(cls, id: str | None = None) -> Theme:
        return cls(
            id=id or DEFAULT_LIGHT_THEME_ID,
            description="Default Light Theme",
            payload=_frozen_tokens(LIGHT_TOKENS),
        )

    @classmethod
    def dark(cls, id: str | None = None) -> Theme:
        return cls(
            id=id or DEFAULT_DARK_THEME_ID,
            description="Default Dark Theme",
            payload=_frozen_tokens(DARK_TOKENS),
        )

    @classmethod
    def purple(cls, id: str | None = None) -> Theme:
        return cls(
            id=id or DEFAULT_PURPLE_THEME_ID,
            description="Custom Default Purple Theme",
            payload=_frozen_tokens(PURPLE_TOKENS),
        )


def default_themes() -> list[Theme]:
    """Themes used when a controller is built without an explicit list."""
    return [Theme.light(), Theme.dark()]


def _frozen_tokens(tokens: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(tokens))
