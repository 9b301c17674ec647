"""Error codes and exception types for theme selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar


class ErrorCode(Enum):
    """Standardized error codes for theme operations."""

    # Construction errors
    THEME_INVALID = auto()
    DUPLICATE_ID = auto()
    UNKNOWN_DEFAULT_ID = auto()
    CONFLICTING_INIT_POLICY = auto()

    # Usage errors
    UNKNOWN_ID = auto()
    ACTIVE_THEME_REMOVAL = auto()

    # Storage errors
    THEME_FILE_INVALID = auto()
    PERSISTENCE_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.THEME_INVALID: "The theme definition is invalid.",
    ErrorCode.DUPLICATE_ID: "Conflicting theme ids found. Every theme needs a unique id.",
    ErrorCode.UNKNOWN_DEFAULT_ID: "No theme matches the requested default theme id.",
    ErrorCode.CONFLICTING_INIT_POLICY: "Cannot combine loading on init with a custom init handler.",
    ErrorCode.UNKNOWN_ID: "No theme is registered under this id.",
    ErrorCode.ACTIVE_THEME_REMOVAL: "The active theme cannot be removed. Switch themes first.",
    ErrorCode.THEME_FILE_INVALID: "The theme file could not be loaded.",
    ErrorCode.PERSISTENCE_FAILED: "The theme selection could not be read or written.",
}


@dataclass(eq=False)
class ThemeError(ValueError):
    """Base exception for theme errors with a code and context."""

    code: ClassVar[ErrorCode] = ErrorCode.THEME_INVALID

    message: str = ""
    theme_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected theme error occurred.")

    def __str__(self) -> str:
        parts = [self.message]
        if self.theme_id is not None:
            parts.append(f" (theme id: {self.theme_id!r})")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "code": self.code.name,
            "message": self.message,
            "theme_id": self.theme_id,
            "details": self.details,
        }


class ThemeValidationError(ThemeError):
    """Raised when a theme record or theme list fails validation."""

    code = ErrorCode.THEME_INVALID


class DuplicateThemeIdError(ThemeError):
    """Raised when two themes share the same id."""

    code = ErrorCode.DUPLICATE_ID


class UnknownDefaultThemeIdError(ThemeError):
    """Raised when the requested default id is not registered."""

    code = ErrorCode.UNKNOWN_DEFAULT_ID


class ConflictingInitPolicyError(ThemeError):
    """Raised when more than one initialization strategy is supplied."""

    code = ErrorCode.CONFLICTING_INIT_POLICY


class UnknownThemeIdError(ThemeError):
    """Raised when an operation names a theme id that is not registered."""

    code = ErrorCode.UNKNOWN_ID


class ActiveThemeRemovalError(ThemeError):
    """Raised when removal of the currently selected theme is attempted."""

    code = ErrorCode.ACTIVE_THEME_REMOVAL


class ThemeFileError(ThemeValidationError):
    """Raised when a theme file cannot be parsed into a theme."""

    code = ErrorCode.THEME_FILE_INVALID


class PersistenceError(ThemeError):
    """Raised by stores when their backing storage fails."""

    code = ErrorCode.PERSISTENCE_FAILED
