"""Controller initialization policies and the startup load handle."""

from __future__ import annotations

import asyncio
from concurrent.futures import Future
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generator, Union

from themekeeper.errors import ConflictingInitPolicyError

if TYPE_CHECKING:
    from themekeeper.controller import ThemeController


class PendingThemeLoad:
    """Awaitable handle over the read of the persisted theme id.

    Resolves to the saved id as stored, or ``None`` when nothing was saved or
    the store could not be read. The id is not checked against the registry.
    The handle can be awaited, polled or cancelled; the controller never
    applies its result on its own.
    """

    def __init__(self, future: asyncio.Future[str | None] | Future[str | None]) -> None:
        self._future = future

    def done(self) -> bool:
        return self._future.done()

    def cancelled(self) -> bool:
        return self._future.cancelled()

    def cancel(self) -> bool:
        return self._future.cancel()

    def result(self) -> str | None:
        """Return the saved id; raises ``asyncio.InvalidStateError`` while pending."""
        if not self._future.done():
            raise asyncio.InvalidStateError("saved theme id is still loading")
        return self._future.result()

    def __await__(self) -> Generator[Any, None, str | None]:
        if isinstance(self._future, Future):
            return asyncio.wrap_future(self._future).__await__()
        return self._future.__await__()


InitHandler = Callable[["ThemeController", PendingThemeLoad], None]


@dataclass(frozen=True, slots=True)
class NoInit:
    """Start on the default theme and leave loading to the host."""


@dataclass(frozen=True, slots=True)
class LoadFromDisk:
    """Read the saved selection in the background and apply it if valid."""


@dataclass(frozen=True, slots=True)
class CustomInit:
    """Hand the controller and a :class:`PendingThemeLoad` to ``handler``."""

    handler: InitHandler


InitPolicy = Union[NoInit, LoadFromDisk, CustomInit]


def resolve_init_policy(
    policy: InitPolicy | None,
    *,
    load_on_init: bool = False,
    on_init: InitHandler | None = None,
) -> InitPolicy:
    """Collapse the policy argument and the legacy flags into one policy."""
    if load_on_init and on_init is not None:
        raise ConflictingInitPolicyError("Cannot set both on_init and load_on_init")
    if policy is not None:
        if load_on_init or on_init is not None:
            raise ConflictingInitPolicyError(
                "Pass either init_policy or the load_on_init/on_init flags, not both"
            )
        if not isinstance(policy, (NoInit, LoadFromDisk, CustomInit)):
            raise TypeError(f"Unsupported init policy: {policy!r}")
        return policy
    if load_on_init:
        return LoadFromDisk()
    if on_init is not None:
        return CustomInit(on_init)
    return NoInit()
