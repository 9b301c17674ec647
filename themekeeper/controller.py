"""Runtime theme selection controller."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from concurrent.futures import Future
from concurrent.futures import wait as wait_futures
from dataclasses import dataclass
from time import monotonic
from typing import Any, Callable, Coroutine, Iterable, Union

from PySide6.QtCore import QCoreApplication, QObject, Qt, Signal

from themekeeper.background import shared_background_loop
from themekeeper.config.settings import ThemeSettings
from themekeeper.errors import ActiveThemeRemovalError, UnknownThemeIdError
from themekeeper.persistence import QSettingsThemeStore, ThemeStore, scope_key_for
from themekeeper.policy import (
    CustomInit,
    InitHandler,
    InitPolicy,
    LoadFromDisk,
    PendingThemeLoad,
    resolve_init_policy,
)
from themekeeper.themes.models import Theme, default_themes
from themekeeper.themes.registry import ThemeRegistry

logger = logging.getLogger(__name__)

ThemeChangedHook = Callable[[Theme, Theme], None]
PendingWork = Union[asyncio.Future, Future]


@dataclass(frozen=True, slots=True)
class ThemeChange:
    """Event delivered to subscribers.

    For selection changes ``old`` and ``new`` differ. When a theme was added
    or removed the selection is unchanged, both fields hold the current theme
    and ``registry_changed`` is set.
    """

    old: Theme
    new: Theme
    registry_changed: bool = False


Subscriber = Callable[[ThemeChange], None]


class Subscription:
    """Handle returned by :meth:`ThemeController.subscribe`."""

    __slots__ = ("_controller", "_callback", "_active")

    def __init__(self, controller: ThemeController, callback: Subscriber) -> None:
        self._controller = controller
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._controller.unsubscribe(self)


class ThemeController(QObject):
    """Owns the theme registry and the current selection.

    All mutating calls are expected from the thread that owns the controller.
    Store I/O never blocks them. Inside a running asyncio loop it is a task on
    that loop; otherwise it runs on a background loop thread, and a saved
    selection read there is handed back to the owning thread by a queued
    signal (when a Qt application exists) or by :meth:`wait_idle_sync`.
    """

    theme_changed = Signal(str, str)  # old id, new id
    themes_changed = Signal()
    _saved_theme_ready = Signal()

    def __init__(
        self,
        provider_id: str = "default",
        themes: Iterable[Theme] | None = None,
        *,
        default_id: str | None = None,
        persist_on_change: bool = False,
        load_on_init: bool = False,
        on_changed: ThemeChangedHook | None = None,
        on_init: InitHandler | None = None,
        init_policy: InitPolicy | None = None,
        store: ThemeStore | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._registry = ThemeRegistry(
            default_themes() if themes is None else themes, default_id
        )
        self._init_policy = resolve_init_policy(
            init_policy, load_on_init=load_on_init, on_init=on_init
        )
        self._current = self._registry.default
        self._provider_id = provider_id
        self._scope_key = scope_key_for(provider_id)
        self._store: ThemeStore = store if store is not None else QSettingsThemeStore()
        self._persist_on_change = persist_on_change
        self._on_changed = on_changed
        self._subscribers: list[Subscription] = []
        self._pending: set[PendingWork] = set()
        self._pending_lock = threading.Lock()
        self._loaded_ids: deque[str | None] = deque()
        self._last_write: PendingWork | None = None
        self._saved_theme_ready.connect(
            self._deliver_saved_themes, Qt.ConnectionType.QueuedConnection
        )

        if isinstance(self._init_policy, LoadFromDisk):
            if _running_loop() is not None:
                self._spawn(self.load_theme_from_disk())
            else:
                self._spawn(self._read_saved_theme_id(), on_done=self._saved_theme_read)
        elif isinstance(self._init_policy, CustomInit):
            self._init_policy.handler(self, self._pending_saved_theme())

    @classmethod
    def from_settings(
        cls,
        settings: ThemeSettings,
        provider_id: str = "default",
        themes: Iterable[Theme] | None = None,
        **kwargs: Any,
    ) -> ThemeController:
        """Build a controller whose defaults and store come from ``settings``."""
        kwargs.setdefault("default_id", settings.default_theme_id)
        kwargs.setdefault("persist_on_change", settings.persist_on_change)
        if "on_init" not in kwargs and "init_policy" not in kwargs:
            kwargs.setdefault("load_on_init", settings.load_on_init)
        kwargs.setdefault("store", QSettingsThemeStore(settings))
        return cls(provider_id, themes, **kwargs)

    # -- accessors --

    @property
    def theme(self) -> Theme:
        return self._current

    @property
    def current_theme_id(self) -> str:
        return self._current.id

    @property
    def provider_id(self) -> str:
        return self._provider_id

    @property
    def scope_key(self) -> str:
        return self._scope_key

    @property
    def init_policy(self) -> InitPolicy:
        return self._init_policy

    @property
    def persist_on_change(self) -> bool:
        return self._persist_on_change

    def all_themes(self) -> tuple[Theme, ...]:
        return self._registry.themes()

    def has_theme(self, theme_id: str) -> bool:
        return theme_id in self._registry

    def get_theme(self, theme_id: str) -> Theme | None:
        return self._registry.lookup(theme_id)

    # -- selection --

    def set_theme(self, theme_id: str) -> None:
        """Select the theme with ``theme_id``; selecting the current one is a no-op."""
        theme = self._registry.lookup(theme_id)
        if theme is None:
            raise UnknownThemeIdError(f"No theme with id {theme_id!r}", theme_id=theme_id)
        self._apply(theme)

    def next_theme(self) -> None:
        """Cycle to the next theme in registration order."""
        self.set_theme(self._registry.next_id(self._current.id))

    def _apply(self, theme: Theme | None) -> None:
        if theme is None or theme.id == self._current.id:
            return
        old = self._current
        self._current = theme
        logger.debug("provider %s: theme %s -> %s", self._provider_id, old.id, theme.id)

        if self._on_changed is not None:
            try:
                self._on_changed(old, theme)
            except Exception:
                logger.exception("on_changed hook failed for %s -> %s", old.id, theme.id)
        self._notify(ThemeChange(old=old, new=theme))
        self.theme_changed.emit(old.id, theme.id)

        if self._persist_on_change:
            self._last_write = self._spawn(self._save_best_effort(theme.id, self._last_write))

    # -- registry mutation --

    def add_theme(self, theme: Theme) -> None:
        """Append ``theme``; it becomes the last entry in cycling order."""
        self._registry.add(theme)
        self._notify_registry_changed()

    def remove_theme(self, theme_id: str) -> None:
        if theme_id == self._current.id:
            raise ActiveThemeRemovalError(f"{theme_id} is set as current theme.", theme_id=theme_id)
        self._registry.remove(theme_id)
        self._notify_registry_changed()

    def _notify_registry_changed(self) -> None:
        self._notify(ThemeChange(old=self._current, new=self._current, registry_changed=True))
        self.themes_changed.emit()

    # -- subscribers --

    def subscribe(self, callback: Subscriber) -> Subscription:
        subscription = Subscription(self, callback)
        self._subscribers.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        try:
            self._subscribers.remove(subscription)
        except ValueError:
            return False
        subscription._active = False
        return True

    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _notify(self, change: ThemeChange) -> None:
        for subscription in tuple(self._subscribers):
            if not subscription.active:
                continue
            try:
                subscription._callback(change)
            except Exception:
                logger.exception(
                    "theme subscriber %r failed on provider %s",
                    subscription._callback,
                    self._provider_id,
                )

    # -- persistence --

    async def load_theme_from_disk(self) -> None:
        """Apply the saved theme, if one was saved and is still registered."""
        self._apply_saved_id(await self._read_saved_theme_id())

    async def save_theme_to_disk(self) -> None:
        """Persist the current selection; storage errors propagate."""
        await self._store.save(self._scope_key, self._current.id)

    async def forget_saved_theme(self) -> None:
        """Remove the saved selection for this provider."""
        await self._store.clear(self._scope_key)

    async def wait_idle(self) -> None:
        """Wait for outstanding persistence work and apply any loaded selection."""
        loop = asyncio.get_running_loop()
        while True:
            waiting = self._awaitable_work(loop)
            # a finished read queues its id before it leaves the pending set
            self._deliver_saved_themes()
            if not waiting:
                waiting = self._awaitable_work(loop)
                if not waiting:
                    return
            await asyncio.wait(
                [asyncio.wrap_future(w) if isinstance(w, Future) else w for w in waiting]
            )

    def wait_idle_sync(self, timeout: float | None = None) -> bool:
        """Block until background-thread work is done and apply its results.

        For hosts without a running asyncio loop. Returns ``False`` if
        ``timeout`` ran out first.
        """
        deadline = None if timeout is None else monotonic() + timeout
        while True:
            waiting = self._background_work()
            self._deliver_saved_themes()
            if not waiting:
                waiting = self._background_work()
                if not waiting:
                    return True
            remaining = None
            if deadline is not None:
                remaining = deadline - monotonic()
                if remaining <= 0:
                    return False
            wait_futures(waiting, timeout=remaining)

    def pending_tasks(self) -> tuple[PendingWork, ...]:
        with self._pending_lock:
            return tuple(self._pending)

    def _background_work(self) -> list[Future[Any]]:
        return [work for work in self.pending_tasks() if isinstance(work, Future)]

    def _awaitable_work(self, loop: asyncio.AbstractEventLoop) -> list[PendingWork]:
        return [
            work
            for work in self.pending_tasks()
            if isinstance(work, Future) or work.get_loop() is loop
        ]

    def _apply_saved_id(self, saved_id: str | None) -> None:
        if saved_id is None:
            return
        theme = self._registry.lookup(saved_id)
        if theme is None:
            logger.info(
                "provider %s: saved theme %r is no longer registered; keeping %s",
                self._provider_id,
                saved_id,
                self._current.id,
            )
            return
        self._apply(theme)

    async def _read_saved_theme_id(self) -> str | None:
        try:
            saved_id = await self._store.load(self._scope_key)
        except Exception:
            logger.warning(
                "provider %s: could not read saved theme; treating as absent",
                self._provider_id,
                exc_info=True,
            )
            return None
        if saved_id is not None and not isinstance(saved_id, str):
            logger.warning(
                "provider %s: ignoring saved theme of type %s",
                self._provider_id,
                type(saved_id).__name__,
            )
            return None
        return saved_id

    async def _save_best_effort(self, theme_id: str, previous: PendingWork | None) -> None:
        # writes land in selection order
        if previous is not None:
            await _settle(previous)
        try:
            await self._store.save(self._scope_key, theme_id)
        except Exception:
            logger.warning(
                "provider %s: could not persist theme %s",
                self._provider_id,
                theme_id,
                exc_info=True,
            )

    def _pending_saved_theme(self) -> PendingThemeLoad:
        return PendingThemeLoad(self._spawn(self._read_saved_theme_id()))

    def _saved_theme_read(self, work: Future[str | None]) -> None:
        # runs on the background loop thread
        if work.cancelled():
            return
        with self._pending_lock:
            self._loaded_ids.append(work.result())
        if QCoreApplication.instance() is not None:
            self._saved_theme_ready.emit()

    def _deliver_saved_themes(self) -> None:
        while True:
            with self._pending_lock:
                if not self._loaded_ids:
                    return
                saved_id = self._loaded_ids.popleft()
            self._apply_saved_id(saved_id)

    def _spawn(
        self,
        coro: Coroutine[Any, Any, Any],
        on_done: Callable[[Any], None] | None = None,
    ) -> PendingWork:
        loop = _running_loop()
        if loop is not None:
            work: PendingWork = loop.create_task(coro)
        else:
            work = shared_background_loop().submit(coro)
        if on_done is not None:
            work.add_done_callback(on_done)
        with self._pending_lock:
            self._pending.add(work)
        work.add_done_callback(self._untrack)
        return work

    def _untrack(self, work: PendingWork) -> None:
        with self._pending_lock:
            self._pending.discard(work)


async def _settle(work: PendingWork) -> None:
    if isinstance(work, Future):
        await asyncio.wait([asyncio.wrap_future(work)])
    elif work.get_loop() is asyncio.get_running_loop():
        await asyncio.wait([work])


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None
