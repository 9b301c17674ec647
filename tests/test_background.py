"""Tests for the background event loop thread."""

from __future__ import annotations

import asyncio
import threading

import pytest

from themekeeper.background import BackgroundLoop, shared_background_loop


@pytest.fixture
def background():
    loop = BackgroundLoop(name="themekeeper-test")
    yield loop
    loop.stop()


def test_submit_runs_on_loop_thread(background) -> None:
    async def where() -> str:
        return threading.current_thread().name

    assert background.submit(where()).result(timeout=5) == "themekeeper-test"
    assert background.running


def test_blocked_coroutine_does_not_hold_up_others(background) -> None:
    gate = threading.Event()

    async def blocked() -> str:
        await asyncio.to_thread(gate.wait, 5)
        return "blocked"

    async def quick() -> str:
        return "quick"

    slow = background.submit(blocked())
    assert background.submit(quick()).result(timeout=5) == "quick"
    assert not slow.done()
    gate.set()
    assert slow.result(timeout=5) == "blocked"


def test_stop_cancels_outstanding_work() -> None:
    background = BackgroundLoop()

    async def forever() -> None:
        await asyncio.Event().wait()

    future = background.submit(forever())
    background.stop()
    assert not background.running
    assert future.cancelled()


def test_loop_restarts_after_stop() -> None:
    background = BackgroundLoop()

    async def value() -> int:
        return 7

    assert background.submit(value()).result(timeout=5) == 7
    background.stop()
    assert background.submit(value()).result(timeout=5) == 7
    background.stop()


def test_shared_loop_is_a_singleton() -> None:
    assert shared_background_loop() is shared_background_loop()
