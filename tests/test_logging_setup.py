from __future__ import annotations

import logging
from pathlib import Path

import pytest

from themekeeper.logging_setup import configure_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("themekeeper")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_configure_logging_writes_rotating_file(tmp_path: Path, clean_logger) -> None:
    logger = configure_logging(tmp_path / "logs")
    logging.getLogger("themekeeper.controller").warning("provider %s: test entry", "main")
    for handler in logger.handlers:
        handler.flush()

    content = (tmp_path / "logs" / "themekeeper.log").read_text(encoding="utf-8")
    assert "WARNING themekeeper.controller provider main: test entry" in content


def test_configure_logging_is_idempotent(tmp_path: Path, clean_logger) -> None:
    first = configure_logging(tmp_path / "logs")
    second = configure_logging(tmp_path / "other")
    assert first is second
    assert len(first.handlers) == 1
    assert not (tmp_path / "other").exists()
