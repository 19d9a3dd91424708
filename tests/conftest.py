"""Global test configuration — shared fixtures.

This conftest provides:

1. **Settings factory** — ``write_settings`` writes a ``settings.toml``
   under ``tmp_path`` and returns its path, so config and CLI tests never
   touch a real ``config/`` directory.

2. **Logger hygiene** — ``restore_logger`` removes any file handlers a
   test attached to the package logger and restores its level, so one
   test's ``--log-dir`` never leaks into the next.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from textvalue.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def write_settings(tmp_path: Path):
    """Factory fixture — returns a callable that writes settings TOML.

    Usage::

        def test_something(write_settings):
            path = write_settings('[color]\\nmax_intensity = 150\\n')
    """

    def _factory(content: str, name: str = "settings.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _factory


@pytest.fixture
def restore_logger() -> Iterator[None]:
    """Detach file handlers added during the test and reset the logger level."""
    original_level = logger.level
    original_handlers = list(logger.handlers)
    try:
        yield
    finally:
        for h in list(logger.handlers):
            if h not in original_handlers:
                logger.removeHandler(h)
                if isinstance(h, logging.FileHandler):
                    h.close()
        logger.setLevel(original_level)
