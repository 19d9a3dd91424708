"""Logging for textvalue.

The text operations are silent by design of their callers: every CLI
command writes its result to stdout, so stderr only carries warnings and
errors.  What is worth keeping for later diagnosis is logged at lower
levels and only reaches a file:

  - DEBUG: encoding fallbacks and surrogate repair in
    :mod:`textvalue.encoding`, truncation in :meth:`TextValue.truncate`,
    the full traceback of a failed CLI command
  - INFO: which settings file was loaded

Call :func:`configure_file_logging` (the CLI's ``--log-dir``) to capture
them in ``textvalue_<timestamp>.log``.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

LOGGER_NAME = "textvalue"
DEFAULT_LOG_DIR = "data/logs"

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _formatter() -> logging.Formatter:
    return logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)


logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.INFO)

# stdout belongs to command output; stderr gets problems only
handler = logging.StreamHandler(sys.stderr)
handler.setLevel(logging.WARNING)
handler.setFormatter(_formatter())
logger.addHandler(handler)


def log_file_name(now: datetime | None = None) -> str:
    """``textvalue_YYYY-MM-DDTHH-MM-SS.log`` for *now* (default: the current time)."""
    stamp = (now or datetime.now()).strftime("%Y-%m-%dT%H-%M-%S")
    return f"{LOGGER_NAME}_{stamp}.log"


def configure_file_logging(
    log_dir: str = DEFAULT_LOG_DIR,
    *,
    level: int = logging.INFO,
) -> logging.FileHandler:
    """Send records at *level* and above to a new file under *log_dir*.

    The directory is created when missing.  Pass ``level=logging.DEBUG``
    to see why a particular string came out re-encoded.  The returned
    handler is already attached; remove and close it to stop writing.
    """
    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(path / log_file_name(), encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(_formatter())

    if level < logger.level:
        logger.setLevel(level)

    logger.addHandler(file_handler)
    return file_handler


__all__ = ["configure_file_logging", "log_file_name", "logger"]
