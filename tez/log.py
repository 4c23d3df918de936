"""Package logging helpers.

The UI owns the terminal, so records never go to the console. They are
dropped unless a log file is configured with ``configure_file_logging``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

_proj_name = "tez"
LOG_ENV_VAR = "TEZ_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(threadName)s %(name)s: %(message)s"

logging.getLogger(_proj_name).addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package log or a sub-log for ``name`` if provided.

    Module names already under the package (``tez.search.engine``) are used
    as-is; anything else is nested below the package root.
    """
    if not name or name == _proj_name:
        return logging.getLogger(_proj_name)
    if name.startswith(f"{_proj_name}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_proj_name}.{name}")


def configure_file_logging(path: Path | str | None = None, level: str | int = "INFO") -> logging.Logger:
    """Attach a file handler to the package logger.

    ``path`` falls back to the ``TEZ_LOG`` environment variable. With neither
    set the package logger is returned untouched.
    """
    log = get_logger()
    target = path if path is not None else os.environ.get(LOG_ENV_VAR)
    if not target:
        return log

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.FileHandler(Path(target), encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    log.addHandler(handler)
    log.setLevel(level)
    return log
