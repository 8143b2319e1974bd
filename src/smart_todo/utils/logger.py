"""Application logging to a rotating file in platformdirs user_log_dir.

Modules log through children of the ``smart_todo`` logger (``smart_todo.store``,
``smart_todo.cli``, ...). Only the parent has a handler, so one file collects
everything and the configured level applies to all of them.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "smart_todo"
_LOG_FILE = "smart-todo.log"
_ROTATE_BYTES = 2 * 1024 * 1024
_ROTATED_FILES = 5
_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Where the log file is written."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _configure() -> logging.Logger:
    path = log_file_path()
    target = os.path.abspath(path)
    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.INFO)
    # Keep records out of the root logger (and off the terminal)
    logger.propagate = False

    # Other handlers (test capture, say) may already be attached; only our file matters
    file_handlers = [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    for handler in file_handlers:
        if handler.baseFilename != target:
            logger.removeHandler(handler)
            handler.close()
    if any(h.baseFilename == target for h in file_handlers):
        return logger

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=_ROTATE_BYTES, backupCount=_ROTATED_FILES, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    logger.addHandler(handler)
    return logger


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or its child for ``component``.

    The file handler is attached on first call.
    """
    global _logger
    if _logger is None:
        _logger = _configure()
    if component:
        return _logger.getChild(component)
    return _logger


def set_log_level(level: str) -> None:
    """Apply a level name such as "DEBUG"; unknown names fall back to INFO."""
    get_logger().setLevel(getattr(logging, level.upper(), logging.INFO))
