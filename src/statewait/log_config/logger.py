"""Logging setup and contextual logger.

statewait never configures logging on import; applications (or tests) call
:func:`setup_logging` when they want the library's debug output.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGER_NAME = "statewait"


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = None,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """Attach a console handler, and optionally a rotating file handler, to
    the ``statewait`` logger.

    Safe to call multiple times; handlers installed by an earlier call are
    replaced.  The root logger is left alone.

    Args:
        log_level: One of DEBUG / INFO / WARNING / ERROR / CRITICAL.
        log_dir: Directory for ``statewait.log``; *None* logs to console only.
        max_bytes: Max size per log file before rotation.
        backup_count: Number of rotated backup files to keep.

    Returns:
        The configured ``statewait`` logger.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "statewait.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib Logger for *name* (typically ``__name__``)."""
    return logging.getLogger(name)


class ContextualLogger:
    """Prepends ``[key=value]`` context to every message.

    Usage::

        log = ContextualLogger(get_logger(__name__), emitter="Connection")
        log.debug("Waiting for %r", "ready")  # => "[emitter=Connection] Waiting for 'ready'"
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        self._logger = logger
        self._context = context
        self._prefix = " ".join(f"[{k}={v}]" for k, v in context.items())

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def bind(self, **context: Any) -> ContextualLogger:
        """Return a logger carrying this context plus *context*."""
        return ContextualLogger(self._logger, **{**self._context, **context})

    def _fmt(self, msg: str) -> str:
        return f"{self._prefix} {msg}" if self._prefix else msg

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.log(level, self._fmt(msg), *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(self._fmt(msg), *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(self._fmt(msg), *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(self._fmt(msg), *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(self._fmt(msg), *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.exception(self._fmt(msg), *args, **kwargs)
