"""Structured logging utilities for the ambient cancellation package.

Rationale:
- One place configures JSON (or plain) output for every module.
- Scope lifecycle events go through ``log_event`` so they share one schema.
- Dependency-free: stdlib ``logging`` only.

The base logger is ``ambient_cancellation``; module loggers are its children
and propagate to its single managed stderr handler. The level comes from
``AMBIENT_CANCELLATION_LOG_LEVEL`` (default ``WARNING``) and can be changed at
runtime with ``configure_logger``.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "ambient_cancellation"
LOG_LEVEL_ENV = "AMBIENT_CANCELLATION_LOG_LEVEL"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_BASE_LOGGER_ATTR = "_ambient_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_ambient_console_handler"
_FILE_HANDLER_ATTR = "_ambient_file_handler"


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Parse a logging level name into an integer constant.

    Accepts DEBUG, INFO, WARN/WARNING, ERROR, CRITICAL case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared base logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        return logger

    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [h for h in logger.handlers if not getattr(h, _CONSOLE_HANDLER_ATTR, False)]
    logger.addHandler(handler)
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.WARNING) -> logging.Logger:
    """Return the base logger or one of its children.

    Names outside the ``ambient_cancellation`` namespace are nested under it so
    every package logger shares the managed handler.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared base logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level (number or name). ``None`` keeps the current level.
    file_path: Optional[str]
        Attach (or keep) a rotating file handler writing to this path. ``None``
        removes any file handler previously attached by this function.
    json_mode: bool
        JSON formatter when ``True``, plain text otherwise. Applied to every
        managed handler.

    Returns
    -------
    logging.Logger
        The base logger.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.WARNING)

    if level is not None:
        if isinstance(level, str):
            logger.setLevel(_parse_level(level, default=logger.level))
        else:
            logger.setLevel(level)

    managed_files = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    keep: Optional[logging.Handler] = None
    abs_path = None
    if file_path is not None:
        abs_path = os.path.abspath(os.path.expanduser(file_path))
        os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    for h in managed_files:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            keep = h
            continue
        logger.removeHandler(h)
        with contextlib.suppress(Exception):  # pragma: no cover - close failures are irrelevant here
            h.close()

    if abs_path is not None and keep is None:
        # 10MB x 5 backups
        fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(fh, _FILE_HANDLER_ATTR, True)
        logger.addHandler(fh)

    for h in logger.handlers:
        if getattr(h, _CONSOLE_HANDLER_ATTR, False) or getattr(h, _FILE_HANDLER_ATTR, False):
            h.setLevel(logger.level)
            h.setFormatter(_make_formatter(json_mode))
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON payload.

    Parameters
    ----------
    logger: logging.Logger
        Logger returned by ``get_logger``.
    event: str
        Event name (e.g. ``scope.enter``).
    ctx: LogContext | None
        Scope context; merged shallowly.
    level: int
        Logging level. Nothing is serialized when the level is disabled.
    **fields: Any
        Additional serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=repr))


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
