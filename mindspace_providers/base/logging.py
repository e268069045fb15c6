"""Base structured logging utilities for the gateway.

Every module obtains its logger through :func:`get_logger`; child loggers
propagate to one shared ``mindspace`` logger that owns a single stderr
handler (JSON by default). Events are emitted with :func:`log_event` as one
JSON object per line; :func:`normalized_log_event` adds the canonical keys
``phase``, ``attempt`` and ``error_code`` used by chat/retry/fallback events.

API keys must never be passed as fields; use ``mask_api_key`` first.
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

BASE_LOGGER_NAME = "mindspace"
LOG_LEVEL_ENV = "MINDSPACE_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_mindspace_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_mindspace_console_handler"
_FILE_HANDLER_ATTR = "_mindspace_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name (case-insensitive); unknown values yield ``default``."""
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


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared base logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.setLevel(desired)
        for handler in logger.handlers:
            if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
                handler.setLevel(desired)
                # pytest capture swaps sys.stderr between tests
                with contextlib.suppress(ValueError):
                    handler.setStream(sys.stderr)
        return logger

    logger.setLevel(desired)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name``'s logger, ensuring the shared base logger is configured.

    Names outside the ``mindspace`` hierarchy are nested under it so their
    records reach the shared handler.
    """
    base = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
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
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level (number or name). ``None`` keeps the current level.
    file_path: Optional[str]
        When given, attach (or retarget) a rotating file handler; when
        ``None``, remove any file handler previously attached here.
    json_mode: bool
        Formatter choice for the file handler.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        numeric = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in managed:
        if target is not None and getattr(handler, "baseFilename", None) == target:
            handler.setFormatter(_make_formatter(json_mode))
            return logger
        logger.removeHandler(handler)
        handler.close()
    if target is None:
        return logger

    os.makedirs(os.path.dirname(target), exist_ok=True)
    file_handler = RotatingFileHandler(target, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(file_handler, _FILE_HANDLER_ATTR, True)
    file_handler.setLevel(logger.level)
    file_handler.setFormatter(_make_formatter(json_mode))
    logger.addHandler(file_handler)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Parameters
    ----------
    logger: logging.Logger
        Logger obtained from :func:`get_logger`.
    event: str
        Dotted event name (e.g. ``chat.start``).
    ctx: LogContext | None
        Vendor/model context merged into the payload.
    level: int
        Logging level of the record.
    keep_none: bool
        Preserve ``None``-valued fields (as JSON ``null``) instead of dropping them.
    """
    payload: dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("phase", "attempt", "error_code")


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the canonical ``phase``/``attempt``/``error_code`` keys.

    ``phase`` and ``attempt`` are always present (``attempt`` may be null);
    ``error_code`` is omitted when there is no error. Extra fields never
    overwrite the canonical ones.
    """
    fields: dict[str, Any] = {"phase": phase, "attempt": attempt}
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is None or key in fields:
            continue
        fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "BASE_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
