"""Structured JSON logging to standard error."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any


class _JSONHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        entry: dict[str, Any] = {
            "level": record.level_name,
            "ts": record.created,
            "caller": f"{record.filename}:{record.lineno}",
            "msg": record.getMessage(),
        }
        for key, value in record.fields.items():
            entry.setdefault(key, value)
        try:
            sys.stderr.write(json.dumps(entry, default=str) + "\n")
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        sys.stderr.flush()


_LOGGER = logging.getLogger("apisample")
_LOGGER.setLevel(logging.INFO)
_LOGGER.propagate = False
if not _LOGGER.handlers:
    _LOGGER.addHandler(_JSONHandler())


def _log(level: int, name: str, msg: str, fields: dict[str, Any]) -> None:
    _LOGGER.log(level, msg, extra={"fields": fields, "level_name": name}, stacklevel=3)


def sync() -> None:
    """Flush log output, logging an error if that fails."""
    try:
        for handler in _LOGGER.handlers:
            handler.flush()
    except (OSError, ValueError) as exc:
        _log(logging.ERROR, "error", "Failed to sync logs", {"error": str(exc)})


def info(msg: str, **kwargs: Any) -> None:
    _log(logging.INFO, "info", msg, kwargs)


def debug(msg: str, **kwargs: Any) -> None:
    _log(logging.DEBUG, "debug", msg, kwargs)


def warn(msg: str, **kwargs: Any) -> None:
    _log(logging.WARNING, "warn", msg, kwargs)


def error(msg: str, **kwargs: Any) -> None:
    _log(logging.ERROR, "error", msg, kwargs)


def fatal(msg: str, **kwargs: Any) -> None:
    """Log at fatal level, flush, and exit with status 1."""
    _log(logging.CRITICAL, "fatal", msg, kwargs)
    sync()
    raise SystemExit(1)


def panic(msg: str, **kwargs: Any) -> None:
    """Log at panic level and raise RuntimeError carrying ``msg``."""
    _log(logging.CRITICAL, "panic", msg, kwargs)
    raise RuntimeError(msg)