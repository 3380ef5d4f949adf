"""Application logging setup with text and single-line JSON output."""

from __future__ import annotations

import json
import logging
import sys
import threading
import time
from typing import Any

from intake.core.config import settings

_ROOT_LOGGER_NAME = "intake"
_setup_lock = threading.Lock()
_configured = False

# Attributes present on every LogRecord; anything else arrived via `extra=`.
_RESERVED_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
    | {"message", "asctime", "taskName"},
)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_RECORD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON including `extra` fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(_extra_fields(record))
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter that appends `extra` fields as key=value pairs."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        rendered = super().format(record)
        extras = _extra_fields(record)
        if not extras:
            return rendered
        pairs = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        head, sep, tail = rendered.partition("\n")
        return f"{head} {pairs}{sep}{tail}"


def build_formatter(log_format: str, *, use_utc: bool) -> logging.Formatter:
    """Return the formatter for the configured log format."""
    formatter: logging.Formatter = JsonFormatter() if log_format == "json" else TextFormatter()
    if use_utc:
        formatter.converter = time.gmtime
    return formatter


def configure_logging(*, force: bool = False) -> logging.Logger:
    """Attach a stream handler to the application logger once per process."""
    global _configured
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    with _setup_lock:
        if _configured and not force:
            return logger
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_formatter(settings.log_format, use_utc=settings.log_use_utc))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
        logger.propagate = False
        _configured = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the application namespace."""
    if name == _ROOT_LOGGER_NAME or name.startswith(f"{_ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
