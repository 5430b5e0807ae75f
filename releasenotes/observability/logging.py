"""Leveled logging for the release notes API.

Development gets human-readable lines; production emits one JSON object per
line so Cloud Logging can pick up severity and message fields.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Final

_HANDLER_ATTACHED: bool = False
_TEXT_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"


class JsonLineFormatter(logging.Formatter):
    """Format records as single-line JSON for structured log ingestion."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, _DATE_FORMAT),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _environment() -> str:
    return os.getenv("RELEASENOTES_ENV", os.getenv("NODE_ENV", "development"))


def _resolve_level() -> int:
    default = "DEBUG" if _environment() == "development" else "INFO"
    level_name = os.getenv("RELEASENOTES_LOG_LEVEL", default).upper()
    return getattr(logging, level_name, logging.INFO)


def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    if _environment() == "production":
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; the root stream handler is attached once."""
    global _HANDLER_ATTACHED

    level = _resolve_level()

    if not _HANDLER_ATTACHED:
        root = logging.getLogger()
        root.addHandler(_build_handler())
        root.setLevel(level)
        _HANDLER_ATTACHED = True

    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
