"""
Log setup for the API process.

Everything goes to stdout: one JSON object per line normally, readable text
lines when ``DEBUG`` is on.
"""

import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

from blog_api.core.config import settings

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Adds ``service``, ``version`` and ``level`` to each JSON line."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["service"] = settings.PROJECT_NAME
        log_record["version"] = settings.VERSION
        log_record["level"] = record.levelname


def _build_formatter() -> logging.Formatter:
    if settings.DEBUG:
        return logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=DATE_FORMAT,
        )
    return CustomJsonFormatter("%(asctime)s %(level)s %(name)s %(message)s", datefmt=DATE_FORMAT)


def setup_logging() -> None:
    """Install the stdout handler on the root logger (DEBUG level in debug mode, INFO otherwise)."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    # replace our own handler on a second call instead of stacking another
    for existing in list(root_logger.handlers):
        if getattr(existing, "_blog_api", False):
            root_logger.removeHandler(existing)
    handler._blog_api = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)

    # per-request access lines and passlib's bcrypt version warnings are noise here
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass ``__name__``."""
    return logging.getLogger(name)
