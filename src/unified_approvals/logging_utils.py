"""Logging setup for the approvals engine.

Transitions log at INFO, refusals at WARNING. The level and the optional log
file come from ``LOG_LEVEL`` / ``LOG_FILE``.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path

from unified_approvals.config import load_settings

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_logging_configured = False
_logging_lock = threading.Lock()

_logger = logging.getLogger(__name__)


def _formatter() -> logging.Formatter:
    return logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)


def _file_handler(log_file: str) -> logging.Handler | None:
    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file)
    except OSError as exc:
        _logger.warning(
            "Approvals log file %s unavailable, logging to stderr only: %s", log_file, exc
        )
        return None
    handler.setFormatter(_formatter())
    return handler


def configure_logging() -> None:
    """Install the stderr handler and, when configured, the log file."""
    global _logging_configured

    settings = load_settings()
    level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(_formatter())
    handlers: list[logging.Handler] = [stream_handler]

    if settings.logging.file:
        file_handler = _file_handler(settings.logging.file)
        if file_handler is not None:
            handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    _logging_configured = True
    _logger.debug("Approvals logging configured at %s", logging.getLevelName(level))


def get_logger(name: str) -> logging.Logger:
    if not _logging_configured:
        with _logging_lock:
            if not _logging_configured:
                configure_logging()
    return logging.getLogger(name)
