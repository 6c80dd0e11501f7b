"""
One log line format for the placement core and the HTTP service:

    2026-01-06T14:05:52Z [source] LEVEL message

LOG_LEVEL picks the threshold: TRACE, DEBUG, INFO (default), WARNING or
ERROR. TRACE adds a line per scored (guest, bed) pair.

    from lodging.logging_config import configure_logging, get_logger

    configure_logging(source="api")
    log = get_logger(__name__)
"""

from __future__ import annotations

import logging
import os
import re
import sys
from datetime import UTC, datetime

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS: dict[str, int] = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
NOISY_LOGGERS = ("httpx", "httpcore")


def _log_trace(self: logging.Logger, msg: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, msg, args, **kwargs)  # type: ignore[arg-type]


logging.Logger.trace = _log_trace  # type: ignore[attr-defined]


class ISO8601Formatter(logging.Formatter):
    """UTC timestamp, bracketed source, level, message (plus traceback)."""

    TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

    def __init__(self, source: str = "lodging"):
        super().__init__()
        self.source = source

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, UTC).strftime(self.TIME_FORMAT)
        line = f"{stamp} [{self.source}] {record.levelname} {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class HealthCheckFilter(logging.Filter):
    """Hides health-probe access lines above DEBUG."""

    HEALTH_REQUEST = re.compile(r'"GET (/api)?/health[ ?]|(/api)?/health\b.* 200\b')

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno <= logging.DEBUG:
            return True
        return self.HEALTH_REQUEST.search(record.getMessage()) is None


def resolve_level(level: int | str | None = None, debug: bool | None = None) -> int:
    """Explicit level wins, then ``debug``, then LOG_LEVEL, then INFO."""
    if isinstance(level, int):
        return level
    if isinstance(level, str) and level.upper() in LEVELS:
        return LEVELS[level.upper()]
    if debug:
        return logging.DEBUG
    return LEVELS.get(os.getenv("LOG_LEVEL", "").upper(), logging.INFO)


def _stdout_handler(source: str, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))
    handler.addFilter(HealthCheckFilter())
    return handler


def configure_logging(
    source: str = "lodging",
    level: int | str | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """
    Replace the root logger's handlers with a single stdout handler.

    uvicorn's loggers share that handler and stop propagating, so their
    access lines get the same format and the health filter.
    """
    threshold = resolve_level(level, debug)
    handler = _stdout_handler(source, threshold)

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(threshold)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers[:] = [handler]
        server_logger.setLevel(threshold)
        server_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
