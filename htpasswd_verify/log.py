from __future__ import annotations

import logging
import sys
from typing import TextIO

LogLevels = [
    "error",
    "warn",
    "info",
    "debug",
]

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


class HtpasswdFormatter(logging.Formatter):
    default_time_format = "%H:%M:%S"
    default_msec_format = "%s.%03d"

    def format(self, record: logging.LogRecord) -> str:
        time = self.formatTime(record)
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"[{time}] {message}"


class HtpasswdLogHandler(logging.StreamHandler):
    def __init__(self, stream: TextIO | None = None):
        super().__init__(stream if stream is not None else sys.stderr)
        self._previous_level = logging.NOTSET
        self.setFormatter(HtpasswdFormatter())

    def install(self) -> None:
        logger = logging.getLogger("htpasswd_verify")
        self._previous_level = logger.level
        logger.setLevel(min(self.level, logger.getEffectiveLevel()))
        logger.addHandler(self)

    def uninstall(self) -> None:
        logger = logging.getLogger("htpasswd_verify")
        logger.removeHandler(self)
        logger.setLevel(self._previous_level)


def log_level(verbosity: str) -> int:
    try:
        return _LEVELS[verbosity]
    except KeyError:
        raise ValueError(f"Unknown log level: {verbosity!r}") from None


def setup_logging(verbosity: str = "info", stream: TextIO | None = None) -> HtpasswdLogHandler:
    """
    Route htpasswd_verify's log messages to `stream` (stderr by default).
    """
    handler = HtpasswdLogHandler(stream)
    handler.setLevel(log_level(verbosity))
    handler.install()
    return handler
