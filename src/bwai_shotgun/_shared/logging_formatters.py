# Area: Shared
"""
bwai_shotgun._shared.logging_formatters — Logging formatters
============================================================

Contains the terminal and file formatter classes.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Format a copy so the file handler still sees the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class JSONFormatter(logging.Formatter):
    """JSON formatter for file output."""

    # Context keys passed through ``extra=`` that end up in the file log
    CONTEXT_KEYS = ("bot", "stage", "path", "pid", "error_type")

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in self.CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = str(value)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)
