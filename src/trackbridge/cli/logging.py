"""
Logging setup for the command line front end.

Text logs go to stderr in a compact human format. JSON logs emit one object
per line so they can be shipped to a log collector unchanged.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any


TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
TEXT_DATE_FORMAT = "%H:%M:%S"

# Attributes every LogRecord has; anything else was passed via `extra`
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def __init__(self, static_fields: dict[str, Any] | None = None):
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(self.static_fields)
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = str(record.exc_info[1])
        return json.dumps(entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_format: str = "text",
    log_file: str | Path | None = None,
    static_fields: dict[str, Any] | None = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Minimum level to emit
        log_format: 'text' or 'json'
        log_file: Also write logs to this file
        static_fields: Fields added to every JSON record
    """
    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter(static_fields)
    elif log_format == "text":
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)
    else:
        raise ValueError(f"Unknown log format: {log_format}")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    # requests/urllib3 are noisy at debug level
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))
