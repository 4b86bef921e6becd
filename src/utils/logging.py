"""Logging configuration.

LOG_FORMAT=json (default) emits one JSON object per line with the
record's `extra` fields inlined; LOG_FORMAT=text emits a readable line for
local runs. LOG_LEVEL sets the root level.
"""

import json
import logging
import os
from datetime import date, datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came from `extra`
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message', 'asctime'}

# Third-party loggers capped at WARNING
NOISY_LOGGERS = ('pymongo', 'uvicorn.access')


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the fields passed through `extra=` on a logging call."""
    return {
        key: value for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith('_')
    }


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **extra_fields(record),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=_json_default, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable formatter: `time LEVEL logger: message key=value ...`."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = extra_fields(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


def setup_structured_logging(level: str | None = None, fmt: str | None = None) -> logging.Handler:
    """Install a single root handler and quiet third-party loggers.

    Arguments override LOG_LEVEL / LOG_FORMAT. Returns the installed handler.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    fmt = (fmt or os.getenv("LOG_FORMAT", "json")).lower()

    handler = logging.StreamHandler()
    handler.setFormatter(TextFormatter() if fmt == "text" else JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
