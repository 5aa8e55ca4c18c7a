"""JSON-lines logging for the service.

Every record is rendered as one JSON object::

    {"timestamp": "...", "level": "INFO", "event": "parse_slip.start", "requestId": "..."}

The log message is the event name and anything passed via ``extra=`` is
merged into the object. DEBUG/INFO go to stdout, WARNING and above to
stderr.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_LEVEL_NAMES = {
    logging.WARNING: "WARN",
    logging.CRITICAL: "ERROR",
}

# Attributes every LogRecord has; anything else came in through ``extra=``.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime", "taskName"}

_HANDLER_MARKER = "_slip_parser_handler"


def _coerce_level(value) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return _LEVELS.get(value.upper().strip(), logging.INFO)
    return logging.INFO


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": _LEVEL_NAMES.get(record.levelno, record.levelname),
            "event": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                entry[key] = value
        if record.exc_info and "stack" not in entry:
            entry["stack"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self.max_level


def configure_logging(level: str | int = "INFO") -> None:
    """Install the JSON handlers on the root logger.

    Safe to call more than once; previously installed handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(_coerce_level(level))

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)

    formatter = JsonFormatter()

    out = logging.StreamHandler(sys.stdout)
    out.addFilter(_MaxLevelFilter(logging.INFO))
    out.setFormatter(formatter)
    setattr(out, _HANDLER_MARKER, True)

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)
    err.setFormatter(formatter)
    setattr(err, _HANDLER_MARKER, True)

    root.addHandler(out)
    root.addHandler(err)
