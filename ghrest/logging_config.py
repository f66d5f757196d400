"""Log formatting for ``ghrest``.

The executor attaches the request it is working on to each record through
``extra`` (method, url, attempt, status, delay). ``JSONFormatter`` lifts
those into top-level keys so retries can be filtered in a log aggregator;
``TextFormatter`` keeps them in the message. Both stamp the call ID bound
around every ``do()``.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import IO, Any

from ghrest.request_context import get_call_id

# Record attributes the executor sets via ``extra``.
REQUEST_FIELDS = (
    "method",
    "url",
    "status",
    "attempt",
    "max_attempts",
    "delay",
    "rate_limited",
)


def request_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the request fields present on *record*, in a stable order."""
    return {
        name: getattr(record, name)
        for name in REQUEST_FIELDS
        if hasattr(record, name)
    }


class JSONFormatter(logging.Formatter):
    """Single-line JSON log output for log aggregators."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S")
            + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        call_id = get_call_id()
        if call_id:
            entry["call_id"] = call_id

        entry.update(request_fields(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``time level [call id] logger - message`` in UTC."""

    converter = time.gmtime

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)-8s %(call_prefix)s%(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        call_id = get_call_id()
        record.call_prefix = f"[{call_id[:12]}] " if call_id else ""
        return super().format(record)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Send ``ghrest`` records to *stream* (stderr by default).

    Only the ``ghrest`` logger is touched, so an application embedding the
    client keeps its own root configuration. Unknown levels fall back to
    INFO. Calling it again replaces the previous handler.
    """
    package_logger = logging.getLogger("ghrest")
    package_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    return package_logger
