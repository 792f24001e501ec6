"""Custom logging handlers for html5video.

Provides JSONFormatter for structured log output.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Extras attached by run_command() to every external tool invocation
PROCESS_FIELDS: frozenset[str] = frozenset(
    {
        "command",
        "arg_count",
        "returncode",
        "elapsed_seconds",
        "timeout_seconds",
    }
)


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Each entry carries timestamp (ISO-8601 UTC), level and message. Extras
    describing an ffmpeg or qt-faststart run are grouped under "process";
    any other extras go under "context".
    """

    _STANDARD_ATTRS: frozenset[str] = frozenset(
        vars(logging.LogRecord("", 0, "", 0, "", (), None))
    ) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if record.name and record.name != "root":
            log_entry["logger"] = record.name

        process: dict[str, Any] = {}
        context: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in self._STANDARD_ATTRS or key.startswith("_"):
                continue
            if key in PROCESS_FIELDS:
                process[key] = value
            else:
                context[key] = value
        if process:
            log_entry["process"] = process
        if context:
            log_entry["context"] = context

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)
