"""
Log formatters for lltrace.

Human-readable lines for the main log file and console, JSON Lines for
machine consumption.
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any


class HumanFormatter(logging.Formatter):
    """Human-readable log formatter.

    Format: YYYY-MM-DD HH:MM:SS.mmm | LEVEL | component | file:line | message

    Example:
        2026-10-16 14:23:45.123 | WARNING | lltrace.builder | builder.py:88 | Parent 7 never observed [source=run.jsonl]
    """

    LEVEL_WIDTH = 7

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        time_str = timestamp.strftime("%Y-%m-%d %H:%M:%S.") + f"{int(record.msecs):03d}"

        level = record.levelname.ljust(self.LEVEL_WIDTH)
        location = f"{record.filename}:{record.lineno}"
        message = record.getMessage()

        trace_source = getattr(record, "trace_source", None)
        if trace_source:
            message = f"{message} [source={trace_source}]"

        formatted = f"{time_str} | {level} | {record.name} | {location} | {message}"

        if record.exc_info:
            formatted = f"{formatted}\n{self.formatException(record.exc_info)}"

        return formatted


class JsonFormatter(logging.Formatter):
    """JSON Lines log formatter.

    Output fields: timestamp, level, logger, message, file, line, function,
    trace_source (if set), exception (if present).
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        trace_source = getattr(record, "trace_source", None)
        if trace_source:
            log_data["trace_source"] = trace_source

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            log_data["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": [
                    line
                    for chunk in traceback.format_exception(exc_type, exc_value, exc_tb)
                    for line in chunk.splitlines()
                    if line.strip()
                ],
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)
