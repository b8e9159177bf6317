"""
Chrome trace-event export.

Writes the JSON array format understood by chrome://tracing and Perfetto:
a "B" event when a span starts and an "E" event when it ends, one thread
lane per span.
"""

import json
from typing import Any

from ..utils.logger import get_logger
from .index import TraceIndex

logger = get_logger("chrome")

CHROME_PID = 1


def to_chrome_trace(index: TraceIndex) -> list[dict[str, Any]]:
    """Build trace events for every span that has a start timestamp.

    Timestamps are converted from milliseconds to the microseconds the
    format expects. Spans without a start are skipped.
    """
    events: list[dict[str, Any]] = []
    skipped = 0

    for tid, span_id in enumerate(index, start=1):
        span = index.get(span_id)
        if span is None or span.start_ms is None:
            skipped += 1
            continue

        event_name = f"{span.name}-{span.id}"
        args = dict(span.attributes)

        events.append(
            {
                "name": event_name,
                "ph": "B",
                "pid": CHROME_PID,
                "tid": tid,
                "ts": span.start_ms * 1000,
                "args": args,
            }
        )
        if span.end_ms is not None:
            events.append(
                {
                    "name": event_name,
                    "ph": "E",
                    "pid": CHROME_PID,
                    "tid": tid,
                    "ts": span.end_ms * 1000,
                    "args": args,
                }
            )

    if skipped:
        logger.debug(f"Chrome export skipped {skipped} spans without a start")
    return events


def dumps_chrome_trace(index: TraceIndex, indent: int = 2) -> str:
    return json.dumps(to_chrome_trace(index), indent=indent)
