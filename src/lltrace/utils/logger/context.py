"""
Logging context for lltrace.

Tracks which trace source (file path, stream name) is being processed so
every log line emitted during a load can be attributed to it.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator, Optional

trace_source_var: ContextVar[Optional[str]] = ContextVar("trace_source", default=None)


def get_trace_source() -> Optional[str]:
    return trace_source_var.get()


@contextmanager
def log_context(trace_source: Optional[str] = None) -> Generator[Optional[str], None, None]:
    """Set the trace source for the duration of the block.

    The previous value is restored on exit, so contexts nest.

    Example:
        with log_context(trace_source="run.jsonl"):
            index = load_trace("run.jsonl")
    """
    token = trace_source_var.set(trace_source)
    try:
        yield trace_source
    finally:
        trace_source_var.reset(token)


class ContextFilter(logging.Filter):
    """Adds the current trace_source to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_source = trace_source_var.get()
        return True
