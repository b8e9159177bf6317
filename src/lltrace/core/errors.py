"""
Error types raised while reconstructing a trace.
"""

from typing import Optional


class TraceError(Exception):
    """Base class for trace reconstruction errors."""


class MalformedEventError(TraceError, ValueError):
    """An event record could not be turned into a SpanEvent.

    Attributes:
        reason: Human readable cause
        line_number: 1-based line in the source stream, if known
    """

    def __init__(self, reason: str, line_number: Optional[int] = None):
        self.reason = reason
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {reason}"
        else:
            message = reason
        super().__init__(message)


class TraceFinalizedError(TraceError, RuntimeError):
    """A builder was used after finalize() already ran."""
