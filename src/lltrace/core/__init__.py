"""Core data types and errors."""

from .errors import MalformedEventError, TraceError, TraceFinalizedError
from .models import Phase, Span, SpanEvent

__all__ = [
    "Phase",
    "Span",
    "SpanEvent",
    "TraceError",
    "MalformedEventError",
    "TraceFinalizedError",
]
