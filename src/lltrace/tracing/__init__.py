"""
Trace reconstruction package.

Public API:
- EventParser, read_events, load_events: record validation and JSON-lines reading
- TraceBuilder, build_trace, load_trace: event folding and finalize
- TraceIndex: immutable span tree with time bounds
- span_extent, compute_bar, span_bar: timeline geometry
- OutlineState, OutlineRow, row_label: expand/collapse rows
- to_chrome_trace, dumps_chrome_trace: Chrome trace-event export
"""

from .builder import SpanRecord, TraceBuilder, build_trace, load_trace
from .chrome import dumps_chrome_trace, to_chrome_trace
from .index import TraceIndex
from .outline import OutlineRow, OutlineState, row_label
from .parser import EventParser, load_events, read_events
from .timeline import BarGeometry, SpanExtent, compute_bar, span_bar, span_extent

__all__ = [
    "EventParser",
    "read_events",
    "load_events",
    "SpanRecord",
    "TraceBuilder",
    "build_trace",
    "load_trace",
    "TraceIndex",
    "SpanExtent",
    "BarGeometry",
    "span_extent",
    "compute_bar",
    "span_bar",
    "OutlineRow",
    "OutlineState",
    "row_label",
    "to_chrome_trace",
    "dumps_chrome_trace",
]
