"""
Timeline geometry for spans.

Places a span inside the global trace window and turns that placement into
the three segments of a row bar: empty space before, the span itself, and
empty space after, as percentages of row width.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.models import Span
from .index import TraceIndex

# Bars below this width (percent) would round away to nothing
VISIBILITY_THRESHOLD_PCT = 0.1
# Width given to such bars instead
MIN_VISIBLE_SPAN_PCT = 2.0


@dataclass(frozen=True)
class SpanExtent:
    """Span position as fractions of the trace window (0.0 to 1.0)."""

    left: float
    right: float

    @property
    def width(self) -> float:
        return max(0.0, self.right - self.left)


@dataclass(frozen=True)
class BarGeometry:
    """Row bar segments in percent of row width; they add up to 100."""

    pre: float
    span: float
    post: float
    clamped: bool = False  # span was widened to stay visible


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def span_extent(index: TraceIndex, span: Span) -> Optional[SpanExtent]:
    """Normalize a span's time range against the trace window.

    A span with no start is drawn from the window start, one with no end
    runs to the window end.

    Returns:
        SpanExtent, or None when the trace has no usable window (no start
        or no end timestamp anywhere).
    """
    earliest = index.earliest_start
    latest = index.latest_end
    if earliest is None or latest is None:
        return None

    total = latest - earliest
    if total <= 0:
        return SpanExtent(0.0, 0.0)

    start = span.start_ms if span.start_ms is not None else earliest
    end = span.end_ms if span.end_ms is not None else latest

    left = _clamp((start - earliest) / total)
    right = _clamp((end - earliest) / total)
    return SpanExtent(left, max(left, right))


def compute_bar(
    extent: Optional[SpanExtent],
    threshold_pct: float = VISIBILITY_THRESHOLD_PCT,
    min_span_pct: float = MIN_VISIBLE_SPAN_PCT,
) -> BarGeometry:
    """Convert an extent into pre/span/post percentages.

    Spans narrower than threshold_pct are widened to min_span_pct; the
    leading gap shrinks if needed so the bar stays inside the row. An
    empty timeline (extent None) has no bar at all.
    """
    if extent is None:
        return BarGeometry(pre=0.0, span=0.0, post=100.0)

    pre = extent.left * 100.0
    span = extent.width * 100.0
    clamped = False

    if span < threshold_pct:
        span = min_span_pct
        clamped = True
        if pre + span > 100.0:
            pre = max(0.0, 100.0 - span)

    post = max(0.0, 100.0 - pre - span)
    return BarGeometry(pre=pre, span=span, post=post, clamped=clamped)


def span_bar(
    index: TraceIndex,
    span: Span,
    threshold_pct: float = VISIBILITY_THRESHOLD_PCT,
    min_span_pct: float = MIN_VISIBLE_SPAN_PCT,
) -> BarGeometry:
    return compute_bar(span_extent(index, span), threshold_pct, min_span_pct)
