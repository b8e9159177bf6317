"""
Tests for timeline extents and bar geometry.
"""

import pytest

from lltrace.core.models import Phase
from lltrace.tracing import (
    BarGeometry,
    SpanExtent,
    TraceIndex,
    build_trace,
    compute_bar,
    span_bar,
    span_extent,
)
from conftest import T0, make_event


class TestSpanExtent:
    """Tests for span_extent"""

    def test_root_spans_whole_window(self, sample_trace):
        extent = span_extent(sample_trace, sample_trace.get(0))
        assert extent == SpanExtent(0.0, 1.0)

    def test_nested_span_fractions(self, sample_trace):
        extent = span_extent(sample_trace, sample_trace.get(4))
        assert extent.left == pytest.approx(0.2)
        assert extent.right == pytest.approx(0.6)
        assert extent.width == pytest.approx(0.4)

    def test_missing_end_runs_to_latest_end(self):
        trace = build_trace(
            [
                make_event(0, Phase.START, T0),
                make_event(0, Phase.END, T0 + 100),
                make_event(1, Phase.START, T0 + 50, parent_id=0),
            ]
        )
        extent = span_extent(trace, trace.get(1))
        assert extent.left == pytest.approx(0.5)
        assert extent.right == pytest.approx(1.0)

    def test_missing_start_begins_at_earliest_start(self):
        trace = build_trace(
            [
                make_event(0, Phase.START, T0),
                make_event(0, Phase.END, T0 + 100),
                make_event(1, Phase.END, T0 + 25, parent_id=0),
            ]
        )
        extent = span_extent(trace, trace.get(1))
        assert extent.left == pytest.approx(0.0)
        assert extent.right == pytest.approx(0.25)

    def test_empty_timeline_is_none(self):
        trace = build_trace([make_event(1, Phase.START, None)])
        assert span_extent(trace, trace.get(1)) is None

    def test_no_end_anywhere_is_none(self):
        trace = build_trace([make_event(1, Phase.START, T0)])
        assert span_extent(trace, trace.get(1)) is None

    def test_zero_length_window(self):
        trace = build_trace(
            [make_event(1, Phase.START, T0), make_event(1, Phase.END, T0)]
        )
        assert span_extent(trace, trace.get(1)) == SpanExtent(0.0, 0.0)

    def test_extent_clamped_to_window(self):
        # Open span starting after the last recorded end
        trace = build_trace(
            [
                make_event(0, Phase.START, T0),
                make_event(0, Phase.END, T0 + 10),
                make_event(1, Phase.START, T0 + 20),
            ]
        )
        extent = span_extent(trace, trace.get(1))
        assert extent.left == 1.0
        assert extent.right == 1.0

    def test_placeholder_covers_window(self):
        trace = build_trace(
            [
                make_event(1, Phase.START, T0, parent_id=9),
                make_event(1, Phase.END, T0 + 10, parent_id=9),
            ]
        )
        assert span_extent(trace, trace.get(9)) == SpanExtent(0.0, 1.0)


class TestComputeBar:
    """Tests for compute_bar"""

    def test_segments_add_to_hundred(self):
        bar = compute_bar(SpanExtent(0.2, 0.6))
        assert bar.pre == pytest.approx(20.0)
        assert bar.span == pytest.approx(40.0)
        assert bar.post == pytest.approx(40.0)
        assert not bar.clamped

    def test_zero_width_clamped_to_minimum(self):
        bar = compute_bar(SpanExtent(0.5, 0.5))
        assert bar.span == 2.0
        assert bar.clamped
        assert bar.pre + bar.span + bar.post == pytest.approx(100.0)

    def test_clamped_bar_at_right_edge_stays_inside(self):
        bar = compute_bar(SpanExtent(1.0, 1.0))
        assert bar.span == 2.0
        assert bar.pre == pytest.approx(98.0)
        assert bar.post == 0.0

    def test_narrow_but_visible_is_not_clamped(self):
        bar = compute_bar(SpanExtent(0.0, 0.002))
        assert bar.span == pytest.approx(0.2)
        assert not bar.clamped

    def test_custom_floor(self):
        bar = compute_bar(SpanExtent(0.1, 0.1), threshold_pct=1.0, min_span_pct=5.0)
        assert bar.span == 5.0

    def test_empty_timeline_has_no_bar(self):
        assert compute_bar(None) == BarGeometry(pre=0.0, span=0.0, post=100.0)


class TestSpanBar:
    """span_bar on the sample trace"""

    def test_zero_duration_child_is_visible(self, sample_trace):
        bar = span_bar(sample_trace, sample_trace.get(1))
        assert bar.clamped
        assert bar.pre == 0.0
        assert bar.span == 2.0
        assert bar.post == pytest.approx(98.0)

    def test_root_bar_is_full_width(self, sample_trace):
        bar = span_bar(sample_trace, sample_trace.get(0))
        assert bar == BarGeometry(pre=0.0, span=100.0, post=0.0)

    def test_empty_trace(self):
        trace = TraceIndex.empty()
        assert trace.get(0) is None
        assert trace.roots == ()
