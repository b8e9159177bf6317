"""
Pytest configuration and shared fixtures for lltrace tests.

This module provides:
- Environment isolation (log directory, Qt platform)
- Event factories
- The sample trace used by the end-to-end scenarios
"""

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional

# Keep log files out of the user's home and let Qt run headless
os.environ.setdefault("LLTRACE_LOG_DIR", tempfile.mkdtemp(prefix="lltrace-logs-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

import pytest  # noqa: E402

from lltrace.core.models import Phase, SpanEvent  # noqa: E402


# =============================================================================
# Sample trace
# =============================================================================

T0 = 1_600_000_000_000

# Root 0 runs T0..T0+100. Span 1 is a zero-duration child, 3 nests 4, and 4
# receives attributes across three events with overlapping keys.
SAMPLE_RECORDS: list[dict] = [
    {"id": 0, "event_type": "Start", "name": "main", "unix_ts_millis": T0},
    {
        "id": 1,
        "event_type": "Start",
        "name": "main:init",
        "parent_id": 0,
        "unix_ts_millis": T0,
    },
    {
        "id": 1,
        "event_type": "End",
        "name": "main:init",
        "parent_id": 0,
        "unix_ts_millis": T0,
    },
    {
        "id": 3,
        "event_type": "Start",
        "name": "main:work",
        "parent_id": 0,
        "unix_ts_millis": T0 + 10,
    },
    {
        "id": 4,
        "event_type": "Start",
        "name": "main:work:query",
        "parent_id": 3,
        "unix_ts_millis": T0 + 20,
        "data": {"dontprint": "4"},
    },
    {
        "id": 4,
        "event_type": "End",
        "name": "main:work:query",
        "parent_id": 3,
        "unix_ts_millis": T0 + 60,
        "data": {"hey": "1"},
    },
    {
        "id": 4,
        "event_type": "End",
        "name": "main:work:query",
        "parent_id": 3,
        "unix_ts_millis": T0 + 60,
        "data": {"hey": "1", "yo": "sup"},
    },
    {
        "id": 3,
        "event_type": "End",
        "name": "main:work",
        "parent_id": 0,
        "unix_ts_millis": T0 + 80,
    },
    {"id": 0, "event_type": "End", "name": "main", "unix_ts_millis": T0 + 100},
]


def make_event(
    span_id: int,
    phase: Phase = Phase.START,
    timestamp_ms: Optional[int] = None,
    parent_id: Optional[int] = None,
    name: str = "",
    **attributes: str,
) -> SpanEvent:
    """Build a SpanEvent with keyword attributes."""
    return SpanEvent(
        id=span_id,
        phase=phase,
        name=name,
        parent_id=parent_id,
        timestamp_ms=timestamp_ms,
        attributes=dict(attributes),
    )


@pytest.fixture
def sample_records() -> list[dict]:
    return [dict(record) for record in SAMPLE_RECORDS]


@pytest.fixture
def sample_events(sample_records) -> list[SpanEvent]:
    from lltrace.tracing import EventParser

    return [EventParser.parse_record(record) for record in sample_records]


@pytest.fixture
def sample_trace(sample_events):
    from lltrace.tracing import build_trace

    return build_trace(sample_events)


@pytest.fixture
def sample_trace_file(tmp_path, sample_records) -> Path:
    path = tmp_path / "trace.jsonl"
    path.write_text(
        "\n".join(json.dumps(record) for record in sample_records) + "\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def event_factory():
    return make_event
