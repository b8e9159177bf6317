"""
JSON parsers for span lifecycle events.

Each record is validated and turned into a SpanEvent. Unlike a lenient
importer, anything structurally wrong raises MalformedEventError so a
corrupt record never becomes a corrupt span.

Record shape (one JSON object per line):
    {"id": 4, "event_type": "Start", "name": "app:db:query",
     "parent_id": 3, "unix_ts_millis": 1600000000000, "data": {"k": "v"}}
"""

import json
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Union

from ..core.errors import MalformedEventError
from ..core.models import Phase, SpanEvent
from ..utils.logger import get_logger

logger = get_logger("parser")


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid id or timestamp
    return isinstance(value, int) and not isinstance(value, bool)


class EventParser:
    """Turns raw records and JSON lines into SpanEvents."""

    @staticmethod
    def parse_record(data: Any, line_number: Optional[int] = None) -> SpanEvent:
        """Validate a decoded record.

        Args:
            data: Decoded JSON value, expected to be an object
            line_number: Source line, used in error messages

        Returns:
            SpanEvent

        Raises:
            MalformedEventError: if a required field is missing or a field
                has the wrong type
        """
        if not isinstance(data, dict):
            raise MalformedEventError(
                f"expected a JSON object, got {type(data).__name__}", line_number
            )

        span_id = data.get("id")
        if span_id is None:
            raise MalformedEventError("missing required field 'id'", line_number)
        if not _is_int(span_id) or span_id < 0:
            raise MalformedEventError(
                f"'id' must be a non-negative integer, got {span_id!r}", line_number
            )

        event_type = data.get("event_type")
        if event_type is None:
            raise MalformedEventError(
                "missing required field 'event_type'", line_number
            )
        if not isinstance(event_type, str):
            raise MalformedEventError(
                f"'event_type' must be a string, got {event_type!r}", line_number
            )

        parent_id = data.get("parent_id")
        if parent_id is not None:
            if not _is_int(parent_id) or parent_id < 0:
                raise MalformedEventError(
                    f"'parent_id' must be a non-negative integer, got {parent_id!r}",
                    line_number,
                )
            if parent_id == span_id:
                raise MalformedEventError(
                    f"span {span_id} names itself as parent", line_number
                )

        timestamp = data.get("unix_ts_millis")
        if timestamp is not None and not _is_int(timestamp):
            raise MalformedEventError(
                f"'unix_ts_millis' must be an integer, got {timestamp!r}", line_number
            )

        name = data.get("name")
        if name is None:
            name = ""
        elif not isinstance(name, str):
            raise MalformedEventError(
                f"'name' must be a string, got {name!r}", line_number
            )

        attributes = EventParser.parse_attributes(data.get("data"), line_number)

        phase = Phase.from_event_type(event_type)
        if phase is Phase.UNKNOWN:
            logger.debug(f"Unknown event_type {event_type!r} for span {span_id}")

        return SpanEvent(
            id=span_id,
            phase=phase,
            name=name,
            parent_id=parent_id,
            timestamp_ms=timestamp,
            attributes=attributes,
        )

    @staticmethod
    def parse_attributes(
        data: Any, line_number: Optional[int] = None
    ) -> dict[str, str]:
        """Validate the optional 'data' mapping (string keys and values)."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise MalformedEventError(
                f"'data' must be an object, got {type(data).__name__}", line_number
            )

        for key, value in data.items():
            if not isinstance(key, str):
                raise MalformedEventError(
                    f"'data' key {key!r} must be a string", line_number
                )
            if not isinstance(value, str):
                raise MalformedEventError(
                    f"'data' value for {key!r} must be a string, got {value!r}",
                    line_number,
                )
        return dict(data)

    @staticmethod
    def parse_line(line: str, line_number: Optional[int] = None) -> SpanEvent:
        """Decode one JSON line and validate it."""
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise MalformedEventError(f"invalid JSON: {e.msg}", line_number) from e
        return EventParser.parse_record(data, line_number)


def read_events(lines: Iterable[str]) -> Iterator[SpanEvent]:
    """Yield events from JSON lines, in delivery order.

    Blank lines are skipped. Line numbers in errors are 1-based.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        yield EventParser.parse_line(line, line_number)


def load_events(path: Union[str, Path]) -> list[SpanEvent]:
    """Read every event from a JSON-lines trace file."""
    with open(path, "r", encoding="utf-8") as f:
        events = list(read_events(f))
    logger.debug(f"Read {len(events)} events from {path}")
    return events
