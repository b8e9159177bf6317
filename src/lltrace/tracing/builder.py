"""
Trace builder.

Folds span lifecycle events into one record per span id, then finalizes
them into an immutable TraceIndex.

Features:
- Per-id attribute merge (last write wins per key)
- Start/End timestamp recording with no phase fallthrough
- Parent links kept separately as the source of truth for tree shape
- One-shot finalize
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from ..core.errors import MalformedEventError, TraceFinalizedError
from ..core.models import Phase, SpanEvent
from ..utils.logger import get_logger, log_context
from .index import TraceIndex
from .parser import EventParser, read_events

logger = get_logger("builder")


@dataclass
class SpanRecord:
    """Mutable per-span state owned by the builder until finalize."""

    id: int
    name: str = ""
    parent_id: Optional[int] = None
    attributes: dict[str, str] = field(default_factory=dict)
    start_ms: Optional[int] = None
    end_ms: Optional[int] = None


class TraceBuilder:
    """Builds a span table from lifecycle events.

    Events may arrive in any order across spans. For a single span, a
    repeated Start or End overwrites the earlier timestamp.
    """

    def __init__(self, events: Optional[Iterable[SpanEvent]] = None):
        """Initialize the builder.

        Args:
            events: Optional events to ingest immediately
        """
        self._spans: dict[int, SpanRecord] = {}
        self._parent_links: dict[int, int] = {}  # child id -> parent id
        self._event_count = 0
        self._finalized = False

        if events is not None:
            self.add_events(events)

    @property
    def event_count(self) -> int:
        return self._event_count

    @property
    def span_count(self) -> int:
        return len(self._spans)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def _ensure_open(self) -> None:
        if self._finalized:
            raise TraceFinalizedError("trace builder has already been finalized")

    def add_event(self, event: SpanEvent) -> None:
        """Merge one event into the span table.

        Raises:
            MalformedEventError: if event is not a SpanEvent
            TraceFinalizedError: if finalize() already ran
        """
        self._ensure_open()
        if not isinstance(event, SpanEvent):
            raise MalformedEventError(
                f"expected SpanEvent, got {type(event).__name__}"
            )

        record = self._spans.get(event.id)
        if record is None:
            record = SpanRecord(id=event.id, parent_id=event.parent_id)
            self._spans[event.id] = record

        if event.name:
            record.name = event.name

        record.attributes.update(event.attributes)

        if event.parent_id is not None:
            previous = self._parent_links.get(event.id)
            if previous is not None and previous != event.parent_id:
                logger.debug(
                    f"Span {event.id} re-parented from {previous} to {event.parent_id}"
                )
            self._parent_links[event.id] = event.parent_id
            record.parent_id = event.parent_id

        # A missing timestamp never erases one recorded earlier
        if event.timestamp_ms is not None:
            if event.phase is Phase.START:
                record.start_ms = event.timestamp_ms
            elif event.phase is Phase.END:
                record.end_ms = event.timestamp_ms
        if event.phase is Phase.UNKNOWN:
            logger.debug(f"Ignoring timestamp of unknown-phase event for span {event.id}")

        self._event_count += 1

    def add_events(self, events: Iterable[SpanEvent]) -> None:
        for event in events:
            self.add_event(event)

    def add_record(self, data: Any) -> None:
        """Parse a decoded JSON record and add it."""
        self.add_event(EventParser.parse_record(data))

    def finalize(self) -> TraceIndex:
        """Produce the immutable index. May only be called once.

        Raises:
            TraceFinalizedError: on a second call
        """
        self._ensure_open()
        self._finalized = True

        if not self._spans:
            logger.debug("Finalizing empty trace")

        index = TraceIndex.from_records(self._spans.values(), self._parent_links)
        logger.info(
            f"Finalized trace: {self._event_count} events, {len(index)} spans, "
            f"{len(index.roots)} roots"
        )
        return index


def build_trace(events: Iterable[SpanEvent]) -> TraceIndex:
    """Build and finalize a trace in one call."""
    return TraceBuilder(events).finalize()


def load_trace(path: Union[str, Path]) -> TraceIndex:
    """Read a JSON-lines trace file and finalize it.

    Raises:
        MalformedEventError: on the first invalid line
        OSError: if the file cannot be read
    """
    with log_context(trace_source=str(path)):
        with open(path, "r", encoding="utf-8") as f:
            return build_trace(read_events(f))
