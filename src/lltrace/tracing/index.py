"""
Read-only index over a finalized trace.

Derives child lists, roots and the global time bounds from the builder's
span records and parent links. Derivation runs once, at construction.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Iterator, Mapping, Optional

from ..core.models import Span
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from .builder import SpanRecord

logger = get_logger("index")


def _reachable(spans: Mapping[int, Span], start_ids: Iterable[int]) -> set[int]:
    """Ids reachable from start_ids through child links."""
    seen: set[int] = set()
    stack = list(start_ids)
    while stack:
        span_id = stack.pop()
        if span_id in seen or span_id not in spans:
            continue
        seen.add(span_id)
        stack.extend(spans[span_id].children)
    return seen


class TraceIndex:
    """Immutable, queryable span tree.

    Attributes:
        roots: Ids of parentless spans, in creation order
        earliest_start: Minimum start_ms over all spans, or None
        latest_end: Maximum end_ms over all spans, or None
        dangling_parent_ids: Parent ids that no event targeted
        cyclic_ids: Spans unreachable from any root because their
            ancestor chain loops, in creation order
    """

    def __init__(
        self,
        spans: Mapping[int, Span],
        roots: tuple[int, ...],
        earliest_start: Optional[int],
        latest_end: Optional[int],
        dangling_parent_ids: tuple[int, ...] = (),
        cyclic_ids: tuple[int, ...] = (),
    ):
        self._spans = MappingProxyType(dict(spans))
        self._roots = tuple(roots)
        self._earliest_start = earliest_start
        self._latest_end = latest_end
        self._dangling_parent_ids = tuple(dangling_parent_ids)
        self._cyclic_ids = tuple(cyclic_ids)
        self._entry_ids = self._roots + self._cycle_entries()

    def _cycle_entries(self) -> tuple[int, ...]:
        # One entry per detached component: its first span in creation order
        seen = _reachable(self._spans, self._roots)
        entries: list[int] = []
        for span_id in self._cyclic_ids:
            if span_id not in seen:
                entries.append(span_id)
                seen |= _reachable(self._spans, [span_id])
        return tuple(entries)

    @classmethod
    def empty(cls) -> "TraceIndex":
        return cls({}, (), None, None)

    @classmethod
    def from_records(
        cls,
        records: Iterable["SpanRecord"],
        parent_links: Mapping[int, int],
    ) -> "TraceIndex":
        """Derive the index from builder state.

        Parent ids never seen as an event target get a placeholder span so
        every child stays reachable from a root.

        Args:
            records: Span records in creation order
            parent_links: child id -> parent id
        """
        records = list(records)
        known_ids = {record.id for record in records}

        dangling: list[int] = []
        for child_id, parent_id in parent_links.items():
            if parent_id not in known_ids and parent_id not in dangling:
                logger.warning(
                    f"Parent span {parent_id} (of {child_id}) was never observed; "
                    "adding placeholder"
                )
                dangling.append(parent_id)

        children: dict[int, list[int]] = {}
        for child_id, parent_id in parent_links.items():
            children.setdefault(parent_id, []).append(child_id)

        spans: dict[int, Span] = {}
        roots: list[int] = []
        for record in records:
            parent_id = parent_links.get(record.id, record.parent_id)
            spans[record.id] = Span(
                id=record.id,
                name=record.name,
                parent_id=parent_id,
                children=tuple(children.get(record.id, ())),
                attributes=MappingProxyType(dict(record.attributes)),
                start_ms=record.start_ms,
                end_ms=record.end_ms,
            )
            if parent_id is None:
                roots.append(record.id)

        for parent_id in dangling:
            spans[parent_id] = Span(
                id=parent_id,
                children=tuple(children.get(parent_id, ())),
                placeholder=True,
            )
            roots.append(parent_id)

        reached = _reachable(spans, roots)
        cyclic = [span_id for span_id in spans if span_id not in reached]
        if cyclic:
            logger.warning(
                f"Spans {cyclic} have cyclic parent links and no root; "
                "showing them after the roots"
            )

        starts = [s.start_ms for s in spans.values() if s.start_ms is not None]
        ends = [s.end_ms for s in spans.values() if s.end_ms is not None]

        return cls(
            spans=spans,
            roots=tuple(roots),
            earliest_start=min(starts) if starts else None,
            latest_end=max(ends) if ends else None,
            dangling_parent_ids=tuple(dangling),
            cyclic_ids=tuple(cyclic),
        )

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def roots(self) -> tuple[int, ...]:
        return self._roots

    @property
    def earliest_start(self) -> Optional[int]:
        return self._earliest_start

    @property
    def latest_end(self) -> Optional[int]:
        return self._latest_end

    @property
    def dangling_parent_ids(self) -> tuple[int, ...]:
        return self._dangling_parent_ids

    @property
    def cyclic_ids(self) -> tuple[int, ...]:
        return self._cyclic_ids

    @property
    def entry_ids(self) -> tuple[int, ...]:
        """Where traversal starts: the roots, then one span per cycle."""
        return self._entry_ids

    @property
    def window_ms(self) -> Optional[int]:
        """Length of the trace window, or None for an empty timeline."""
        if self._earliest_start is None or self._latest_end is None:
            return None
        return self._latest_end - self._earliest_start

    @property
    def is_empty(self) -> bool:
        return not self._spans

    def get(self, span_id: int) -> Optional[Span]:
        """Look up a span; unknown ids return None."""
        return self._spans.get(span_id)

    def children_of(self, span_id: int) -> tuple[int, ...]:
        span = self._spans.get(span_id)
        return span.children if span else ()

    def spans(self) -> list[Span]:
        return list(self._spans.values())

    def walk(self) -> Iterator[tuple[Span, int]]:
        """Yield (span, depth) depth-first from each entry id in order.

        A span reachable twice (cyclic parent links) is yielded once.
        """
        seen: set[int] = set()
        stack = [(entry_id, 0) for entry_id in reversed(self._entry_ids)]
        while stack:
            span_id, depth = stack.pop()
            if span_id in seen:
                continue
            seen.add(span_id)
            span = self._spans.get(span_id)
            if span is None:
                continue
            yield span, depth
            for child_id in reversed(span.children):
                stack.append((child_id, depth + 1))

    def __contains__(self, span_id: object) -> bool:
        return span_id in self._spans

    def __len__(self) -> int:
        return len(self._spans)

    def __iter__(self) -> Iterator[int]:
        return iter(self._spans)

    def __repr__(self) -> str:
        return (
            f"TraceIndex(spans={len(self._spans)}, roots={list(self._roots)}, "
            f"earliest_start={self._earliest_start}, latest_end={self._latest_end})"
        )
