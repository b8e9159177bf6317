"""
Expandable outline over a finalized trace.

The only interactive state is the set of expanded span ids. The visible
row list is recomputed from the immutable index whenever it is needed.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.models import Span
from .index import TraceIndex


@dataclass(frozen=True)
class OutlineRow:
    span_id: int
    depth: int
    label: str
    expanded: bool
    has_children: bool


def row_label(span: Span, separator: str = ":") -> str:
    """Last non-empty path segment of the span name, or '#<id>'."""
    for segment in reversed(span.name.split(separator)):
        if segment:
            return segment
    return f"#{span.id}"


class OutlineState:
    """Tracks which spans are expanded."""

    def __init__(self, expanded: Optional[Iterable[int]] = None):
        self._expanded: set[int] = set(expanded or ())

    @property
    def expanded_ids(self) -> frozenset[int]:
        return frozenset(self._expanded)

    def is_expanded(self, span_id: int) -> bool:
        return span_id in self._expanded

    def expand(self, span_id: int) -> None:
        self._expanded.add(span_id)

    def collapse(self, span_id: int) -> None:
        self._expanded.discard(span_id)

    def toggle(self, span_id: int) -> bool:
        """Flip a span's expansion. Returns the new state."""
        if span_id in self._expanded:
            self._expanded.discard(span_id)
            return False
        self._expanded.add(span_id)
        return True

    def expand_all(self, index: TraceIndex) -> None:
        self._expanded.update(span.id for span in index.spans() if span.children)

    def collapse_all(self) -> None:
        self._expanded.clear()

    def visible_rows(self, index: TraceIndex, separator: str = ":") -> list[OutlineRow]:
        """Rows currently visible: entry spans, plus children of expanded spans.

        Entry spans are the roots followed by one span per parent-link
        cycle. Ordering is depth-first, siblings in index order (first
        child first). Expanded ids that are not in the index are ignored.
        """
        rows: list[OutlineRow] = []
        seen: set[int] = set()
        stack = [(entry_id, 0) for entry_id in reversed(index.entry_ids)]

        while stack:
            span_id, depth = stack.pop()
            span = index.get(span_id)
            if span is None or span_id in seen:
                continue
            seen.add(span_id)

            expanded = span_id in self._expanded
            rows.append(
                OutlineRow(
                    span_id=span_id,
                    depth=depth,
                    label=row_label(span, separator),
                    expanded=expanded,
                    has_children=bool(span.children),
                )
            )

            if expanded:
                for child_id in reversed(span.children):
                    stack.append((child_id, depth + 1))

        return rows
