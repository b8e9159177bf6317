"""
Data models for lltrace
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class Phase(Enum):
    START = "Start"
    END = "End"
    UNKNOWN = "Unknown"

    @classmethod
    def from_event_type(cls, event_type: str) -> "Phase":
        """Map a raw event_type string to a phase.

        Anything other than "Start" or "End" is UNKNOWN, which the builder
        treats as a no-op for timestamps.
        """
        if event_type == cls.START.value:
            return cls.START
        if event_type == cls.END.value:
            return cls.END
        return cls.UNKNOWN


@dataclass(frozen=True)
class SpanEvent:
    """A single lifecycle observation of a span"""

    id: int
    phase: Phase
    name: str = ""
    parent_id: Optional[int] = None
    timestamp_ms: Optional[int] = None
    attributes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        result: dict = {
            "id": self.id,
            "event_type": self.phase.value,
            "name": self.name,
        }
        if self.parent_id is not None:
            result["parent_id"] = self.parent_id
        if self.timestamp_ms is not None:
            result["unix_ts_millis"] = self.timestamp_ms
        if self.attributes:
            result["data"] = dict(self.attributes)
        return result


@dataclass(frozen=True)
class Span:
    """A finalized span as exposed by the trace index"""

    id: int
    name: str = ""
    parent_id: Optional[int] = None
    children: tuple[int, ...] = ()
    attributes: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    start_ms: Optional[int] = None
    end_ms: Optional[int] = None
    placeholder: bool = False  # Synthesized for a parent id no event targeted

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_open(self) -> bool:
        """Started but never ended"""
        return self.start_ms is not None and self.end_ms is None

    @property
    def duration_ms(self) -> Optional[int]:
        if self.start_ms is None or self.end_ms is None:
            return None
        return self.end_ms - self.start_ms

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "name": self.name,
            "children": list(self.children),
            "attributes": dict(self.attributes),
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
            "duration_ms": self.duration_ms,
        }
        if self.parent_id is not None:
            result["parent_id"] = self.parent_id
        if self.placeholder:
            result["placeholder"] = True
        return result
