"""
PyQt6 trace viewer.

- TraceOutlineModel: table model over the visible outline rows
- TimelineBarDelegate: paints the timeline bar column
- TraceViewerWindow: main window
"""

from .delegate import TimelineBarDelegate
from .model import TraceOutlineModel
from .window import TraceViewerWindow

__all__ = [
    "TraceOutlineModel",
    "TimelineBarDelegate",
    "TraceViewerWindow",
]
