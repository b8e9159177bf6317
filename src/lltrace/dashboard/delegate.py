"""
Timeline bar painting for the trace table.
"""

from PyQt6.QtCore import QModelIndex, QRectF, Qt
from PyQt6.QtGui import QColor, QPainter
from PyQt6.QtWidgets import QStyle, QStyledItemDelegate, QStyleOptionViewItem

from lltrace.tracing import BarGeometry

from .styles import COLORS, UI


def bar_rect(rect: QRectF, bar: BarGeometry) -> QRectF:
    """Span segment of the bar inside a cell rectangle."""
    padding = UI["bar_padding"]
    inner = rect.adjusted(padding, padding, -padding, -padding)
    x = inner.left() + inner.width() * bar.pre / 100.0
    width = max(1.0, inner.width() * bar.span / 100.0)
    return QRectF(x, inner.top(), width, inner.height())


class TimelineBarDelegate(QStyledItemDelegate):
    """Paints the [pre, span, post] bar of a row."""

    def __init__(self, bar_role: int, span_role: int, parent=None):
        super().__init__(parent)
        self._bar_role = bar_role
        self._span_role = span_role

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionViewItem,
        index: QModelIndex,
    ) -> None:
        bar = index.data(self._bar_role)

        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        if option.state & QStyle.StateFlag.State_Selected:
            painter.fillRect(option.rect, option.palette.highlight())
        else:
            painter.fillRect(option.rect, QColor(COLORS["bar_track"]))

        if isinstance(bar, BarGeometry) and bar.span > 0:
            span = index.data(self._span_role)
            if bar.clamped:
                color = COLORS["bar_clamped"]
            elif span is not None and span.is_open:
                color = COLORS["bar_open"]
            else:
                color = COLORS["bar_closed"]

            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QColor(color))
            radius = UI["bar_radius"]
            painter.drawRoundedRect(bar_rect(QRectF(option.rect), bar), radius, radius)

        painter.restore()
