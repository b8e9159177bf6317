from typing import Any, Optional

from PyQt6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PyQt6.QtGui import QColor

from lltrace.core.models import Span
from lltrace.tracing import OutlineRow, OutlineState, TraceIndex, span_bar
from lltrace.utils.settings import Settings, get_settings

from .styles import COLORS, format_duration_ms


class TraceOutlineModel(QAbstractTableModel):
    COLUMN_NAME = 0
    COLUMN_DURATION = 1
    COLUMN_TIMELINE = 2

    SPAN_ROLE = Qt.ItemDataRole.UserRole
    BAR_ROLE = Qt.ItemDataRole.UserRole + 1

    def __init__(
        self,
        trace: Optional[TraceIndex] = None,
        settings: Optional[Settings] = None,
        parent=None,
    ):
        super().__init__(parent)
        self._settings = settings or get_settings()
        self._headers = ["Name", "Duration", "Timeline"]
        self._trace = TraceIndex.empty()
        self._state = OutlineState()
        self._rows: list[OutlineRow] = []
        if trace is not None:
            self.set_trace(trace)

    @property
    def trace(self) -> TraceIndex:
        return self._trace

    @property
    def state(self) -> OutlineState:
        return self._state

    def set_trace(self, trace: TraceIndex) -> None:
        self.beginResetModel()
        self._trace = trace
        self._state = OutlineState()
        if self._settings.expand_all_on_open:
            self._state.expand_all(trace)
        self._rows = self._compute_rows()
        self.endResetModel()

    def _compute_rows(self) -> list[OutlineRow]:
        return self._state.visible_rows(self._trace, self._settings.name_separator)

    def _refresh_rows(self) -> None:
        self.beginResetModel()
        self._rows = self._compute_rows()
        self.endResetModel()

    def toggle_row(self, row: int) -> bool:
        """Expand or collapse the span shown at row.

        Returns:
            True if the visible rows changed
        """
        outline_row = self.outline_row(row)
        if outline_row is None or not outline_row.has_children:
            return False
        self._state.toggle(outline_row.span_id)
        self._refresh_rows()
        return True

    def expand_all(self) -> None:
        self._state.expand_all(self._trace)
        self._refresh_rows()

    def collapse_all(self) -> None:
        self._state.collapse_all()
        self._refresh_rows()

    def outline_row(self, row: int) -> Optional[OutlineRow]:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def row_for_span(self, span_id: int) -> Optional[int]:
        for row, outline_row in enumerate(self._rows):
            if outline_row.span_id == span_id:
                return row
        return None

    # =========================================================================
    # Display helpers
    # =========================================================================

    def _display_text(self, row: OutlineRow, span: Span, column: int) -> str:
        if column == self.COLUMN_NAME:
            if row.has_children:
                marker = "▼" if row.expanded else "►"
            else:
                marker = " "
            return f"{'• ' * row.depth}{marker} {row.label}"
        if column == self.COLUMN_DURATION:
            if span.placeholder:
                return "?"
            duration = span.duration_ms
            if duration is not None:
                return format_duration_ms(duration)
            if span.is_open:
                return "open"
            return ""
        return ""

    def _tooltip(self, span: Span) -> str:
        lines = [span.name or f"#{span.id}"]
        if span.placeholder:
            lines.append("(never observed)")
        for key, value in span.attributes.items():
            lines.append(f"{key}: {value}")
        return "\n".join(lines)

    def _foreground(self, span: Span) -> QColor:
        if span.placeholder:
            return QColor(COLORS["text_muted"])
        if span.is_open:
            return QColor(COLORS["warning"])
        return QColor(COLORS["text_primary"])

    # =========================================================================
    # QAbstractItemModel Interface
    # =========================================================================

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return None

        row = self.outline_row(index.row())
        if row is None:
            return None
        span = self._trace.get(row.span_id)
        if span is None:
            return None

        column = index.column()
        if role == Qt.ItemDataRole.DisplayRole:
            return self._display_text(row, span, column)
        if role == self.SPAN_ROLE:
            return span
        if role == self.BAR_ROLE and column == self.COLUMN_TIMELINE:
            return span_bar(
                self._trace,
                span,
                self._settings.visibility_threshold_pct,
                self._settings.min_visible_span_pct,
            )
        if role == Qt.ItemDataRole.ToolTipRole:
            return self._tooltip(span)
        if role == Qt.ItemDataRole.ForegroundRole:
            return self._foreground(span)
        return None

    def headerData(
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> Any:
        if (
            orientation == Qt.Orientation.Horizontal
            and role == Qt.ItemDataRole.DisplayRole
        ):
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable
