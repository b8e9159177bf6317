"""
Trace viewer main window.

One table: Name (indented outline), Duration, Timeline bar. Clicking a
row expands or collapses it; the model recomputes the visible rows from
the finalized trace.
"""

from typing import Optional

from PyQt6.QtCore import QModelIndex
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QHeaderView,
    QMainWindow,
    QTableView,
    QToolBar,
    QWidget,
)

from lltrace.tracing import TraceIndex
from lltrace.utils.logger import get_logger
from lltrace.utils.settings import Settings, get_settings

from .delegate import TimelineBarDelegate
from .model import TraceOutlineModel
from .styles import UI, format_duration_ms, get_stylesheet

logger = get_logger("dashboard")


class TraceViewerWindow(QMainWindow):
    """Main window showing one finalized trace."""

    def __init__(
        self,
        trace: TraceIndex,
        title: str = "lltrace",
        settings: Optional[Settings] = None,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)

        self._settings = settings or get_settings()
        self._model = TraceOutlineModel(trace, self._settings, self)

        self._setup_window(title)
        self._setup_ui()
        self._update_status()

    @property
    def model(self) -> TraceOutlineModel:
        return self._model

    @property
    def table(self) -> QTableView:
        return self._table

    @property
    def expand_on_open_action(self) -> QAction:
        return self._expand_on_open_action

    def _setup_window(self, title: str) -> None:
        self.setWindowTitle(title)
        self.setMinimumSize(UI["window_min_width"], UI["window_min_height"])
        self.resize(UI["window_default_width"], UI["window_default_height"])
        self.setStyleSheet(get_stylesheet())

    def _setup_ui(self) -> None:
        toolbar = QToolBar("Outline", self)
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        expand_action = QAction("Expand all", self)
        expand_action.triggered.connect(self._on_expand_all)
        toolbar.addAction(expand_action)

        collapse_action = QAction("Collapse all", self)
        collapse_action.triggered.connect(self._on_collapse_all)
        toolbar.addAction(collapse_action)

        toolbar.addSeparator()
        self._expand_on_open_action = QAction("Expand on open", self)
        self._expand_on_open_action.setCheckable(True)
        self._expand_on_open_action.setChecked(self._settings.expand_all_on_open)
        self._expand_on_open_action.toggled.connect(self._on_expand_on_open_toggled)
        toolbar.addAction(self._expand_on_open_action)

        self._table = QTableView(self)
        self._table.setModel(self._model)
        self._table.setItemDelegateForColumn(
            TraceOutlineModel.COLUMN_TIMELINE,
            TimelineBarDelegate(
                TraceOutlineModel.BAR_ROLE, TraceOutlineModel.SPAN_ROLE, self._table
            ),
        )
        self._table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self._table.setShowGrid(False)
        self._table.verticalHeader().setVisible(False)
        self._table.verticalHeader().setDefaultSectionSize(UI["row_height"])

        header = self._table.horizontalHeader()
        header.resizeSection(TraceOutlineModel.COLUMN_NAME, UI["name_column_width"])
        header.resizeSection(
            TraceOutlineModel.COLUMN_DURATION, UI["duration_column_width"]
        )
        header.setSectionResizeMode(
            TraceOutlineModel.COLUMN_TIMELINE, QHeaderView.ResizeMode.Stretch
        )

        self._table.clicked.connect(self._on_row_clicked)
        self.setCentralWidget(self._table)

    def _update_status(self) -> None:
        trace = self._model.trace
        parts = [f"{len(trace)} spans", f"{len(trace.roots)} roots"]
        window = trace.window_ms
        if window is not None:
            parts.append(f"window {format_duration_ms(window)}")
        else:
            parts.append("empty timeline")
        if trace.dangling_parent_ids:
            parts.append(f"{len(trace.dangling_parent_ids)} unseen parents")
        if trace.cyclic_ids:
            parts.append(f"{len(trace.cyclic_ids)} in parent cycles")
        self.statusBar().showMessage(" | ".join(parts))

    def _on_row_clicked(self, index: QModelIndex) -> None:
        if not index.isValid():
            return
        outline_row = self._model.outline_row(index.row())
        if outline_row is None:
            return
        span_id = outline_row.span_id
        if self._model.toggle_row(index.row()):
            logger.debug(f"Toggled span {span_id}")
            row = self._model.row_for_span(span_id)
            if row is not None:
                self._table.selectRow(row)

    def _on_expand_all(self) -> None:
        self._model.expand_all()

    def _on_collapse_all(self) -> None:
        self._model.collapse_all()

    def _on_expand_on_open_toggled(self, checked: bool) -> None:
        self._settings.expand_all_on_open = checked
        try:
            self._settings.save()
        except OSError as e:
            logger.warning(f"Could not save settings: {e}")
            self.statusBar().showMessage(f"Could not save settings: {e}", 5000)
