"""Collapsible scan history panel."""

import logging

from PySide6.QtCore import Qt, QUrl, Signal
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import (
    QFrame,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from codesnap.core.history import HistoryStore
from codesnap.core.pipeline import ScanPipeline
from codesnap.models.barcode import ScanRecord
from codesnap.ui.theme import theme_manager
from codesnap.ui.tokens import sizing, spacing, typography
from codesnap.ui.widgets.scan_item import ScanResultItem

logger = logging.getLogger(__name__)


class HistoryPanel(QFrame):
    """List of scanned records, newest first, under a collapsible header.

    Signals:
        notice: Emitted with a short message for the status bar.

    Example:
        panel = HistoryPanel(history, pipeline)
        panel.notice.connect(window.statusBar().showMessage)
    """

    notice = Signal(str)

    def __init__(self, history: HistoryStore, pipeline: ScanPipeline) -> None:
        """Initialize the history panel.

        Args:
            history: Store providing the records.
            pipeline: Pipeline owning the expanded set and clipboard.
        """
        super().__init__()
        self._history = history
        self._pipeline = pipeline
        self._items: dict[str, ScanResultItem] = {}
        self._expanded = True
        self._setup_ui()

        history.history_changed.connect(self._on_history_changed)
        pipeline.expanded_changed.connect(self._on_expanded_changed)
        self.set_records(history.records)

    def _setup_ui(self) -> None:
        p = theme_manager.palette
        self.setStyleSheet(f"HistoryPanel {{ background: {p.surface}; }}")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(spacing.lg, spacing.sm, spacing.lg, spacing.sm)
        layout.setSpacing(spacing.sm)

        self._header = QPushButton()
        self._header.setFlat(True)
        self._header.setCursor(Qt.CursorShape.PointingHandCursor)
        self._header.setStyleSheet(
            f"text-align: left; color: {p.text}; font-size: {typography.subtitle}pt;"
            " font-weight: bold; border: none;"
        )
        self._header.clicked.connect(self.toggle_collapsed)
        layout.addWidget(self._header)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setFrameShape(QFrame.Shape.NoFrame)

        self._list = QWidget()
        self._list_layout = QVBoxLayout(self._list)
        self._list_layout.setContentsMargins(0, 0, 0, 0)
        self._list_layout.setSpacing(spacing.sm)
        self._list_layout.addStretch()
        self._scroll.setWidget(self._list)
        layout.addWidget(self._scroll)

        self._empty_label = QLabel("No scans yet")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setStyleSheet(f"color: {p.text_secondary};")
        self._list_layout.insertWidget(0, self._empty_label)

        self.setFixedHeight(sizing.history_expanded)

    # -- Collapse ------------------------------------------------------------

    @property
    def is_expanded(self) -> bool:
        """Return True if the list is visible."""
        return self._expanded

    def toggle_collapsed(self) -> None:
        """Collapse the list to the header, or expand it again."""
        self._expanded = not self._expanded
        self._scroll.setHidden(not self._expanded)
        self.setFixedHeight(sizing.history_expanded if self._expanded else sizing.history_collapsed)
        self._update_header()

    def _update_header(self) -> None:
        arrow = "▼" if self._expanded else "▲"
        self._header.setText(f"Scan History ({len(self._items)})  {arrow}")

    @property
    def title(self) -> str:
        """Return the header text without the arrow."""
        return self._header.text().rsplit("  ", 1)[0]

    # -- Records -------------------------------------------------------------

    def set_records(self, records: list[ScanRecord]) -> None:
        """Rebuild the list from records, newest first."""
        for item in self._items.values():
            self._list_layout.removeWidget(item)
            item.deleteLater()
        self._items = {}

        for index, record in enumerate(records):
            item = ScanResultItem(record, expanded=self._pipeline.is_expanded(record.id))
            item.toggled.connect(self._pipeline.toggle_expanded)
            item.copy_requested.connect(self._on_copy_requested)
            item.open_requested.connect(self._on_open_requested)
            item.remove_requested.connect(self._history.remove)
            self._list_layout.insertWidget(index, item)
            self._items[record.id] = item

        self._empty_label.setHidden(bool(records))
        self._update_header()

    def item(self, record_id: str) -> ScanResultItem | None:
        """Return the widget for a record, if displayed."""
        return self._items.get(record_id)

    @property
    def item_count(self) -> int:
        """Return the number of displayed records."""
        return len(self._items)

    def _on_history_changed(self, records: object) -> None:
        self.set_records(list(records))  # type: ignore[call-overload]

    def _on_expanded_changed(self, expanded_ids: object) -> None:
        ids = expanded_ids if isinstance(expanded_ids, frozenset) else frozenset()
        for record_id, item in self._items.items():
            item.set_expanded(record_id in ids)

    def _on_copy_requested(self, value: str) -> None:
        self._pipeline.copy(value)
        self.notice.emit("Value copied to clipboard")

    def _on_open_requested(self, url: str) -> None:
        logger.debug("Opening %s", url)
        if not QDesktopServices.openUrl(QUrl(url)):
            logger.warning("Could not open %s", url)
            self.notice.emit(f"Could not open {url}")
