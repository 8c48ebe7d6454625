"""Collapsible history entry widget."""

import html

from PySide6.QtCore import QDateTime, Qt, Signal
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from codesnap.models.barcode import ScanRecord, link_target
from codesnap.ui.theme import theme_manager
from codesnap.ui.tokens import spacing, typography


def format_timestamp(timestamp: int) -> str:
    """Format an epoch-ms timestamp as local hh:mm:ss."""
    captured = QDateTime.fromMSecsSinceEpoch(timestamp)
    return captured.time().toString("hh:mm:ss")


class ScanResultItem(QFrame):
    """One history record: a header row that expands into details.

    The details show the full value (as a link for URL-like values) and
    Copy, Open and Remove actions. Open is only offered for URL-like values.

    Signals:
        toggled: Emitted when the header is clicked (record_id).
        copy_requested: Emitted with the value to copy.
        open_requested: Emitted with the URL to open.
        remove_requested: Emitted with the record id to remove.
    """

    toggled = Signal(str)
    copy_requested = Signal(str)
    open_requested = Signal(str)
    remove_requested = Signal(str)

    def __init__(self, record: ScanRecord, expanded: bool = False) -> None:
        """Initialize the item.

        Args:
            record: The record to display.
            expanded: Whether details start visible.
        """
        super().__init__()
        self._record = record
        self._setup_ui()
        self.set_expanded(expanded)

    def _setup_ui(self) -> None:
        p = theme_manager.palette
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setStyleSheet(
            f"ScanResultItem {{ background: {p.surface_elevated}; border-radius: 8px; }}"
        )

        layout = QVBoxLayout(self)
        layout.setContentsMargins(spacing.lg, spacing.md, spacing.lg, spacing.md)
        layout.setSpacing(spacing.sm)

        # Header: value, type and time, chevron
        self._header = QPushButton()
        self._header.setFlat(True)
        self._header.setCursor(Qt.CursorShape.PointingHandCursor)
        self._header.clicked.connect(lambda: self.toggled.emit(self._record.id))
        header_layout = QHBoxLayout(self._header)
        header_layout.setContentsMargins(0, 0, 0, 0)

        text_col = QVBoxLayout()
        self._value_label = QLabel(self._record.value)
        self._value_label.setStyleSheet(f"color: {p.text}; font-size: {typography.body}pt;")
        self._value_label.setMaximumWidth(320)
        text_col.addWidget(self._value_label)

        subtitle = f"{self._record.type_label} - {format_timestamp(self._record.timestamp)}"
        self._type_label = QLabel(subtitle)
        self._type_label.setStyleSheet(
            f"color: {p.text_secondary}; font-size: {typography.caption}pt;"
        )
        text_col.addWidget(self._type_label)
        header_layout.addLayout(text_col)
        header_layout.addStretch()

        self._chevron = QLabel()
        self._chevron.setStyleSheet(f"color: {p.text_secondary};")
        header_layout.addWidget(self._chevron)
        self._header.setMinimumHeight(40)
        layout.addWidget(self._header)

        # Details
        self._details = QWidget()
        details_layout = QVBoxLayout(self._details)
        details_layout.setContentsMargins(0, spacing.sm, 0, 0)

        if self._record.is_url:
            url = link_target(self._record.value)
            value = html.escape(self._record.value)
            self._full_value = QLabel(f'<a href="{html.escape(url)}">{value}</a>')
            self._full_value.setTextFormat(Qt.TextFormat.RichText)
            self._full_value.linkActivated.connect(self.open_requested.emit)
        else:
            self._full_value = QLabel(self._record.value)
            self._full_value.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self._full_value.setWordWrap(True)
        self._full_value.setStyleSheet(f"color: {p.text};")
        details_layout.addWidget(self._full_value)

        actions = QHBoxLayout()
        actions.setSpacing(spacing.md)

        self._copy_btn = QPushButton("Copy")
        self._copy_btn.clicked.connect(lambda: self.copy_requested.emit(self._record.value))
        actions.addWidget(self._copy_btn)

        self._open_btn: QPushButton | None = None
        if self._record.is_url:
            self._open_btn = QPushButton("Open")
            self._open_btn.clicked.connect(
                lambda: self.open_requested.emit(link_target(self._record.value))
            )
            actions.addWidget(self._open_btn)

        self._remove_btn = QPushButton("Remove")
        self._remove_btn.setStyleSheet(f"color: {p.error};")
        self._remove_btn.clicked.connect(lambda: self.remove_requested.emit(self._record.id))
        actions.addWidget(self._remove_btn)
        actions.addStretch()

        details_layout.addLayout(actions)
        layout.addWidget(self._details)

    @property
    def record(self) -> ScanRecord:
        """Return the displayed record."""
        return self._record

    @property
    def is_expanded(self) -> bool:
        """Return True if details are shown."""
        return not self._details.isHidden()

    @property
    def has_open_action(self) -> bool:
        """Return True if the Open action is offered."""
        return self._open_btn is not None

    def set_expanded(self, expanded: bool) -> None:
        """Show or hide the details."""
        self._details.setHidden(not expanded)
        self._chevron.setText("▲" if expanded else "▼")
