"""Settings panel: scanning behavior, barcode types and data actions."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QStandardPaths, Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from codesnap.core.export import EmptyHistoryError, ExportError, export_history
from codesnap.core.history import HistoryStore
from codesnap.core.services import ShareSink
from codesnap.core.settings_store import SettingsStore
from codesnap.models.barcode import ALL_BARCODE_TYPES, BarcodeType
from codesnap.models.settings import MAX_RESUME_DELAY, MIN_RESUME_DELAY, AppSettings
from codesnap.ui.theme import theme_manager
from codesnap.ui.tokens import spacing, typography
from codesnap.ui.widgets.dialogs import ConfirmDialog

logger = logging.getLogger(__name__)


def default_export_dir() -> Path:
    """Return the cache directory used for export files."""
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.CacheLocation)
    return Path(location) if location else Path.home() / ".cache" / "codesnap"


class SettingsPanel(QScrollArea):
    """Every settings field plus CSV export and history clear.

    Widgets write straight to the SettingsStore; the store's
    ``settings_changed`` signal refreshes the widgets.

    Signals:
        exported: Emitted with the path of a successful export.
    """

    exported = Signal(object)  # Path

    def __init__(
        self,
        settings_store: SettingsStore,
        history: HistoryStore,
        share_sink: ShareSink,
        export_dir: Path | None = None,
    ) -> None:
        """Initialize the settings panel.

        Args:
            settings_store: Store the widgets edit.
            history: History to export or clear.
            share_sink: Share mechanism for exports.
            export_dir: Directory for export files (cache dir by default).
        """
        super().__init__()
        self._store = settings_store
        self._history = history
        self._share_sink = share_sink
        self._export_dir = export_dir or default_export_dir()
        self._type_boxes: dict[BarcodeType, QCheckBox] = {}
        self._setup_ui()
        self._load(settings_store.settings)
        settings_store.settings_changed.connect(self._load)

    def _setup_ui(self) -> None:
        self.setWidgetResizable(True)
        content = QWidget()
        layout = QVBoxLayout(content)
        layout.setContentsMargins(spacing.lg, spacing.lg, spacing.lg, spacing.lg)
        layout.setSpacing(spacing.lg)

        layout.addWidget(self._create_behavior_group())
        layout.addWidget(self._create_types_group())
        layout.addWidget(self._create_data_group())
        layout.addStretch()
        self.setWidget(content)

    def _create_behavior_group(self) -> QGroupBox:
        p = theme_manager.palette
        group = QGroupBox("Scanning Behavior")
        layout = QVBoxLayout(group)

        self._auto_copy = QCheckBox("Copy to clipboard")
        self._auto_copy.setToolTip("Automatically copy scanned values")
        self._auto_copy.toggled.connect(lambda v: self._store.update(auto_copy_to_clipboard=v))
        layout.addWidget(self._auto_copy)

        self._ignore_duplicates = QCheckBox("Ignore duplicates")
        self._ignore_duplicates.setToolTip("Skip barcodes already in the history")
        self._ignore_duplicates.toggled.connect(lambda v: self._store.update(ignore_duplicates=v))
        layout.addWidget(self._ignore_duplicates)

        self._auto_resume = QCheckBox("Auto-resume scanning")
        self._auto_resume.setToolTip("Continue scanning automatically after a delay")
        self._auto_resume.toggled.connect(lambda v: self._store.update(auto_resume=v))
        layout.addWidget(self._auto_resume)

        delay_row = QHBoxLayout()
        self._delay_label = QLabel("Resume delay")
        delay_row.addWidget(self._delay_label)
        delay_row.addStretch()
        self._delay = QSpinBox()
        self._delay.setRange(MIN_RESUME_DELAY, MAX_RESUME_DELAY)
        self._delay.setSuffix(" s")
        self._delay.valueChanged.connect(
            lambda v: self._store.update(auto_resume_delay_seconds=v)
        )
        delay_row.addWidget(self._delay)
        layout.addLayout(delay_row)

        hint = QLabel("The delay only applies when auto-resume is on.")
        hint.setStyleSheet(f"color: {p.text_secondary}; font-size: {typography.small}pt;")
        layout.addWidget(hint)
        return group

    def _create_types_group(self) -> QGroupBox:
        p = theme_manager.palette
        group = QGroupBox("Barcode Types")
        layout = QVBoxLayout(group)

        header = QHBoxLayout()
        self._count_label = QLabel()
        self._count_label.setStyleSheet(f"color: {p.text_secondary};")
        header.addWidget(self._count_label)
        header.addStretch()
        select_all = QPushButton("Select All")
        select_all.clicked.connect(self._store.select_all_types)
        header.addWidget(select_all)
        deselect_all = QPushButton("Deselect All")
        deselect_all.clicked.connect(self._store.deselect_all_types)
        header.addWidget(deselect_all)
        layout.addLayout(header)

        grid = QGridLayout()
        columns = 2
        for index, barcode_type in enumerate(ALL_BARCODE_TYPES):
            box = QCheckBox(barcode_type.label)
            box.toggled.connect(
                lambda _checked, t=barcode_type: self._store.toggle_type(t)
            )
            grid.addWidget(box, index // columns, index % columns)
            self._type_boxes[barcode_type] = box
        layout.addLayout(grid)
        return group

    def _create_data_group(self) -> QGroupBox:
        p = theme_manager.palette
        group = QGroupBox("Data")
        layout = QVBoxLayout(group)

        self._export_btn = QPushButton("Export History to CSV")
        self._export_btn.clicked.connect(self.export)
        layout.addWidget(self._export_btn)

        self._clear_btn = QPushButton("Clear History")
        self._clear_btn.setStyleSheet(f"color: {p.error};")
        self._clear_btn.clicked.connect(self.clear_history)
        layout.addWidget(self._clear_btn)
        return group

    def _load(self, settings: object) -> None:
        """Refresh all widgets from settings without echoing back to the store."""
        if not isinstance(settings, AppSettings):
            return
        widgets = [
            self._auto_copy,
            self._ignore_duplicates,
            self._auto_resume,
            self._delay,
            *self._type_boxes.values(),
        ]
        for widget in widgets:
            widget.blockSignals(True)
        try:
            self._auto_copy.setChecked(settings.auto_copy_to_clipboard)
            self._ignore_duplicates.setChecked(settings.ignore_duplicates)
            self._auto_resume.setChecked(settings.auto_resume)
            self._delay.setValue(settings.auto_resume_delay_seconds)
            for barcode_type, box in self._type_boxes.items():
                box.setChecked(settings.is_enabled(barcode_type))
        finally:
            for widget in widgets:
                widget.blockSignals(False)

        self._delay.setEnabled(settings.auto_resume)
        self._delay_label.setEnabled(settings.auto_resume)
        self._count_label.setText(f"{settings.enabled_count} of {len(ALL_BARCODE_TYPES)} enabled")

    # -- Accessors for the main window and tests -----------------------------

    @property
    def count_text(self) -> str:
        """Return the "N of M enabled" text."""
        return self._count_label.text()

    def type_checkbox(self, barcode_type: BarcodeType) -> QCheckBox:
        """Return the checkbox for a symbology."""
        return self._type_boxes[barcode_type]

    @property
    def delay_spinbox(self) -> QSpinBox:
        """Return the resume delay spin box."""
        return self._delay

    @property
    def auto_resume_checkbox(self) -> QCheckBox:
        """Return the auto-resume checkbox."""
        return self._auto_resume

    # -- Actions -------------------------------------------------------------

    def export(self) -> None:
        """Export the history as CSV and share it, reporting failures."""
        self._export_btn.setEnabled(False)
        self._export_btn.setText("Exporting...")
        try:
            path = export_history(self._history.records, self._share_sink, self._export_dir)
        except EmptyHistoryError as e:
            QMessageBox.information(self, "No History", str(e))
        except ExportError as e:
            QMessageBox.warning(self, "Error", str(e))
        else:
            self.exported.emit(path)
        finally:
            self._export_btn.setEnabled(True)
            self._export_btn.setText("Export History to CSV")

    def clear_history(self) -> None:
        """Clear the history after an explicit confirmation."""
        count = len(self._history)
        if count == 0:
            QMessageBox.information(self, "No History", "There are no scans to clear.")
            return
        confirmed = ConfirmDialog.confirm(
            self,
            "Clear History",
            f"Are you sure you want to clear all {count} scanned barcodes?",
            confirm_text="Clear",
        )
        if confirmed:
            logger.info("Clearing %d history records", count)
            self._history.clear()
