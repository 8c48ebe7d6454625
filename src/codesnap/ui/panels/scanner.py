"""Scanner panel: decoder input, scan-target overlay and paused overlay.

The desktop build has no camera decoder. Codes arrive from a keyboard-wedge
input: HID barcode scanners type the decoded text followed by Enter, and
the user picks the symbology the scanner is configured for.

Layout:
+----------------------------------+
|                          [torch] |
|          +------------+          |
|          |  scan area |          |
|          +------------+          |
| [symbology v] [ code input.... ] |
+----------------------------------+
"""

import logging

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from codesnap.core.pipeline import DecoderConfig, ScanPipeline, ScanState
from codesnap.core.settings_store import SettingsStore
from codesnap.models.barcode import ALL_BARCODE_TYPES, BarcodeType, ScanRecord
from codesnap.ui.theme import theme_manager
from codesnap.ui.tokens import sizing, spacing, typography

logger = logging.getLogger(__name__)

_PAGE_PERMISSION = 0
_PAGE_SCANNER = 1


class PermissionGate(QWidget):
    """Blocking screen shown while camera access is missing.

    Signals:
        permission_requested: Emitted when the user asks to grant access.
    """

    permission_requested = Signal()

    def __init__(self) -> None:
        super().__init__()
        p = theme_manager.palette
        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.setSpacing(spacing.lg)

        self._title = QLabel("Camera Access Required")
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._title.setStyleSheet(
            f"color: {p.text}; font-size: {typography.title}pt; font-weight: bold;"
        )
        layout.addWidget(self._title)

        self._message = QLabel("This app needs camera access to scan barcodes")
        self._message.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message.setWordWrap(True)
        self._message.setStyleSheet(f"color: {p.text_secondary};")
        layout.addWidget(self._message)

        self._grant_btn = QPushButton("Grant Permission")
        self._grant_btn.setStyleSheet(
            f"background: {p.accent}; color: #ffffff; border: none;"
            f" border-radius: {sizing.border_radius_md}px; padding: {spacing.md}px {spacing.xl}px;"
        )
        self._grant_btn.clicked.connect(self.permission_requested.emit)
        layout.addWidget(self._grant_btn, alignment=Qt.AlignmentFlag.AlignCenter)

    def set_pending(self, pending: bool) -> None:
        """Show the "requesting" message while the answer is outstanding."""
        self._grant_btn.setHidden(pending)
        self._message.setText(
            "Requesting camera permission..."
            if pending
            else "This app needs camera access to scan barcodes"
        )


class ScannerPanel(QWidget):
    """Scanner view bound to a ScanPipeline.

    Signals:
        permission_requested: Emitted when the user asks for camera access.

    Example:
        panel = ScannerPanel(pipeline, settings_store)
        panel.set_permission_granted(True)
    """

    permission_requested = Signal()

    def __init__(self, pipeline: ScanPipeline, settings_store: SettingsStore) -> None:
        """Initialize the scanner panel.

        Args:
            pipeline: Pipeline receiving decode events.
            settings_store: Settings used for the resume button label.
        """
        super().__init__()
        self._pipeline = pipeline
        self._settings_store = settings_store
        self._setup_ui()
        self._connect_signals()
        self._apply_decoder_config(pipeline.decoder_config)
        self._on_state_changed(pipeline.state)

    def _setup_ui(self) -> None:
        p = theme_manager.palette
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        self._stack = QStackedWidget()
        self._gate = PermissionGate()
        self._stack.addWidget(self._gate)
        self._stack.addWidget(self._create_scanner_view())
        self._stack.setCurrentIndex(_PAGE_SCANNER)
        outer.addWidget(self._stack)

        self.setStyleSheet(f"ScannerPanel {{ background: {p.background}; }}")

    def _create_scanner_view(self) -> QWidget:
        p = theme_manager.palette
        view = QFrame()
        view.setStyleSheet(f"QFrame {{ background: {p.background}; }}")
        layout = QVBoxLayout(view)
        layout.setContentsMargins(spacing.lg, spacing.lg, spacing.lg, spacing.lg)
        layout.setSpacing(spacing.md)

        # Torch toggle
        top_row = QHBoxLayout()
        top_row.addStretch()
        self._torch_btn = QPushButton("Torch")
        self._torch_btn.setCheckable(True)
        self._torch_btn.setFixedHeight(sizing.control_button)
        self._torch_btn.toggled.connect(self._pipeline.set_torch)
        top_row.addWidget(self._torch_btn)
        layout.addLayout(top_row)

        # Scan target frame and paused overlay share the same slot
        self._view_stack = QStackedWidget()

        self._scan_frame = QLabel("Point the scanner at a barcode")
        self._scan_frame.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._scan_frame.setMinimumSize(sizing.scan_frame, sizing.scan_frame // 2)
        self._scan_frame.setStyleSheet(
            f"border: 3px solid {p.text}; border-radius: {sizing.border_radius_lg}px;"
            f" color: {p.text_secondary};"
        )
        self._view_stack.addWidget(self._scan_frame)
        self._view_stack.addWidget(self._create_paused_overlay())
        layout.addWidget(self._view_stack, stretch=1)

        # Keyboard-wedge decoder input
        input_row = QHBoxLayout()
        self._symbology = QComboBox()
        for barcode_type in ALL_BARCODE_TYPES:
            self._symbology.addItem(barcode_type.label, barcode_type)
        self._symbology.setCurrentIndex(ALL_BARCODE_TYPES.index(BarcodeType.QR))
        input_row.addWidget(self._symbology)

        self._code_input = QLineEdit()
        self._code_input.setPlaceholderText("Scan or type a code, then press Enter")
        self._code_input.returnPressed.connect(self._on_code_entered)
        input_row.addWidget(self._code_input, stretch=1)
        layout.addLayout(input_row)

        return view

    def _create_paused_overlay(self) -> QWidget:
        p = theme_manager.palette
        overlay = QFrame()
        overlay.setStyleSheet(
            f"QFrame {{ background: {p.overlay}; border-radius: {sizing.border_radius_lg}px; }}"
        )
        layout = QVBoxLayout(overlay)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.setSpacing(spacing.md)

        title = QLabel("Barcode Scanned")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet(
            f"color: {p.success}; font-size: {typography.title}pt; font-weight: bold;"
        )
        layout.addWidget(title)

        self._scanned_type = QLabel()
        self._scanned_type.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._scanned_type.setStyleSheet(f"color: {p.text_secondary};")
        layout.addWidget(self._scanned_type)

        self._scanned_value = QLabel()
        self._scanned_value.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._scanned_value.setWordWrap(True)
        self._scanned_value.setStyleSheet(f"color: {p.text}; font-size: {typography.heading}pt;")
        layout.addWidget(self._scanned_value)

        self._countdown_label = QLabel()
        self._countdown_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._countdown_label.setStyleSheet(f"color: {p.text_secondary};")
        layout.addWidget(self._countdown_label)

        self._resume_btn = QPushButton()
        self._resume_btn.setStyleSheet(
            f"background: {p.accent}; color: #ffffff; border: none;"
            f" border-radius: {sizing.border_radius_md}px; padding: {spacing.md}px {spacing.xl}px;"
        )
        self._resume_btn.clicked.connect(self._pipeline.resume)
        layout.addWidget(self._resume_btn, alignment=Qt.AlignmentFlag.AlignCenter)
        return overlay

    def _connect_signals(self) -> None:
        self._gate.permission_requested.connect(self._on_permission_requested)
        self._pipeline.state_changed.connect(self._on_state_changed)
        self._pipeline.countdown_changed.connect(self._on_countdown_changed)
        self._pipeline.scan_accepted.connect(self._on_scan_accepted)
        self._pipeline.decoder_config_changed.connect(self._apply_decoder_config)

    # -- Permission ----------------------------------------------------------

    @property
    def permission_gate_visible(self) -> bool:
        """Return True if the permission screen is showing."""
        return self._stack.currentIndex() == _PAGE_PERMISSION

    def set_permission_granted(self, granted: bool | None) -> None:
        """Switch between the permission screen and the scanner.

        Args:
            granted: True when access is granted, False when denied, None
                while the request is pending.
        """
        if granted:
            self._stack.setCurrentIndex(_PAGE_SCANNER)
            self._code_input.setFocus()
            return
        self._gate.set_pending(granted is None)
        self._stack.setCurrentIndex(_PAGE_PERMISSION)

    def _on_permission_requested(self) -> None:
        self._gate.set_pending(True)
        self.permission_requested.emit()

    # -- Decoder -------------------------------------------------------------

    @property
    def code_input(self) -> QLineEdit:
        """Return the wedge input field."""
        return self._code_input

    @property
    def symbology_combo(self) -> QComboBox:
        """Return the symbology selector."""
        return self._symbology

    def _on_code_entered(self) -> None:
        text = self._code_input.text().strip()
        self._code_input.clear()
        if not text:
            return
        barcode_type = self._symbology.currentData()
        logger.debug("Wedge input: %r as %s", text, barcode_type)
        self._pipeline.on_decode_event(text, barcode_type)

    def _apply_decoder_config(self, config: object) -> None:
        if not isinstance(config, DecoderConfig):
            return
        self._torch_btn.blockSignals(True)
        self._torch_btn.setChecked(config.torch)
        self._torch_btn.blockSignals(False)
        self._torch_btn.setText("Torch on" if config.torch else "Torch")
        p = theme_manager.palette
        self._torch_btn.setStyleSheet(f"color: {p.warning};" if config.torch else "")
        if not config.barcode_types:
            self._scan_frame.setText("No barcode types enabled")
        else:
            self._scan_frame.setText("Point the scanner at a barcode")

    # -- Pipeline state ------------------------------------------------------

    def _on_state_changed(self, state: object) -> None:
        paused = isinstance(state, ScanState) and state.is_paused
        self._view_stack.setCurrentIndex(1 if paused else 0)
        self._code_input.setEnabled(not paused)
        if paused:
            settings = self._settings_store.settings
            self._resume_btn.setText("Resume Now" if settings.auto_resume else "Continue Scanning")
        else:
            self._countdown_label.clear()
            self._code_input.setFocus()

    def _on_scan_accepted(self, record: object) -> None:
        if not isinstance(record, ScanRecord):
            return
        self._scanned_type.setText(record.type_label)
        self._scanned_value.setText(record.value)

    def _on_countdown_changed(self, seconds: object) -> None:
        if seconds is None or not self._settings_store.settings.auto_resume:
            self._countdown_label.clear()
            return
        self._countdown_label.setText(f"Resuming in {seconds}s...")

    @property
    def is_showing_result(self) -> bool:
        """Return True if the paused overlay is visible."""
        return self._view_stack.currentIndex() == 1

    @property
    def countdown_text(self) -> str:
        """Return the countdown label text."""
        return self._countdown_label.text()

    @property
    def resume_button(self) -> QPushButton:
        """Return the resume button."""
        return self._resume_btn
