"""Main application window.

Layout:
+----------------------------------+
| [ Scanner ] [ Settings ]         |
+----------------------------------+
| ScannerPanel                     |
|                                  |
+----------------------------------+
| HistoryPanel (collapsible)       |
+----------------------------------+
"""

import logging
from pathlib import Path

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QTabWidget, QVBoxLayout, QWidget

from codesnap.core.history import HistoryStore
from codesnap.core.pipeline import ScanPipeline
from codesnap.core.services import ShareSink
from codesnap.core.settings_store import SettingsStore
from codesnap.ui.panels.history import HistoryPanel
from codesnap.ui.panels.scanner import ScannerPanel
from codesnap.ui.panels.settings import SettingsPanel
from codesnap.ui.theme import theme_manager
from codesnap.ui.tokens import sizing

logger = logging.getLogger(__name__)

_NOTICE_TIMEOUT_MS = 3000


class MainWindow(QMainWindow):
    """Main window with Scanner and Settings tabs.

    Example:
        window = MainWindow(settings_store, history, pipeline, DesktopShareSink())
        window.show()
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        history: HistoryStore,
        pipeline: ScanPipeline,
        share_sink: ShareSink,
        export_dir: Path | None = None,
    ) -> None:
        """Initialize the main window.

        Args:
            settings_store: Settings store shared by the panels.
            history: History store shared by the panels.
            pipeline: Scan pipeline driving the scanner panel.
            share_sink: Share mechanism for CSV export.
            export_dir: Directory for export files.
        """
        super().__init__()
        self._pipeline = pipeline

        self.setWindowTitle("CodeSnap")
        self.setMinimumSize(sizing.window_min_width, sizing.window_min_height)

        self._tabs = QTabWidget()

        scanner_tab = QWidget()
        scanner_layout = QVBoxLayout(scanner_tab)
        scanner_layout.setContentsMargins(0, 0, 0, 0)
        scanner_layout.setSpacing(0)
        self._scanner_panel = ScannerPanel(pipeline, settings_store)
        self._history_panel = HistoryPanel(history, pipeline)
        scanner_layout.addWidget(self._scanner_panel, stretch=1)
        scanner_layout.addWidget(self._history_panel)
        self._tabs.addTab(scanner_tab, "Scanner")

        self._settings_panel = SettingsPanel(settings_store, history, share_sink, export_dir)
        self._tabs.addTab(self._settings_panel, "Settings")

        self.setCentralWidget(self._tabs)
        self.setStyleSheet(f"QMainWindow {{ background: {theme_manager.palette.background}; }}")

        self._history_panel.notice.connect(self.show_notice)
        self._settings_panel.exported.connect(
            lambda path: self.show_notice(f"Exported {Path(path).name}")
        )
        self._scanner_panel.permission_requested.connect(self._on_permission_requested)

    @property
    def scanner_panel(self) -> ScannerPanel:
        """Return the scanner panel."""
        return self._scanner_panel

    @property
    def history_panel(self) -> HistoryPanel:
        """Return the history panel."""
        return self._history_panel

    @property
    def settings_panel(self) -> SettingsPanel:
        """Return the settings panel."""
        return self._settings_panel

    @property
    def tabs(self) -> QTabWidget:
        """Return the tab widget."""
        return self._tabs

    def show_notice(self, message: str) -> None:
        """Show a transient message in the status bar."""
        self.statusBar().showMessage(message, _NOTICE_TIMEOUT_MS)

    def _on_permission_requested(self) -> None:
        # Keyboard-wedge input needs no OS permission
        logger.info("Input permission granted")
        self._scanner_panel.set_permission_granted(True)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        """Cancel the countdown before the window goes away."""
        self._pipeline.shutdown()
        super().closeEvent(event)
