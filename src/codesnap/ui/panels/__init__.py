"""UI panels for the main window."""

from codesnap.ui.panels.history import HistoryPanel
from codesnap.ui.panels.scanner import ScannerPanel
from codesnap.ui.panels.settings import SettingsPanel

__all__ = ["HistoryPanel", "ScannerPanel", "SettingsPanel"]
