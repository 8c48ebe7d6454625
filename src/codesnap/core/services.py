"""Platform services used by the scan pipeline and the export action.

Defines the clipboard, haptic feedback and share-sink interfaces plus
their Qt desktop implementations.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices, QGuiApplication
from PySide6.QtWidgets import QApplication

logger = logging.getLogger(__name__)


class HapticKind(Enum):
    """Notification feedback cues."""

    SUCCESS = "success"
    ERROR = "error"


class ClipboardService(ABC):
    """Write-only clipboard."""

    @abstractmethod
    def set_text(self, text: str) -> None:
        """Place text on the clipboard."""


class HapticService(ABC):
    """Notification feedback (vibration on phones, a beep on desktops)."""

    @abstractmethod
    def notify(self, kind: HapticKind) -> None:
        """Emit a single feedback pulse."""


class ShareSink(ABC):
    """Hands an exported file to the platform's share mechanism."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if sharing is possible on this device."""

    @abstractmethod
    def share(self, path: Path, mime_type: str, title: str) -> None:
        """Share the file at path.

        Raises:
            OSError: If the platform refuses the file.
        """


class QtClipboard(ClipboardService):
    """Clipboard backed by QGuiApplication.clipboard()."""

    def set_text(self, text: str) -> None:
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            logger.warning("Clipboard not available")
            return
        clipboard.setText(text)
        logger.debug("Copied %d chars to clipboard", len(text))


class QtHaptics(HapticService):
    """Desktop stand-in for haptics: an audible beep per pulse."""

    def __init__(self, *, audible: bool = True) -> None:
        self._audible = audible

    def notify(self, kind: HapticKind) -> None:
        logger.debug("Haptic pulse: %s", kind.value)
        if self._audible and QApplication.instance() is not None:
            QApplication.beep()


class DesktopShareSink(ShareSink):
    """Reveals exported files with the desktop's default handler."""

    def is_available(self) -> bool:
        return QGuiApplication.instance() is not None

    def share(self, path: Path, mime_type: str, title: str) -> None:
        logger.info("Sharing %s (%s): %s", path, mime_type, title)
        if not QDesktopServices.openUrl(QUrl.fromLocalFile(str(path))):
            raise OSError(f"No application available to open {path.name}")
