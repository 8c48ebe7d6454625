"""Color palettes and the theme manager.

Usage:
    from codesnap.ui.theme import theme_manager

    p = theme_manager.palette
    widget.setStyleSheet(f"background-color: {p.background};")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import cast

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from codesnap.ui.tokens import sizing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThemePalette:
    """Named color palette. All values are CSS color strings."""

    name: str
    background: str  # Window background
    surface: str  # Panels and cards
    surface_elevated: str  # Cards on panels, dialogs
    overlay: str  # Paused overlay over the preview
    border: str
    text: str
    text_secondary: str
    accent: str  # Buttons, links, scan frame
    success: str  # Scanned checkmark
    error: str  # Remove / destructive
    warning: str  # Torch on


DARK_PALETTE = ThemePalette(
    name="dark",
    background="#000000",
    surface="#1C1C1E",
    surface_elevated="#2C2C2E",
    overlay="rgba(0, 0, 0, 200)",
    border="#38383A",
    text="#FFFFFF",
    text_secondary="#8E8E93",
    accent="#0A84FF",
    success="#30D158",
    error="#FF453A",
    warning="#FFD60A",
)

LIGHT_PALETTE = ThemePalette(
    name="light",
    background="#F2F2F7",
    surface="#FFFFFF",
    surface_elevated="#E5E5EA",
    overlay="rgba(255, 255, 255, 220)",
    border="#C6C6C8",
    text="#000000",
    text_secondary="#6C6C70",
    accent="#007AFF",
    success="#34C759",
    error="#FF3B30",
    warning="#FFCC00",
)


class ThemeManager(QObject):
    """Holds the active palette and follows the system color scheme.

    Emits ``theme_changed`` when the palette switches.
    """

    theme_changed = Signal()

    def __init__(self) -> None:
        super().__init__()
        self._palette = DARK_PALETTE

    @property
    def palette(self) -> ThemePalette:
        """Return the current color palette."""
        return self._palette

    @property
    def is_dark(self) -> bool:
        """Return True if the current theme is dark."""
        return self._palette.name == "dark"

    def detect_system_theme(self) -> ThemePalette:
        """Return the palette matching the system color scheme.

        Falls back to the dark palette if detection is unavailable.
        """
        raw_app = QGuiApplication.instance()
        if raw_app is None:
            return DARK_PALETTE
        app = cast(QGuiApplication, raw_app)
        try:
            scheme = app.styleHints().colorScheme()
        except AttributeError:
            logger.debug("System theme detection not available, using dark theme")
            return DARK_PALETTE
        return LIGHT_PALETTE if scheme == Qt.ColorScheme.Light else DARK_PALETTE

    def apply_theme(self, palette: ThemePalette | None = None) -> None:
        """Apply a palette, auto-detecting from the system when None."""
        if palette is None:
            palette = self.detect_system_theme()

        old_name = self._palette.name
        self._palette = palette
        logger.info("Theme applied: %s", palette.name)

        raw_app = QApplication.instance()
        if raw_app is not None:
            cast(QApplication, raw_app).setStyleSheet(self._global_stylesheet())

        if palette.name != old_name:
            self.theme_changed.emit()

    def _global_stylesheet(self) -> str:
        p = self._palette
        return f"""
            QToolTip {{
                background-color: {p.surface};
                color: {p.text};
                border: 1px solid {p.border};
            }}
            QScrollBar:vertical {{
                background: {p.surface};
                width: 8px;
            }}
            QScrollBar::handle:vertical {{
                background: {p.border};
                border-radius: {sizing.border_radius_md // 2}px;
            }}
            QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
                height: 0px;
            }}
        """


# Module-level singleton, import this in widgets
theme_manager = ThemeManager()
