"""Themed dialog widgets.

Usage:
    from codesnap.ui.widgets.dialogs import ConfirmDialog

    if ConfirmDialog.confirm(parent, "Clear History", "Are you sure?", confirm_text="Clear"):
        history.clear()
"""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from codesnap.ui.theme import theme_manager
from codesnap.ui.tokens import sizing, spacing, typography


class ConfirmDialog(QDialog):
    """A themed yes/no dialog for destructive actions.

    The confirm button is styled as destructive; Cancel is the default.

    Example:
        ok = ConfirmDialog.confirm(self, "Clear History", "Clear all 3 scans?")
    """

    def __init__(
        self,
        parent: QWidget | None,
        title: str,
        message: str,
        *,
        confirm_text: str = "OK",
        destructive: bool = True,
    ) -> None:
        """Initialize the confirmation dialog.

        Args:
            parent: Parent widget.
            title: Dialog window title.
            message: Question shown to the user.
            confirm_text: Label of the confirm button.
            destructive: Style the confirm button as destructive.
        """
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setWindowFlags(
            Qt.WindowType.Dialog
            | Qt.WindowType.WindowTitleHint
            | Qt.WindowType.CustomizeWindowHint
            | Qt.WindowType.WindowCloseButtonHint
        )
        self.setMinimumWidth(300)
        self._setup_ui(title, message, confirm_text, destructive)

    def _setup_ui(self, title: str, message: str, confirm_text: str, destructive: bool) -> None:
        p = theme_manager.palette
        self.setStyleSheet(f"""
            ConfirmDialog {{
                background-color: {p.surface_elevated};
                border-radius: {sizing.border_radius_lg}px;
            }}
        """)

        layout = QVBoxLayout(self)
        layout.setSpacing(spacing.md)
        layout.setContentsMargins(spacing.xl, spacing.lg, spacing.xl, spacing.lg)

        title_label = QLabel(title)
        title_label.setStyleSheet(
            f"font-size: {typography.title}pt; font-weight: bold;"
            f" color: {p.text}; background: transparent;"
        )
        layout.addWidget(title_label)

        self._message_label = QLabel(message)
        self._message_label.setWordWrap(True)
        self._message_label.setStyleSheet(
            f"font-size: {typography.body}pt; color: {p.text_secondary}; background: transparent;"
        )
        layout.addWidget(self._message_label)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(spacing.sm)
        btn_row.addStretch()

        self._cancel_btn = QPushButton("Cancel")
        self._cancel_btn.setDefault(True)
        self._cancel_btn.setStyleSheet(f"""
            QPushButton {{
                background: {p.surface};
                border: 1px solid {p.border};
                border-radius: {sizing.border_radius_md}px;
                padding: {spacing.sm}px {spacing.lg}px;
                color: {p.text};
            }}
        """)
        self._cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(self._cancel_btn)

        self._confirm_btn = QPushButton(confirm_text)
        color = p.error if destructive else p.accent
        self._confirm_btn.setStyleSheet(f"""
            QPushButton {{
                background: {color};
                border: none;
                border-radius: {sizing.border_radius_md}px;
                padding: {spacing.sm}px {spacing.lg}px;
                color: #ffffff;
                font-weight: bold;
            }}
        """)
        self._confirm_btn.clicked.connect(self.accept)
        btn_row.addWidget(self._confirm_btn)

        layout.addLayout(btn_row)

    @property
    def message(self) -> str:
        """Return the question text."""
        return self._message_label.text()

    @staticmethod
    def confirm(
        parent: QWidget | None,
        title: str,
        message: str,
        *,
        confirm_text: str = "OK",
    ) -> bool:
        """Show the dialog and return True if the user confirmed."""
        dialog = ConfirmDialog(parent, title, message, confirm_text=confirm_text)
        return dialog.exec() == QDialog.DialogCode.Accepted
