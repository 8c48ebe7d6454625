"""Key-value storage backed by QSettings.

The stores persist their state as JSON strings in two independent slots.
QSettings stores them in platform-specific locations:
- Windows: HKEY_CURRENT_USER\\Software\\CodeSnap\\CodeSnap
- macOS: ~/Library/Preferences/com.CodeSnap.CodeSnap.plist
- Linux: ~/.config/CodeSnap/CodeSnap.conf
"""

import logging

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

# Storage slots
SETTINGS_KEY = "@barcode_scanner_settings"
HISTORY_KEY = "@barcode_scanner_history"


class KeyValueStorage:
    """Wrapper around QSettings exposing string-keyed string slots.

    Reads return None for missing slots. Writes are best-effort: a failed
    write is logged and otherwise ignored.

    Example:
        storage = KeyValueStorage()
        storage.set_item(HISTORY_KEY, "[]")
        raw = storage.get_item(HISTORY_KEY)
    """

    def __init__(self, organization: str = "CodeSnap", application: str = "CodeSnap") -> None:
        """Initialize the storage.

        Args:
            organization: Organization name for QSettings.
            application: Application name for QSettings.
        """
        self._settings = QSettings(organization, application)

    def get_item(self, key: str) -> str | None:
        """Return the stored string for a slot, or None if unset."""
        if not self._settings.contains(key):
            return None
        value = self._settings.value(key, None, str)
        return str(value) if value is not None else None

    def set_item(self, key: str, value: str) -> bool:
        """Store a string in a slot and flush it to disk.

        Args:
            key: Slot name.
            value: Serialized payload.

        Returns:
            True if the write reached durable storage, False otherwise.
        """
        self._settings.setValue(key, value)
        self._settings.sync()
        status = self._settings.status()
        if status != QSettings.Status.NoError:
            logger.warning("Failed to save %s: %s", key, status.name)
            return False
        return True

    def clear(self) -> None:
        """Clear all slots (useful for testing or reset)."""
        self._settings.clear()
        self._settings.sync()
