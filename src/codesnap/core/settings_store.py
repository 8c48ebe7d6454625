"""Settings store with Qt signals for reactive UI updates."""

import json
import logging

from PySide6.QtCore import QObject, Signal

from codesnap.core.storage import SETTINGS_KEY, KeyValueStorage
from codesnap.models.barcode import ALL_BARCODE_TYPES, BarcodeType
from codesnap.models.settings import DEFAULT_SETTINGS, AppSettings

logger = logging.getLogger(__name__)


class SettingsStore(QObject):
    """Holds the user settings and persists every change.

    Example:
        store = SettingsStore(storage)
        store.settings_changed.connect(lambda s: print(s.auto_resume))
        store.update(auto_resume=True, auto_resume_delay_seconds=5)
    """

    settings_changed = Signal(object)  # AppSettings

    def __init__(self, storage: KeyValueStorage, parent: QObject | None = None) -> None:
        """Initialize the store and load persisted settings.

        Args:
            storage: Key-value storage holding the settings slot.
            parent: Optional parent QObject.
        """
        super().__init__(parent)
        self._storage = storage
        self._settings = DEFAULT_SETTINGS
        self.load()

    @property
    def settings(self) -> AppSettings:
        """Return the current settings."""
        return self._settings

    def load(self) -> None:
        """Load persisted settings, falling back to defaults on any failure."""
        raw = self._storage.get_item(SETTINGS_KEY)
        if raw is None:
            self._settings = DEFAULT_SETTINGS
            return
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError(f"expected object, got {type(data).__name__}")
            self._settings = AppSettings.from_dict(data)
        except (ValueError, TypeError) as e:
            logger.warning("Failed to load settings, using defaults: %s", e)
            self._settings = DEFAULT_SETTINGS

    def update(self, **partial: object) -> None:
        """Shallow-merge the given fields over the current settings and persist.

        Raises:
            TypeError: If a field name is unknown.
        """
        self._apply(self._settings.merged(**partial))

    def toggle_type(self, barcode_type: BarcodeType) -> None:
        """Enable a symbology if disabled, disable it if enabled."""
        types = self._settings.enabled_types ^ {barcode_type}
        self._apply(self._settings.merged(enabled_types=types))

    def select_all_types(self) -> None:
        """Enable every symbology."""
        self._apply(self._settings.merged(enabled_types=frozenset(ALL_BARCODE_TYPES)))

    def deselect_all_types(self) -> None:
        """Disable every symbology."""
        self._apply(self._settings.merged(enabled_types=frozenset()))

    def _apply(self, settings: AppSettings) -> None:
        self._settings = settings
        self._save()
        self.settings_changed.emit(settings)

    def _save(self) -> None:
        payload = json.dumps(self._settings.to_dict())
        if not self._storage.set_item(SETTINGS_KEY, payload):
            logger.warning("Settings change kept in memory only")
