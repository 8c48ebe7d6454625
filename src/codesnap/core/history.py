"""Scan history store with Qt signals for reactive UI updates.

The in-memory list is the source of truth for reads; storage is a
durability shadow written after every mutation.
"""

import json
import logging

from PySide6.QtCore import QObject, Signal

from codesnap.core.storage import HISTORY_KEY, KeyValueStorage
from codesnap.models.barcode import BarcodeType, ScanRecord, generate_record_id, now_ms

logger = logging.getLogger(__name__)


class HistoryStore(QObject):
    """Ordered list of scan records, newest first.

    Example:
        history = HistoryStore(storage)
        history.history_changed.connect(lambda records: print(len(records)))
        record = history.add("4006381333931", BarcodeType.EAN13)
        history.remove(record.id)
    """

    history_changed = Signal(object)  # list[ScanRecord]

    def __init__(self, storage: KeyValueStorage, parent: QObject | None = None) -> None:
        """Initialize the store and load persisted history.

        Args:
            storage: Key-value storage holding the history slot.
            parent: Optional parent QObject.
        """
        super().__init__(parent)
        self._storage = storage
        self._records: list[ScanRecord] = []
        self.load()

    @property
    def records(self) -> list[ScanRecord]:
        """Return a copy of the records, newest first."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def is_empty(self) -> bool:
        """Return True if there are no records."""
        return not self._records

    def get(self, record_id: str) -> ScanRecord | None:
        """Get a record by ID.

        Args:
            record_id: The record ID to look up.

        Returns:
            The ScanRecord if found, else None.
        """
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def contains_value(self, value: str) -> bool:
        """Return True if a record with exactly this value exists."""
        return any(record.value == value for record in self._records)

    def load(self) -> None:
        """Load persisted history, falling back to an empty list on failure.

        Malformed entries are skipped individually.
        """
        self._records = []
        raw = self._storage.get_item(HISTORY_KEY)
        if raw is None:
            return
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Failed to load history, starting empty: %s", e)
            return
        if not isinstance(data, list):
            logger.warning("Failed to load history, expected list, got %s", type(data).__name__)
            return

        seen: set[str] = set()
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                record = ScanRecord.from_dict(item)
            except ValueError as e:
                logger.warning("Skipping invalid history entry: %s", e)
                continue
            if record.id in seen:
                logger.warning("Skipping duplicate history id %s", record.id)
                continue
            seen.add(record.id)
            self._records.append(record)

        logger.debug("Loaded %d history records", len(self._records))

    def add(self, value: str, barcode_type: BarcodeType) -> ScanRecord:
        """Create a record for a scan and prepend it to the history.

        Args:
            value: Decoded barcode text.
            barcode_type: Symbology of the scan.

        Returns:
            The new record with a fresh id and the current timestamp.
        """
        timestamp = now_ms()
        record_id = generate_record_id(timestamp)
        while self.get(record_id) is not None:
            record_id = generate_record_id(timestamp)
        record = ScanRecord(id=record_id, value=value, type=barcode_type, timestamp=timestamp)
        self._records.insert(0, record)
        self._changed()
        return record

    def remove(self, record_id: str) -> None:
        """Remove a record by id. Unknown ids are ignored."""
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            return
        self._records = remaining
        self._changed()

    def clear(self) -> None:
        """Remove every record."""
        self._records = []
        self._changed()

    def _changed(self) -> None:
        self._save()
        self.history_changed.emit(self.records)

    def _save(self) -> None:
        payload = json.dumps([r.to_dict() for r in self._records])
        if not self._storage.set_item(HISTORY_KEY, payload):
            logger.warning("History change kept in memory only")
