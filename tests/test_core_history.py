"""Tests for HistoryStore."""

import json
from unittest.mock import MagicMock

import pytest
from pytestqt.qtbot import QtBot

from codesnap.core.export import format_csv
from codesnap.core.history import HistoryStore
from codesnap.core.storage import HISTORY_KEY, KeyValueStorage
from codesnap.models.barcode import BarcodeType


def _persisted(storage: KeyValueStorage) -> list[dict[str, object]]:
    raw = storage.get_item(HISTORY_KEY)
    assert raw is not None
    return json.loads(raw)


class TestHistoryAdd:
    """Test adding records."""

    def test_add_returns_record(self, history: HistoryStore) -> None:
        """add() assigns id and timestamp."""
        record = history.add("4006381333931", BarcodeType.EAN13)
        assert record.value == "4006381333931"
        assert record.type is BarcodeType.EAN13
        assert record.id
        assert record.timestamp > 0

    def test_newest_first(self, history: HistoryStore) -> None:
        """Records are prepended."""
        first = history.add("a", BarcodeType.QR)
        second = history.add("b", BarcodeType.QR)
        assert [r.id for r in history.records] == [second.id, first.id]

    def test_ids_unique(self, history: HistoryStore) -> None:
        """Ids never repeat within the history."""
        for i in range(50):
            history.add(str(i), BarcodeType.CODE128)
        ids = [r.id for r in history.records]
        assert len(set(ids)) == 50

    def test_add_persists_full_list(self, history: HistoryStore, storage: KeyValueStorage) -> None:
        """The whole list is written after an add."""
        history.add("a", BarcodeType.QR)
        history.add("b", BarcodeType.EAN8)
        persisted = _persisted(storage)
        assert [item["value"] for item in persisted] == ["b", "a"]
        assert persisted[0]["type"] == "ean8"

    def test_add_emits_signal(self, history: HistoryStore, qtbot: QtBot) -> None:
        """history_changed carries the new list."""
        with qtbot.waitSignal(history.history_changed, timeout=1000) as blocker:
            history.add("a", BarcodeType.QR)
        assert len(blocker.args[0]) == 1

    def test_records_is_a_copy(self, history: HistoryStore) -> None:
        """Mutating the returned list does not touch the store."""
        history.add("a", BarcodeType.QR)
        history.records.clear()
        assert len(history) == 1


class TestHistoryRemoveClear:
    """Test removing and clearing."""

    def test_remove(self, history: HistoryStore, storage: KeyValueStorage) -> None:
        """remove() deletes the matching record and persists."""
        keep = history.add("a", BarcodeType.QR)
        drop = history.add("b", BarcodeType.QR)
        history.remove(drop.id)
        assert [r.id for r in history.records] == [keep.id]
        assert [item["id"] for item in _persisted(storage)] == [keep.id]

    def test_remove_missing_is_noop(self, history: HistoryStore, qtbot: QtBot) -> None:
        """Removing an unknown id changes nothing and emits nothing."""
        history.add("a", BarcodeType.QR)
        before = history.records
        with qtbot.assertNotEmitted(history.history_changed):
            history.remove("does-not-exist")
        assert history.records == before

    def test_remove_twice_is_idempotent(self, history: HistoryStore) -> None:
        """A second remove of the same id is a no-op."""
        record = history.add("a", BarcodeType.QR)
        history.remove(record.id)
        history.remove(record.id)
        assert len(history) == 0

    @pytest.mark.parametrize("count", [0, 1, 7])
    def test_clear(self, history: HistoryStore, storage: KeyValueStorage, count: int) -> None:
        """clear() always leaves an empty, persisted list."""
        for i in range(count):
            history.add(str(i), BarcodeType.QR)
        history.clear()
        assert history.is_empty
        assert _persisted(storage) == []

    def test_length_tracks_adds_minus_removals(self, history: HistoryStore) -> None:
        """Length equals adds minus successful removals."""
        records = [history.add(str(i), BarcodeType.QR) for i in range(5)]
        history.remove(records[1].id)
        history.remove(records[3].id)
        history.remove("missing")
        assert len(history) == 3

    def test_contains_value_exact_match(self, history: HistoryStore) -> None:
        """contains_value() matches whole values only."""
        history.add("12345", BarcodeType.CODE39)
        assert history.contains_value("12345")
        assert not history.contains_value("1234")
        assert not history.contains_value("123456")


class TestHistoryLoad:
    """Test loading persisted history."""

    def test_round_trip(self, history: HistoryStore, storage: KeyValueStorage) -> None:
        """A new store sees the saved records in order."""
        history.add("a", BarcodeType.QR)
        history.add("b", BarcodeType.UPC_A)
        reloaded = HistoryStore(storage)
        assert reloaded.records == history.records

    @pytest.mark.parametrize("payload", ["{oops", '{"a": 1}', "42"])
    def test_corrupt_data_falls_back_to_empty(
        self, storage: KeyValueStorage, payload: str
    ) -> None:
        """Corrupt data yields an empty history without raising."""
        storage.set_item(HISTORY_KEY, payload)
        assert HistoryStore(storage).is_empty

    @pytest.mark.parametrize("timestamp", ["Infinity", "-Infinity", "NaN", "1e20"])
    def test_unrepresentable_timestamp_skipped(
        self, storage: KeyValueStorage, timestamp: str
    ) -> None:
        """Entries whose timestamp no date can hold are dropped on load."""
        payload = (
            '[{"id": "a", "value": "x", "type": "qr", "timestamp": ' + timestamp + "},"
            ' {"id": "b", "value": "ok", "type": "qr", "timestamp": 1700000000000}]'
        )
        storage.set_item(HISTORY_KEY, payload)
        history = HistoryStore(storage)
        assert [r.value for r in history.records] == ["ok"]
        assert format_csv(history.records).count("\n") == 1

    def test_malformed_entries_skipped(self, storage: KeyValueStorage) -> None:
        """Valid entries survive next to broken ones."""
        payload = [
            {"id": "1-a", "value": "ok", "type": "qr", "timestamp": 1},
            {"id": "1-b", "value": "bad", "type": "nope", "timestamp": 1},
            "not a dict",
            {"id": "1-a", "value": "dup id", "type": "qr", "timestamp": 2},
        ]
        storage.set_item(HISTORY_KEY, json.dumps(payload))
        history = HistoryStore(storage)
        assert [r.value for r in history.records] == ["ok"]

    def test_save_failure_keeps_memory_state(self, storage: KeyValueStorage) -> None:
        """A failed write does not lose the in-memory record."""
        history = HistoryStore(storage)
        storage.set_item = MagicMock(return_value=False)  # type: ignore[method-assign]
        history.add("a", BarcodeType.QR)
        assert len(history) == 1
