"""Tests for CSV export."""

import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QDateTime, QLocale

from codesnap.core.export import (
    CSV_HEADER,
    CSV_MIME_TYPE,
    SHARE_TITLE,
    EmptyHistoryError,
    ExportError,
    SharingUnavailableError,
    export_filename,
    export_history,
    format_csv,
    quote_value,
)
from codesnap.models.barcode import MAX_TIMESTAMP_MS, BarcodeType, ScanRecord

US = QLocale(QLocale.Language.English, QLocale.Country.UnitedStates)
TIMESTAMP = 1_700_000_000_000


def _record(value: str, barcode_type: BarcodeType = BarcodeType.QR, rid: str = "1-a") -> ScanRecord:
    return ScanRecord(id=rid, value=value, type=barcode_type, timestamp=TIMESTAMP)


def _date_time(timestamp: int) -> tuple[str, str]:
    captured = QDateTime.fromMSecsSinceEpoch(timestamp)
    return (
        US.toString(captured.date(), QLocale.FormatType.ShortFormat),
        US.toString(captured.time(), QLocale.FormatType.ShortFormat),
    )


class TestQuoteValue:
    """Test CSV field quoting."""

    def test_plain(self) -> None:
        """Values are always wrapped in quotes."""
        assert quote_value("abc") == '"abc"'

    def test_embedded_quotes_doubled(self) -> None:
        """Embedded quotes are doubled."""
        assert quote_value('He said "hi"') == '"He said ""hi"""'

    def test_comma_kept(self) -> None:
        """Commas stay inside the quoted field."""
        assert quote_value("a,b") == '"a,b"'


class TestFormatCsv:
    """Test full CSV rendering."""

    def test_empty_is_header_only(self) -> None:
        """No records yields exactly the header."""
        assert format_csv([], US) == CSV_HEADER

    def test_row_layout(self) -> None:
        """Each row has the quoted value, type label, date and time."""
        date_str, time_str = _date_time(TIMESTAMP)
        text = format_csv([_record("4006381333931", BarcodeType.EAN13)], US)
        assert text.split("\n") == [
            "Value,Type,Date,Time",
            f'"4006381333931",EAN-13,{date_str},{time_str}',
        ]

    def test_quotes_in_value(self) -> None:
        """Quoted values survive inside rows."""
        text = format_csv([_record('He said "hi"')], US)
        assert text.split("\n")[1].startswith('"He said ""hi""",QR Code,')

    def test_order_preserved(self) -> None:
        """Rows follow the input order."""
        records = [_record("new", rid="2-b"), _record("old", rid="1-a")]
        rows = format_csv(records, US).split("\n")
        assert len(rows) == 3
        assert rows[1].startswith('"new"')
        assert rows[2].startswith('"old"')

    def test_no_trailing_newline(self) -> None:
        """Rows are joined, not terminated."""
        assert not format_csv([_record("x")], US).endswith("\n")


class TestExportFilename:
    """Test export file naming."""

    def test_dated_name(self) -> None:
        """The date is embedded as YYYY-MM-DD."""
        assert export_filename(datetime.date(2024, 3, 7)) == "CodeSnap_Export_2024-03-07.csv"


class TestExportHistory:
    """Test the export action."""

    def test_empty_history_raises(self, share_sink: MagicMock, tmp_path: Path) -> None:
        """Nothing is written or shared for an empty history."""
        with pytest.raises(EmptyHistoryError):
            export_history([], share_sink, tmp_path)
        share_sink.share.assert_not_called()
        assert list(tmp_path.iterdir()) == []

    def test_writes_and_shares(self, share_sink: MagicMock, tmp_path: Path) -> None:
        """The CSV is written as UTF-8 and handed to the sink."""
        records = [_record("grüße")]
        path = export_history(records, share_sink, tmp_path, US)
        assert path.parent == tmp_path
        assert path.name == export_filename()
        assert path.read_text(encoding="utf-8") == format_csv(records, US)
        share_sink.share.assert_called_once_with(path, CSV_MIME_TYPE, SHARE_TITLE)

    def test_creates_directory(self, share_sink: MagicMock, tmp_path: Path) -> None:
        """A missing cache directory is created."""
        target = tmp_path / "cache" / "exports"
        path = export_history([_record("x")], share_sink, target)
        assert path.exists()

    def test_sharing_unavailable(self, share_sink: MagicMock, tmp_path: Path) -> None:
        """An unavailable sink raises SharingUnavailableError."""
        share_sink.is_available.return_value = False
        with pytest.raises(SharingUnavailableError):
            export_history([_record("x")], share_sink, tmp_path)
        share_sink.share.assert_not_called()

    def test_share_failure_wrapped(self, share_sink: MagicMock, tmp_path: Path) -> None:
        """OSError from the sink becomes ExportError."""
        share_sink.share.side_effect = OSError("denied")
        with pytest.raises(ExportError, match="Failed to export"):
            export_history([_record("x")], share_sink, tmp_path)

    def test_write_failure_wrapped(self, share_sink: MagicMock, tmp_path: Path) -> None:
        """A directory that cannot be created becomes ExportError."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(ExportError):
            export_history([_record("x")], share_sink, blocker / "sub")
        share_sink.share.assert_not_called()

    def test_extreme_timestamp_formats(self) -> None:
        """The largest loadable timestamp still renders a row."""
        record = ScanRecord(id="1-a", value="x", type=BarcodeType.QR, timestamp=MAX_TIMESTAMP_MS)
        rows = format_csv([record], US).split("\n")
        assert len(rows) == 2
