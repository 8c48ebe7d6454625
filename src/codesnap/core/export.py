"""CSV export of the scan history.

Usage:
    from codesnap.core.export import export_history, format_csv

    text = format_csv(history.records)
    path = export_history(history.records, DesktopShareSink(), cache_dir)
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from PySide6.QtCore import QDateTime, QLocale

from codesnap.core.services import ShareSink
from codesnap.models.barcode import ScanRecord

logger = logging.getLogger(__name__)

CSV_HEADER = "Value,Type,Date,Time"
CSV_MIME_TYPE = "text/csv"
SHARE_TITLE = "Export Scan History"


class ExportError(Exception):
    """Exporting the history failed."""


class EmptyHistoryError(ExportError):
    """There is nothing to export."""


class SharingUnavailableError(ExportError):
    """The platform cannot share files."""


def quote_value(value: str) -> str:
    """Quote a CSV field, doubling any embedded quote characters."""
    return '"' + value.replace('"', '""') + '"'


def format_row(record: ScanRecord, locale: QLocale) -> str:
    """Render one record as a CSV row."""
    captured = QDateTime.fromMSecsSinceEpoch(record.timestamp)
    date_str = locale.toString(captured.date(), QLocale.FormatType.ShortFormat)
    time_str = locale.toString(captured.time(), QLocale.FormatType.ShortFormat)
    return f"{quote_value(record.value)},{record.type_label},{date_str},{time_str}"


def format_csv(records: Iterable[ScanRecord], locale: QLocale | None = None) -> str:
    """Serialize records to CSV text, one row per record in the given order.

    Args:
        records: Records to export, usually newest first.
        locale: Locale for date and time columns (system locale by default).

    Returns:
        The header row followed by the data rows, joined with newlines.
    """
    locale = locale or QLocale()
    rows = [CSV_HEADER]
    rows.extend(format_row(record, locale) for record in records)
    return "\n".join(rows)


def export_filename(today: datetime.date | None = None) -> str:
    """Return the file name for an export made on the given day."""
    today = today or datetime.date.today()
    return f"CodeSnap_Export_{today.isoformat()}.csv"


def export_history(
    records: Sequence[ScanRecord],
    sink: ShareSink,
    directory: Path,
    locale: QLocale | None = None,
) -> Path:
    """Write the history to a CSV file and hand it to the share sink.

    Args:
        records: Records to export.
        sink: Platform share mechanism.
        directory: Where to write the file.
        locale: Locale for date and time columns.

    Returns:
        Path of the written file.

    Raises:
        EmptyHistoryError: If there are no records.
        SharingUnavailableError: If the sink cannot share.
        ExportError: If writing or sharing the file failed.
    """
    if not records:
        raise EmptyHistoryError("There are no scans to export.")

    path = directory / export_filename()
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(format_csv(records, locale), encoding="utf-8")
    except OSError as e:
        logger.error("Export failed writing %s: %s", path, e)
        raise ExportError("Failed to export scan history.") from e
    logger.info("Exported %d records to %s", len(records), path)

    if not sink.is_available():
        raise SharingUnavailableError("Sharing is not available on this device.")

    try:
        sink.share(path, CSV_MIME_TYPE, SHARE_TITLE)
    except OSError as e:
        logger.error("Sharing %s failed: %s", path, e)
        raise ExportError("Failed to export scan history.") from e
    return path
