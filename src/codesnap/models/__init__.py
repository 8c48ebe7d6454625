"""Data models for scan records and user settings."""

from codesnap.models.barcode import (
    ALL_BARCODE_TYPES,
    BARCODE_TYPE_LABELS,
    BarcodeType,
    ScanRecord,
    is_url,
    link_target,
)
from codesnap.models.settings import DEFAULT_SETTINGS, AppSettings

__all__ = [
    "ALL_BARCODE_TYPES",
    "BARCODE_TYPE_LABELS",
    "BarcodeType",
    "ScanRecord",
    "is_url",
    "link_target",
    "AppSettings",
    "DEFAULT_SETTINGS",
]
