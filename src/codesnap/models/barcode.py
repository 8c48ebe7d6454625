"""Barcode symbologies and the scan record model."""

import math
import random
import re
import string
import time
from dataclasses import dataclass
from enum import Enum

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LEN = 9

_URL_RE = re.compile(r"^(https?://|www\.)\S+$", re.IGNORECASE)

# Saved timestamps beyond +-100 million days from the epoch are rejected on load
MAX_TIMESTAMP_MS = 8_640_000_000_000_000


class BarcodeType(str, Enum):
    """Barcode symbologies the decoder can be asked to recognize."""

    AZTEC = "aztec"
    CODABAR = "codabar"
    CODE39 = "code39"
    CODE93 = "code93"
    CODE128 = "code128"
    DATAMATRIX = "datamatrix"
    EAN8 = "ean8"
    EAN13 = "ean13"
    ITF14 = "itf14"
    PDF417 = "pdf417"
    QR = "qr"
    UPC_A = "upc_a"
    UPC_E = "upc_e"

    @property
    def label(self) -> str:
        """Return the human-readable name of the symbology."""
        return BARCODE_TYPE_LABELS[self]

    @classmethod
    def parse(cls, raw: object) -> "BarcodeType | None":
        """Return the matching symbology, or None for unknown codes."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).lower())
        except ValueError:
            return None


BARCODE_TYPE_LABELS: dict[BarcodeType, str] = {
    BarcodeType.AZTEC: "Aztec",
    BarcodeType.CODABAR: "Codabar",
    BarcodeType.CODE39: "Code 39",
    BarcodeType.CODE93: "Code 93",
    BarcodeType.CODE128: "Code 128",
    BarcodeType.DATAMATRIX: "Data Matrix",
    BarcodeType.EAN8: "EAN-8",
    BarcodeType.EAN13: "EAN-13",
    BarcodeType.ITF14: "ITF-14",
    BarcodeType.PDF417: "PDF417",
    BarcodeType.QR: "QR Code",
    BarcodeType.UPC_A: "UPC-A",
    BarcodeType.UPC_E: "UPC-E",
}

ALL_BARCODE_TYPES: tuple[BarcodeType, ...] = tuple(BarcodeType)


def now_ms() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def generate_record_id(timestamp: int | None = None) -> str:
    """Generate an opaque record id of the form ``<epoch-ms>-<suffix>``."""
    if timestamp is None:
        timestamp = now_ms()
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_SUFFIX_LEN))  # noqa: S311
    return f"{timestamp}-{suffix}"


def is_url(value: str) -> bool:
    """Return True if the value looks like a link worth opening.

    Only values starting with ``http://``, ``https://`` or ``www.`` count;
    a bare domain such as ``example.com`` does not.
    """
    return bool(_URL_RE.match(value))


def link_target(value: str) -> str:
    """Return an openable URL for a URL-like value."""
    if value.lower().startswith("http"):
        return value
    return f"https://{value}"


@dataclass(frozen=True, slots=True)
class ScanRecord:
    """One accepted scan result.

    Attributes:
        id: Opaque identifier, unique within the history.
        value: Decoded barcode text.
        type: Symbology the value was decoded from.
        timestamp: Capture instant in epoch milliseconds.
    """

    id: str
    value: str
    type: BarcodeType
    timestamp: int

    @property
    def type_label(self) -> str:
        """Return the human-readable symbology name."""
        return self.type.label

    @property
    def is_url(self) -> bool:
        """Return True if the value is URL-like."""
        return is_url(self.value)

    def to_dict(self) -> dict[str, object]:
        """Serialize to a JSON-compatible dict."""
        return {
            "id": self.id,
            "value": self.value,
            "type": self.type.value,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "ScanRecord":
        """Build a record from its serialized form.

        Raises:
            ValueError: If a field is missing or malformed.
        """
        barcode_type = BarcodeType.parse(data.get("type"))
        if barcode_type is None:
            raise ValueError(f"Unknown barcode type: {data.get('type')!r}")
        record_id = data.get("id")
        value = data.get("value")
        timestamp = data.get("timestamp")
        if not isinstance(record_id, str) or not record_id:
            raise ValueError("Record id must be a non-empty string")
        if not isinstance(value, str):
            raise ValueError("Record value must be a string")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise ValueError("Record timestamp must be a number")
        if not math.isfinite(timestamp) or abs(timestamp) > MAX_TIMESTAMP_MS:
            raise ValueError(f"Record timestamp out of range: {timestamp!r}")
        return cls(id=record_id, value=value, type=barcode_type, timestamp=int(timestamp))
