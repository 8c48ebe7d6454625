"""Tests for barcode types, scan records and URL detection."""

import re

import pytest

from codesnap.models.barcode import (
    ALL_BARCODE_TYPES,
    BARCODE_TYPE_LABELS,
    BarcodeType,
    ScanRecord,
    generate_record_id,
    is_url,
    link_target,
)


class TestBarcodeType:
    """Tests for the BarcodeType enum."""

    def test_thirteen_symbologies(self) -> None:
        """All supported symbologies are listed."""
        assert len(ALL_BARCODE_TYPES) == 13
        assert set(BARCODE_TYPE_LABELS) == set(ALL_BARCODE_TYPES)

    def test_labels(self) -> None:
        """Labels are human readable, not raw codes."""
        assert BarcodeType.QR.label == "QR Code"
        assert BarcodeType.EAN13.label == "EAN-13"
        assert BarcodeType.UPC_A.label == "UPC-A"
        assert BarcodeType.DATAMATRIX.label == "Data Matrix"

    def test_parse_known_code(self) -> None:
        """Raw codes parse to members."""
        assert BarcodeType.parse("ean13") is BarcodeType.EAN13
        assert BarcodeType.parse("QR") is BarcodeType.QR
        assert BarcodeType.parse(BarcodeType.CODE128) is BarcodeType.CODE128

    def test_parse_unknown_code(self) -> None:
        """Unknown codes parse to None."""
        assert BarcodeType.parse("maxicode") is None
        assert BarcodeType.parse(None) is None


class TestIsUrl:
    """Tests for URL-like value detection."""

    @pytest.mark.parametrize(
        "value",
        ["www.example.com", "http://example.com", "https://example.com/a?b=c", "HTTPS://X.ORG"],
    )
    def test_url_like(self, value: str) -> None:
        """Values with a scheme or www. prefix are URL-like."""
        assert is_url(value) is True

    @pytest.mark.parametrize(
        "value",
        ["example.com", "4006381333931", "ftp://example.com", "https://", "www.example .com"],
    )
    def test_not_url_like(self, value: str) -> None:
        """Bare domains, numbers and values with spaces are not URL-like."""
        assert is_url(value) is False

    def test_link_target_adds_scheme(self) -> None:
        """www. values open over https."""
        assert link_target("www.example.com") == "https://www.example.com"
        assert link_target("http://example.com") == "http://example.com"


class TestScanRecord:
    """Tests for the ScanRecord dataclass."""

    def test_frozen(self) -> None:
        """Records are immutable."""
        record = ScanRecord(id="1", value="abc", type=BarcodeType.QR, timestamp=0)
        with pytest.raises(AttributeError):
            record.value = "changed"  # type: ignore[misc]

    def test_to_dict(self) -> None:
        """Serialized form uses raw type codes."""
        record = ScanRecord(id="1-a", value="abc", type=BarcodeType.EAN8, timestamp=1700000000000)
        assert record.to_dict() == {
            "id": "1-a",
            "value": "abc",
            "type": "ean8",
            "timestamp": 1700000000000,
        }

    def test_from_dict(self) -> None:
        """Records load from their serialized form."""
        record = ScanRecord.from_dict(
            {"id": "x", "value": "https://a.b", "type": "qr", "timestamp": 5}
        )
        assert record.type is BarcodeType.QR
        assert record.type_label == "QR Code"
        assert record.is_url is True

    @pytest.mark.parametrize(
        "data",
        [
            {"id": "x", "value": "v", "type": "bogus", "timestamp": 1},
            {"id": "", "value": "v", "type": "qr", "timestamp": 1},
            {"id": "x", "value": 3, "type": "qr", "timestamp": 1},
            {"id": "x", "value": "v", "type": "qr", "timestamp": "soon"},
            {"id": "x", "value": "v", "type": "qr"},
            {"id": "x", "value": "v", "type": "qr", "timestamp": float("inf")},
            {"id": "x", "value": "v", "type": "qr", "timestamp": float("nan")},
            {"id": "x", "value": "v", "type": "qr", "timestamp": 1e20},
        ],
    )
    def test_from_dict_rejects_malformed(self, data: dict[str, object]) -> None:
        """Malformed entries raise ValueError."""
        with pytest.raises(ValueError):
            ScanRecord.from_dict(data)


class TestRecordId:
    """Tests for record id generation."""

    def test_format(self) -> None:
        """Ids are <timestamp>-<9 base-36 chars>."""
        record_id = generate_record_id(1700000000000)
        assert re.fullmatch(r"1700000000000-[0-9a-z]{9}", record_id)

    def test_unique(self) -> None:
        """Ids generated in the same millisecond differ."""
        ids = {generate_record_id(42) for _ in range(200)}
        assert len(ids) == 200
