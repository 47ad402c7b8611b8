from datetime import date, datetime
from decimal import Decimal

import pytest

from storefront.migration.contracts import (
    ADDRESSES,
    ColumnSpec,
    LegacyQuery,
    decode_row,
)
from storefront.migration.errors import RowDecodeError

SAMPLE = LegacyQuery(
    name="sample",
    sql="SELECT 1",
    columns=(
        ColumnSpec("id", "int"),
        ColumnSpec("label", "text", nullable=True),
        ColumnSpec("amount", "decimal", nullable=True),
        ColumnSpec("weight", "float"),
        ColumnSpec("day", "date"),
        ColumnSpec("seen_at", "datetime", nullable=True),
    ),
)


def test_decode_row_maps_columns_by_name():
    row = decode_row(SAMPLE, 1, (7, "Seeds", Decimal("1.50"), 2, date(2020, 1, 1), datetime(2020, 1, 1, 8)))
    assert row == {
        "id": 7,
        "label": "Seeds",
        "amount": Decimal("1.50"),
        "weight": 2.0,
        "day": date(2020, 1, 1),
        "seen_at": datetime(2020, 1, 1, 8),
    }


def test_decode_row_nullable_columns_take_defaults():
    row = decode_row(SAMPLE, 1, (7, None, None, 1.5, date(2020, 1, 1), None))
    assert row["label"] == ""
    assert row["amount"] == 0
    assert row["seen_at"] is None


def test_decode_row_decodes_bytes_as_utf8():
    row = decode_row(SAMPLE, 1, (7, "Café".encode("utf-8"), None, 1.0, date(2020, 1, 1), None))
    assert row["label"] == "Café"


def test_decode_row_accepts_datetime_for_date_columns():
    row = decode_row(SAMPLE, 1, (7, "", None, 1.0, datetime(2020, 5, 4, 12), None))
    assert row["day"] == date(2020, 5, 4)


def test_decode_row_rejects_wrong_arity():
    with pytest.raises(RowDecodeError) as excinfo:
        decode_row(SAMPLE, 3, (7, "Seeds"))
    assert excinfo.value.query_name == "sample"
    assert excinfo.value.row_number == 3
    assert "expected 6 columns" in str(excinfo.value)


def test_decode_row_rejects_null_in_required_column():
    with pytest.raises(RowDecodeError) as excinfo:
        decode_row(SAMPLE, 1, (None, "", None, 1.0, date(2020, 1, 1), None))
    assert excinfo.value.column == "id"


def test_decode_row_rejects_type_drift():
    with pytest.raises(RowDecodeError) as excinfo:
        decode_row(SAMPLE, 2, ("7", "", None, 1.0, date(2020, 1, 1), None))
    assert excinfo.value.column == "id"
    assert "expected int, got str" in str(excinfo.value)
    assert excinfo.value.row[0] == "7"


def test_decode_row_rejects_fractional_integer():
    with pytest.raises(RowDecodeError):
        decode_row(SAMPLE, 1, (Decimal("7.5"), "", None, 1.0, date(2020, 1, 1), None))


def test_address_query_declares_zone_and_default_columns():
    assert ADDRESSES.column_names[-4:] == (
        "zone_name",
        "countries_iso_code_2",
        "customers_id",
        "customers_default_address_id",
    )
