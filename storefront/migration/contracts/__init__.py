"""
Legacy source contracts.

Each legacy query is declared once with its SQL and the column types it must
return, so adapters can validate rows before any decoder sees them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal, Mapping, Sequence, Tuple

from ..errors import RowDecodeError

ColumnKind = Literal["int", "decimal", "float", "text", "date", "datetime"]

_MISSING = object()


@dataclass(frozen=True)
class ColumnSpec:
    """Expected type of one result column."""

    name: str
    kind: ColumnKind
    nullable: bool = False
    default: Any = _MISSING

    def null_value(self) -> Any:
        if self.default is not _MISSING:
            return self.default
        if self.kind == "text":
            return ""
        if self.kind in ("int", "decimal", "float"):
            return 0
        return None


@dataclass(frozen=True)
class LegacyQuery:
    """A read-only query against the legacy store and its row contract."""

    name: str
    sql: str
    columns: Tuple[ColumnSpec, ...]

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.columns)


def _coerce(spec: ColumnSpec, value: Any) -> Any:
    kind = spec.kind
    if kind == "int":
        if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
            raise TypeError
        if isinstance(value, Decimal) and value != value.to_integral_value():
            raise TypeError
        return int(value)
    if kind == "decimal":
        if isinstance(value, bool) or not isinstance(value, (Decimal, int, float)):
            raise TypeError
        return value if isinstance(value, Decimal) else Decimal(repr(value) if isinstance(value, float) else value)
    if kind == "float":
        if isinstance(value, bool) or not isinstance(value, (float, int, Decimal)):
            raise TypeError
        return float(value)
    if kind == "text":
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8")
        if not isinstance(value, str):
            raise TypeError
        return value
    if kind == "date":
        if isinstance(value, datetime):
            return value.date()
        if not isinstance(value, date):
            raise TypeError
        return value
    if kind == "datetime":
        if not isinstance(value, datetime):
            raise TypeError
        return value
    raise ValueError(f"Unknown column kind: {kind}")


def decode_row(query: LegacyQuery, row_number: int, row: Sequence[Any]) -> Mapping[str, Any]:
    """
    Validate a raw row against the query contract.

    NULLs in nullable columns become the column default; every other mismatch
    raises :class:`RowDecodeError` naming the query, row and column.
    """

    values = tuple(row)
    if len(values) != len(query.columns):
        raise RowDecodeError(
            query.name,
            row_number,
            f"expected {len(query.columns)} columns, got {len(values)}",
            row=values,
        )

    decoded: dict[str, Any] = {}
    for spec, value in zip(query.columns, values):
        if value is None:
            if not spec.nullable:
                raise RowDecodeError(query.name, row_number, "unexpected NULL", column=spec.name, row=values)
            decoded[spec.name] = spec.null_value()
            continue
        try:
            decoded[spec.name] = _coerce(spec, value)
        except (TypeError, UnicodeDecodeError):
            raise RowDecodeError(
                query.name,
                row_number,
                f"expected {spec.kind}, got {type(value).__name__}",
                column=spec.name,
                row=values,
            ) from None
    return decoded


from .legacy import (  # noqa: E402
    ADDRESSES,
    CART_ITEMS,
    CATEGORIES,
    CATEGORY_SALES,
    COUPONS,
    CUSTOMERS,
    PAGES,
    PRODUCT_DESCRIPTION,
    PRODUCT_SALES,
    PRODUCTS,
    SEED_ATTRIBUTES,
    STORE_CREDITS,
)

__all__ = [
    "ColumnKind",
    "ColumnSpec",
    "LegacyQuery",
    "decode_row",
    "ADDRESSES",
    "CART_ITEMS",
    "CATEGORIES",
    "CATEGORY_SALES",
    "COUPONS",
    "CUSTOMERS",
    "PAGES",
    "PRODUCT_DESCRIPTION",
    "PRODUCT_SALES",
    "PRODUCTS",
    "SEED_ATTRIBUTES",
    "STORE_CREDITS",
]
