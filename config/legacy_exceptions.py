"""
Exception table for legacy records that cannot be migrated by the generic rules.

ZenCart allowed products to be deleted and recreated under the same SKU while
old order and basket rows kept pointing at the deleted product IDs. The
variant stage consumes this table after its main pass:

* ``recreated_products`` alias an old product ID to the variant that was
  inserted for the recreated SKU.
* ``deleted_products`` insert an inactive placeholder product and variant so
  the old product ID still resolves.

The cart stage silently ignores basket rows for ``ignored_cart_product_ids``
and the category sale decoder drops sales named in ``excluded_sale_names``.

Configuration is file-backed. Operators can override the defaults by pointing
``MIGRATION_EXCEPTIONS_PATH`` at a JSON or YAML file; sections present in the
file replace the matching default section.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, MutableMapping, Sequence

import yaml

# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RecreatedProduct:
    """Old product ID that must resolve to an existing variant."""

    legacy_id: int
    base_sku: str
    sku_suffix: str = ""
    note: str = ""


@dataclass(frozen=True)
class DeletedProduct:
    """
    Old product ID that gets a freshly inserted placeholder.

    Attributes:
        legacy_id: ZenCart ``products_id`` still referenced by old rows.
        name: Placeholder product name; the slug is derived from it.
        base_sku: Base SKU for the placeholder product.
        sku_suffix: Suffix for the placeholder variant.
        price: Variant price in cents.
        weight: Variant weight in milligrams.
    """

    legacy_id: int
    name: str
    base_sku: str
    sku_suffix: str = ""
    price: int = 0
    quantity: int = 0
    weight: int = 0


@dataclass(frozen=True)
class LegacyExceptionTable:
    """Ordered exception records consumed by the load stages."""

    recreated_products: Sequence[RecreatedProduct]
    deleted_products: Sequence[DeletedProduct]
    ignored_cart_product_ids: frozenset[int]
    excluded_sale_names: frozenset[str]


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_RECREATED_PRODUCTS: tuple[RecreatedProduct, ...] = (
    RecreatedProduct(1039, "92504", "", note="Allium Mix"),
    RecreatedProduct(1641, "92506", "", note="Asiatic & Turban Garlic Sampler"),
)

DEFAULT_DELETED_PRODUCTS: tuple[DeletedProduct, ...] = (
    DeletedProduct(1639, "Free 2013 Catalog & Garden Guide", "99001"),
    DeletedProduct(1811, "Lahontan White Softneck Garlic 8 oz.", "99965348", price=1195, weight=226),
)

# Product #1639 was deleted in ZenCart; old baskets still hold it.
DEFAULT_IGNORED_CART_PRODUCT_IDS: frozenset[int] = frozenset({1639})

DEFAULT_EXCLUDED_SALE_NAMES: frozenset[str] = frozenset({"", "GuardN Inoculant"})

DEFAULT_EXCEPTION_TABLE = LegacyExceptionTable(
    recreated_products=DEFAULT_RECREATED_PRODUCTS,
    deleted_products=DEFAULT_DELETED_PRODUCTS,
    ignored_cart_product_ids=DEFAULT_IGNORED_CART_PRODUCT_IDS,
    excluded_sale_names=DEFAULT_EXCLUDED_SALE_NAMES,
)


# ---------------------------------------------------------------------------
# Loading helpers
# ---------------------------------------------------------------------------


class ExceptionTableError(RuntimeError):
    """Raised when an exception table override cannot be parsed."""


def _load_override(path: Path) -> MutableMapping[str, object]:
    if not path.exists():
        raise ExceptionTableError(f"Exception table file {path} does not exist.")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem failure
        raise ExceptionTableError(f"Unable to read exception table file {path}: {exc}") from exc

    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)

    if not isinstance(data, Mapping):
        raise ExceptionTableError("Exception table override must be a JSON/YAML object.")
    return dict(data)


def _coerce_sequence(value: object, *, item_name: str) -> tuple:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(value)
    raise ExceptionTableError(f"Expected sequence for {item_name}, got {type(value).__name__}.")


def _coerce_int(value: object, *, item_name: str) -> int:
    if isinstance(value, bool):
        raise ExceptionTableError(f"{item_name} must be an integer.")
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ExceptionTableError(f"{item_name} must be an integer, got {value!r}.") from exc


def _coerce_recreated(raw: object) -> RecreatedProduct:
    if not isinstance(raw, Mapping):
        raise ExceptionTableError("Each recreated product must be an object.")
    legacy_id = _coerce_int(raw.get("legacy_id"), item_name="recreated_products.legacy_id")
    base_sku = str(raw.get("base_sku") or "").strip().upper()
    if not base_sku:
        raise ExceptionTableError(f"Recreated product {legacy_id} requires a base_sku.")
    return RecreatedProduct(
        legacy_id=legacy_id,
        base_sku=base_sku,
        sku_suffix=str(raw.get("sku_suffix") or "").strip().upper(),
        note=str(raw.get("note") or ""),
    )


def _coerce_deleted(raw: object) -> DeletedProduct:
    if not isinstance(raw, Mapping):
        raise ExceptionTableError("Each deleted product must be an object.")
    legacy_id = _coerce_int(raw.get("legacy_id"), item_name="deleted_products.legacy_id")
    name = str(raw.get("name") or "").strip()
    base_sku = str(raw.get("base_sku") or "").strip().upper()
    if not name or not base_sku:
        raise ExceptionTableError(f"Deleted product {legacy_id} requires a name and base_sku.")
    return DeletedProduct(
        legacy_id=legacy_id,
        name=name,
        base_sku=base_sku,
        sku_suffix=str(raw.get("sku_suffix") or "").strip().upper(),
        price=_coerce_int(raw.get("price", 0), item_name=f"deleted product {legacy_id} price"),
        quantity=_coerce_int(raw.get("quantity", 0), item_name=f"deleted product {legacy_id} quantity"),
        weight=_coerce_int(raw.get("weight", 0), item_name=f"deleted product {legacy_id} weight"),
    )


def _coerce_table(raw: Mapping[str, object]) -> LegacyExceptionTable:
    table = DEFAULT_EXCEPTION_TABLE
    recreated = table.recreated_products
    if "recreated_products" in raw:
        items = _coerce_sequence(raw["recreated_products"], item_name="recreated_products")
        recreated = tuple(_coerce_recreated(item) for item in items)
    deleted = table.deleted_products
    if "deleted_products" in raw:
        items = _coerce_sequence(raw["deleted_products"], item_name="deleted_products")
        deleted = tuple(_coerce_deleted(item) for item in items)
    ignored = table.ignored_cart_product_ids
    if "ignored_cart_product_ids" in raw:
        items = _coerce_sequence(raw["ignored_cart_product_ids"], item_name="ignored_cart_product_ids")
        ignored = frozenset(_coerce_int(item, item_name="ignored_cart_product_ids") for item in items)
    excluded = table.excluded_sale_names
    if "excluded_sale_names" in raw:
        items = _coerce_sequence(raw["excluded_sale_names"], item_name="excluded_sale_names")
        excluded = frozenset(str(item) for item in items)

    legacy_ids = [item.legacy_id for item in recreated] + [item.legacy_id for item in deleted]
    duplicates = sorted({legacy_id for legacy_id in legacy_ids if legacy_ids.count(legacy_id) > 1})
    if duplicates:
        raise ExceptionTableError(f"Legacy product IDs listed more than once: {duplicates}")

    return LegacyExceptionTable(
        recreated_products=recreated,
        deleted_products=deleted,
        ignored_cart_product_ids=ignored,
        excluded_sale_names=excluded,
    )


def load_exception_table(env: Mapping[str, str] | None = None) -> LegacyExceptionTable:
    """
    Load the active exception table.

    If ``MIGRATION_EXCEPTIONS_PATH`` is set, its JSON/YAML content overrides
    the matching default sections. Otherwise the built-in defaults are used.
    """

    env_map = env or {}
    override_path = env_map.get("MIGRATION_EXCEPTIONS_PATH")
    if not override_path:
        return DEFAULT_EXCEPTION_TABLE
    return _coerce_table(_load_override(Path(override_path)))


__all__ = [
    "DEFAULT_EXCEPTION_TABLE",
    "DeletedProduct",
    "ExceptionTableError",
    "LegacyExceptionTable",
    "RecreatedProduct",
    "load_exception_table",
]
