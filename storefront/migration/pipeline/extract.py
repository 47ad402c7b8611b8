"""
Read every legacy entity into staging records.

Extraction fully drains the legacy store before the destination is touched,
so decode errors abort the run before the wipe.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Tuple, TypeVar

from flask import current_app

from ..adapters import LegacySource
from ..contracts import (
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
    LegacyQuery,
)
from ..errors import RowDecodeError, ValueDecodeError
from ..settings import MigrationSettings
from . import decoders
from .records import (
    StagedAddress,
    StagedCart,
    StagedCartItem,
    StagedCategory,
    StagedCategorySale,
    StagedCoupon,
    StagedCustomer,
    StagedPage,
    StagedProduct,
    StagedProductSale,
    StagedSeedAttribute,
    StagedVariant,
)

T = TypeVar("T")


@dataclass
class LegacyDataset:
    """Decoded, not yet merged, legacy data."""

    categories: List[StagedCategory] = field(default_factory=list)
    category_sales: List[StagedCategorySale] = field(default_factory=list)
    products: List[StagedProduct] = field(default_factory=list)
    variants: List[StagedVariant] = field(default_factory=list)
    seed_attributes: List[StagedSeedAttribute] = field(default_factory=list)
    product_sales: List[StagedProductSale] = field(default_factory=list)
    pages: List[StagedPage] = field(default_factory=list)
    customers_with_accounts: List[StagedCustomer] = field(default_factory=list)
    customers_without_accounts: List[StagedCustomer] = field(default_factory=list)
    addresses: List[StagedAddress] = field(default_factory=list)
    carts: List[StagedCart] = field(default_factory=list)
    coupons: List[StagedCoupon] = field(default_factory=list)


def _decode_rows(
    source: LegacySource,
    query: LegacyQuery,
    decode: Callable[[Mapping[str, Any]], T],
    params: Mapping[str, Any] | None = None,
) -> Iterator[T]:
    for row_number, row in enumerate(source.fetch(query, params), start=1):
        try:
            yield decode(row)
        except ValueDecodeError as exc:
            raise RowDecodeError(query.name, row_number, str(exc), row=tuple(row.values())) from exc


def extract_categories(source: LegacySource) -> List[StagedCategory]:
    return list(_decode_rows(source, CATEGORIES, decoders.decode_category))


def extract_category_sales(source: LegacySource, settings: MigrationSettings) -> List[StagedCategorySale]:
    excluded = settings.exceptions.excluded_sale_names
    sales = _decode_rows(
        source,
        CATEGORY_SALES,
        lambda row: decoders.decode_category_sale(row, utc_offset_hours=settings.utc_offset_hours),
    )
    return [sale for sale in sales if sale.name not in excluded]


def _fetch_description(source: LegacySource, product_row: Mapping[str, Any], row_number: int) -> Mapping[str, Any]:
    legacy_id = product_row["products_id"]
    description = source.fetch_one(PRODUCT_DESCRIPTION, {"product_id": legacy_id})
    if description is None:
        raise RowDecodeError(
            PRODUCTS.name,
            row_number,
            f"no products_description row for product {legacy_id}",
            row=tuple(product_row.values()),
        )
    return description


def extract_products(source: LegacySource) -> Tuple[List[StagedProduct], List[StagedVariant]]:
    """
    Decode every product row into a product and a variant.

    Descriptions are fetched with one extra query per product.
    """

    products: List[StagedProduct] = []
    variants: List[StagedVariant] = []
    for row_number, row in enumerate(source.fetch(PRODUCTS), start=1):
        description = _fetch_description(source, row, row_number)
        try:
            product, variant = decoders.decode_product(row, description)
        except ValueDecodeError as exc:
            raise RowDecodeError(PRODUCTS.name, row_number, str(exc), row=tuple(row.values())) from exc
        products.append(product)
        variants.append(variant)
    return products, variants


def extract_seed_attributes(source: LegacySource) -> List[StagedSeedAttribute]:
    return list(_decode_rows(source, SEED_ATTRIBUTES, decoders.decode_seed_attribute))


def extract_product_sales(source: LegacySource, settings: MigrationSettings) -> List[StagedProductSale]:
    return list(
        _decode_rows(
            source,
            PRODUCT_SALES,
            lambda row: decoders.decode_product_sale(row, utc_offset_hours=settings.utc_offset_hours),
        )
    )


def extract_pages(source: LegacySource) -> List[StagedPage]:
    return [page for page in _decode_rows(source, PAGES, decoders.decode_page) if page.content]


def extract_store_credits(source: LegacySource) -> Dict[int, int]:
    """Map legacy customer IDs to positive store credit in cents; later rows win."""

    return dict(_decode_rows(source, STORE_CREDITS, decoders.decode_store_credit))


def extract_customers(
    source: LegacySource, settings: MigrationSettings
) -> Tuple[List[StagedCustomer], List[StagedCustomer]]:
    """Return customers with accounts and customers who checked out without one."""

    store_credits = extract_store_credits(source)

    def decode(row: Mapping[str, Any]) -> StagedCustomer:
        return decoders.decode_customer(row, store_credits=store_credits, admin_emails=settings.admin_emails)

    with_accounts = list(_decode_rows(source, CUSTOMERS, decode, {"cowoa": 0}))
    without_accounts = list(_decode_rows(source, CUSTOMERS, decode, {"cowoa": 1}))
    return with_accounts, without_accounts


def extract_addresses(source: LegacySource) -> List[StagedAddress]:
    return list(_decode_rows(source, ADDRESSES, decoders.decode_address))


def extract_carts(source: LegacySource) -> List[StagedCart]:
    """Group basket rows into one cart per legacy customer, ordered by customer ID."""

    baskets: Dict[int, List[StagedCartItem]] = {}
    for customer_id, product_id, quantity in _decode_rows(source, CART_ITEMS, decoders.decode_cart_item):
        baskets.setdefault(customer_id, []).append(StagedCartItem(product_id, quantity))
    return [StagedCart(customer_id, tuple(items)) for customer_id, items in sorted(baskets.items())]


def extract_coupons(source: LegacySource, settings: MigrationSettings) -> List[StagedCoupon]:
    return list(
        _decode_rows(
            source,
            COUPONS,
            lambda row: decoders.decode_coupon(row, utc_offset_hours=settings.utc_offset_hours),
        )
    )


def extract_legacy_dataset(source: LegacySource, settings: MigrationSettings) -> LegacyDataset:
    """Read and decode the whole legacy store."""

    logger = current_app.logger
    dataset = LegacyDataset()
    logger.info("Making Categories")
    dataset.categories = extract_categories(source)
    logger.info("Making Category Sales")
    dataset.category_sales = extract_category_sales(source, settings)
    logger.info("Making Products/Variants")
    dataset.products, dataset.variants = extract_products(source)
    logger.info("Making Product Sales")
    dataset.product_sales = extract_product_sales(source, settings)
    logger.info("Making Seed Attributes")
    dataset.seed_attributes = extract_seed_attributes(source)
    logger.info("Making Pages")
    dataset.pages = extract_pages(source)
    logger.info("Making Customers")
    dataset.customers_with_accounts, dataset.customers_without_accounts = extract_customers(source, settings)
    logger.info("Making Addresses")
    dataset.addresses = extract_addresses(source)
    logger.info("Making Carts")
    dataset.carts = extract_carts(source)
    logger.info("Making Coupons")
    dataset.coupons = extract_coupons(source, settings)
    return dataset
