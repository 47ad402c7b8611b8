from __future__ import annotations

import copy
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping

import pytest

from config.legacy_exceptions import DEFAULT_EXCEPTION_TABLE
from storefront.migration.adapters import LegacySource
from storefront.migration.settings import MigrationSettings

# Query parameters and the legacy column each one filters on.
PARAM_COLUMNS = {
    "product_id": "products_id",
    "cowoa": "COWOA_account",
}


class FakeLegacySource(LegacySource):
    """
    In-memory legacy store.

    Rows are dicts keyed by query name; values are projected onto the query's
    declared columns, so missing keys read as NULL and extra keys (such as
    ``COWOA_account``) are only used for parameter filtering.
    """

    def __init__(self, tables: Mapping[str, List[Dict[str, Any]]]) -> None:
        self.tables = tables
        self.executed: List[str] = []
        self.closed = False

    def _execute(self, query, params):
        self.executed.append(query.name)
        for row in self.tables.get(query.name, []):
            if any(row.get(PARAM_COLUMNS[name]) != value for name, value in params.items()):
                continue
            yield tuple(row.get(column) for column in query.column_names)

    def close(self) -> None:
        self.closed = True


def seed_tables() -> Dict[str, List[Dict[str, Any]]]:
    """A small legacy store exercising every merge, rename and skip path."""

    return {
        "categories": [
            {
                "categories_id": 1,
                "categories_image": "images/categories/tomatoes.jpg",
                "parent_id": 0,
                "sort_order": 1,
                "categories_name": "Tomatoes",
                "categories_description": "Red and ripe",
            },
            {
                "categories_id": 2,
                "categories_image": None,
                "parent_id": 1,
                "sort_order": None,
                "categories_name": "Heirloom Tomatoes",
                "categories_description": None,
            },
            {
                "categories_id": 3,
                "categories_image": "",
                "parent_id": 0,
                "sort_order": 2,
                "categories_name": "Potatoes",
                "categories_description": "",
            },
            {
                "categories_id": 4,
                "categories_image": "",
                "parent_id": 0,
                "sort_order": 3,
                "categories_name": "Request a Catalog",
                "categories_description": "",
            },
        ],
        "category_sales": [
            {
                "sale_name": "Spring Sale",
                "sale_deduction_value": Decimal("10.0000"),
                "sale_deduction_type": 1,
                "sale_categories_selected": "1,2,",
                "sale_date_start": date(2020, 3, 1),
                "sale_date_end": date(2020, 3, 31),
            },
            {
                "sale_name": "GuardN Inoculant",
                "sale_deduction_value": Decimal("1.0000"),
                "sale_deduction_type": 0,
                "sale_categories_selected": "1",
                "sale_date_start": date(2020, 3, 1),
                "sale_date_end": date(2020, 3, 31),
            },
        ],
        "products": [
            {
                "products_id": 101,
                "master_categories_id": 2,
                "products_price": Decimal("3.5000"),
                "products_quantity": 10.0,
                "products_weight": 0.05,
                "products_model": "12345A",
                "products_image": "images/products/cherokee.jpg",
                "products_status": 1,
            },
            {
                "products_id": 102,
                "master_categories_id": 2,
                "products_price": Decimal("9.9500"),
                "products_quantity": 2.7,
                "products_weight": 0.5,
                "products_model": "12345B",
                "products_image": "images/products/cherokee.jpg",
                "products_status": 1,
            },
            {
                "products_id": 103,
                "master_categories_id": 2,
                "products_price": Decimal("3.0000"),
                "products_quantity": 0.0,
                "products_weight": 0.05,
                "products_model": "12345a",
                "products_image": None,
                "products_status": 0,
            },
            {
                "products_id": 104,
                "master_categories_id": 3,
                "products_price": Decimal("6.0000"),
                "products_quantity": 1.0,
                "products_weight": 2.0,
                "products_model": "22222",
                "products_image": None,
                "products_status": 0,
            },
            {
                "products_id": 105,
                "master_categories_id": 99,
                "products_price": Decimal("2.0000"),
                "products_quantity": 4.0,
                "products_weight": None,
                "products_model": "33333",
                "products_image": None,
                "products_status": 1,
            },
        ],
        "product_description": [
            {"products_id": 101, "products_name": "Cherokee Purple", "products_description": "<p>Dusky</p>"},
            {"products_id": 102, "products_name": "Cherokee Purple", "products_description": "<p>Dusky</p>"},
            {"products_id": 103, "products_name": "Cherokee Purple", "products_description": None},
            {"products_id": 104, "products_name": "", "products_description": ""},
            {"products_id": 105, "products_name": "Mystery Seed", "products_description": ""},
        ],
        "seed_attributes": [
            {
                "products_id": 101,
                "products_model": "12345A",
                "is_eco": 1,
                "is_organic": 0,
                "is_heirloom": 1,
                "is_southern": None,
            },
            {
                "products_id": 102,
                "products_model": "12345B",
                "is_eco": 0,
                "is_organic": 1,
                "is_heirloom": 0,
                "is_southern": 1,
            },
            {
                "products_id": 999,
                "products_model": "77777",
                "is_eco": 1,
                "is_organic": 1,
                "is_heirloom": 1,
                "is_southern": 1,
            },
        ],
        "product_sales": [
            {
                "products_id": 101,
                "specials_new_products_price": Decimal("2.9900"),
                "expires_date": date(2020, 6, 30),
                "specials_date_available": date(2020, 6, 1),
            },
            {
                "products_id": 5555,
                "specials_new_products_price": Decimal("1.0000"),
                "expires_date": date(2020, 6, 30),
                "specials_date_available": date(2020, 6, 1),
            },
        ],
        "pages": [
            {"pages_title": "About Us", "pages_html_text": "<p>Seeds since 1982</p>"},
            {"pages_title": "Empty Page", "pages_html_text": None},
        ],
        "store_credits": [
            {"customer_id": 1, "amount": Decimal("5.0000")},
            {"customer_id": 2, "amount": Decimal("3.0000")},
        ],
        "customers": [
            {"customers_id": 1, "customers_email_address": "alice@example.com", "COWOA_account": 0},
            {"customers_id": 2, "customers_email_address": "alice@example.com", "COWOA_account": 0},
            {"customers_id": 3, "customers_email_address": "gardens@southernexposure.com", "COWOA_account": 0},
            {"customers_id": 4, "customers_email_address": "bob@example.com", "COWOA_account": 1},
        ],
        "addresses": [
            {
                "address_book_id": 10,
                "entry_firstname": "Alice",
                "entry_lastname": "Smith",
                "entry_company": None,
                "entry_street_address": "1 Main St",
                "entry_suburb": "Louisa",
                "entry_postcode": "23093",
                "entry_city": "Louisa",
                "entry_state": "",
                "zone_name": "Virginia",
                "countries_iso_code_2": "US",
                "customers_id": 1,
                "customers_default_address_id": 10,
            },
            {
                "address_book_id": 11,
                "entry_firstname": "Alice",
                "entry_lastname": "Smith",
                "entry_company": None,
                "entry_street_address": "1 Main St",
                "entry_suburb": "",
                "entry_postcode": "23093",
                "entry_city": "Louisa",
                "entry_state": "",
                "zone_name": "Virginia",
                "countries_iso_code_2": "US",
                "customers_id": 2,
                "customers_default_address_id": 11,
            },
            {
                "address_book_id": 12,
                "entry_firstname": "Alice",
                "entry_lastname": "Smith",
                "entry_company": "Smith Farms",
                "entry_street_address": "2 Oak Ave",
                "entry_suburb": "",
                "entry_postcode": "M5V 2T6",
                "entry_city": "Toronto",
                "entry_state": "Ontario",
                "zone_name": None,
                "countries_iso_code_2": "CA",
                "customers_id": 2,
                "customers_default_address_id": 12,
            },
            {
                "address_book_id": 13,
                "entry_firstname": "Bob",
                "entry_lastname": "Jones",
                "entry_company": None,
                "entry_street_address": "Kaya Grandi 1",
                "entry_suburb": None,
                "entry_postcode": "",
                "entry_city": "Kralendijk",
                "entry_state": "Bonaire",
                "zone_name": None,
                "countries_iso_code_2": "AN",
                "customers_id": 4,
                "customers_default_address_id": None,
            },
        ],
        "cart_items": [
            {"customers_id": 1, "products_id": "101:abc123", "customers_basket_quantity": 2.0},
            {"customers_id": 1, "products_id": "101:def456", "customers_basket_quantity": 3.0},
            {"customers_id": 1, "products_id": "103", "customers_basket_quantity": 1.0},
            {"customers_id": 1, "products_id": "4242", "customers_basket_quantity": 1.0},
            {"customers_id": 4, "products_id": "105", "customers_basket_quantity": 1.4},
            {"customers_id": 77, "products_id": "101", "customers_basket_quantity": 1.0},
        ],
        "coupons": [
            {
                "coupon_id": 1,
                "coupon_type": "P",
                "coupon_code": "SPRING10",
                "coupon_amount": Decimal("10.5000"),
                "coupon_minimum_order": Decimal("25.0000"),
                "coupon_expire_date": datetime(2021, 1, 1, 0, 0),
                "uses_per_coupon": 100,
                "uses_per_user": 1,
                "coupon_active": "Y",
                "date_created": datetime(2020, 1, 1, 9, 30),
                "coupon_name": "Spring",
                "coupon_description": "Ten percent off",
            },
            {
                "coupon_id": 2,
                "coupon_type": "S",
                "coupon_code": "SHIPFREE",
                "coupon_amount": None,
                "coupon_minimum_order": None,
                "coupon_expire_date": datetime(2021, 1, 1, 0, 0),
                "uses_per_coupon": None,
                "uses_per_user": None,
                "coupon_active": "N",
                "date_created": datetime(2020, 1, 1, 9, 30),
                "coupon_name": None,
                "coupon_description": None,
            },
        ],
    }


@pytest.fixture
def legacy_tables():
    return copy.deepcopy(seed_tables())


@pytest.fixture
def legacy_source(legacy_tables):
    return FakeLegacySource(legacy_tables)


@pytest.fixture
def migration_settings():
    return MigrationSettings(
        utc_offset_hours=-5,
        admin_emails=frozenset({"gardens@southernexposure.com"}),
        exceptions=DEFAULT_EXCEPTION_TABLE,
    )


@pytest.fixture
def make_legacy_source():
    return FakeLegacySource
