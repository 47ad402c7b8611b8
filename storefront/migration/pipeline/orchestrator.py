"""
Run the whole legacy migration: extract, merge, wipe, load, integrity.

Only this module holds the ID maps; each load stage is handed the maps it
reads and returns the one it builds.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from flask import current_app

from storefront.models import db

from .. import metrics
from ..adapters import LegacySource
from ..settings import MigrationSettings
from . import load
from .charges import insert_charges
from .extract import LegacyDataset, extract_legacy_dataset
from .integrity import purge_inactive_cart_items
from .merge import dedupe_seed_attributes, merge_customers, merge_products
from .summary import MigrationSummary
from .wipe import wipe_destination


@contextmanager
def _stage(label: str) -> Iterator[None]:
    current_app.logger.info(label)
    started = time.perf_counter()
    try:
        yield
    finally:
        metrics.record_stage_duration(label, time.perf_counter() - started)


def merge_dataset(dataset: LegacyDataset, summary: MigrationSummary) -> LegacyDataset:
    """Collapse products by base SKU, customers by email and seed attributes by base SKU."""

    products = merge_products(dataset.products)
    summary.record("products", "merged", len(dataset.products) - len(products))

    raw_customers = len(dataset.customers_with_accounts) + len(dataset.customers_without_accounts)
    customers = merge_customers(dataset.customers_with_accounts, dataset.customers_without_accounts)
    summary.record("customers", "merged", raw_customers - len(customers))

    seed_attributes = dedupe_seed_attributes(dataset.seed_attributes)
    summary.record("seed_attributes", "merged", len(dataset.seed_attributes) - len(seed_attributes))

    dataset.products = products
    dataset.customers_with_accounts = customers
    dataset.customers_without_accounts = []
    dataset.seed_attributes = seed_attributes
    return dataset


def load_dataset(dataset: LegacyDataset, settings: MigrationSettings, summary: MigrationSummary) -> None:
    """Insert a merged dataset into an empty destination, in dependency order."""

    with _stage("Inserting Categories"):
        category_map = load.insert_categories(dataset.categories, summary)
    with _stage("Inserting Category Sales"):
        load.insert_category_sales(dataset.category_sales, category_map, summary)
    with _stage("Inserting Products"):
        product_map = load.insert_products(dataset.products, category_map, summary)
    with _stage("Inserting Variants"):
        variant_map = load.insert_variants(dataset.variants, product_map, settings.exceptions, summary)
    with _stage("Inserting Seed Attributes"):
        load.insert_seed_attributes(dataset.seed_attributes, product_map, summary)
    with _stage("Inserting Product Sales"):
        load.insert_product_sales(dataset.product_sales, variant_map, summary)
    with _stage("Inserting Pages"):
        load.insert_pages(dataset.pages, summary)
    with _stage("Inserting Customers"):
        customer_map = load.insert_customers(dataset.customers_with_accounts, summary)
    with _stage("Inserting Addresses"):
        load.insert_addresses(dataset.addresses, customer_map, summary)
    with _stage("Inserting Charges"):
        insert_charges(summary)
    with _stage("Inserting Carts"):
        load.insert_carts(dataset.carts, variant_map, customer_map, settings.exceptions, summary)
    with _stage("Removing Inactive Cart Items"):
        summary.cart_items_purged = purge_inactive_cart_items()
    with _stage("Inserting Coupons"):
        load.insert_coupons(dataset.coupons, summary)


def run_migration(source: LegacySource, settings: MigrationSettings) -> MigrationSummary:
    """
    Replace the destination contents with the migrated legacy store.

    The legacy store is fully read and decoded before the destination is
    touched. The wipe and every insert share one transaction: on any error
    it is rolled back and the error re-raised, leaving the previous contents
    in place.
    """

    logger = current_app.logger
    summary = MigrationSummary()
    session = db.session
    try:
        dataset = extract_legacy_dataset(source, settings)
        dataset = merge_dataset(dataset, summary)
        with _stage("Clearing Database"):
            summary.rows_wiped = wipe_destination(session)
        load_dataset(dataset, settings, summary)
        session.commit()
    except Exception:
        session.rollback()
        metrics.record_run("failure")
        logger.exception("Migration aborted; destination rolled back")
        raise
    metrics.record_run("success")
    logger.info("Migration complete")
    return summary
