"""
Seed the fixed checkout charges after the catalog is loaded.
"""

from __future__ import annotations

from typing import List, Sequence

from flask import current_app

from config import charges
from storefront.models import Category, RegionType, ShippingMethod, Surcharge, TaxRate, db

from .summary import MigrationSummary


def _categories_by_slug(slugs: Sequence[str]) -> List[Category]:
    if not slugs:
        return []
    return db.session.query(Category).filter(Category.slug.in_(list(slugs))).order_by(Category.id).all()


def insert_tax_rates(summary: MigrationSummary) -> None:
    seed = charges.VA_SALES_TAX
    db.session.add(
        TaxRate(
            description=seed.description,
            rate=seed.rate,
            country=seed.country,
            region_type=RegionType.US_STATE if seed.region else None,
            region=seed.region,
            excluded_product_ids=[],
            is_active=True,
        )
    )
    summary.record("tax_rates", "inserted")


def insert_surcharges(summary: MigrationSummary) -> None:
    for seed in charges.SURCHARGES:
        categories = _categories_by_slug(seed.category_slugs)
        if seed.require_all and len(categories) < len(seed.category_slugs):
            current_app.logger.info("Skipping %s; categories %s not found", seed.description, seed.category_slugs)
            summary.record("surcharges", "skipped")
            continue
        surcharge = Surcharge(
            description=seed.description,
            single_fee=seed.single_fee,
            multiple_fee=seed.multiple_fee,
            is_active=True,
        )
        surcharge.categories = categories
        db.session.add(surcharge)
        summary.record("surcharges", "inserted")


def insert_shipping_methods(summary: MigrationSummary) -> None:
    excluded = _categories_by_slug(charges.PRIORITY_EXCLUDED_CATEGORY_SLUGS)
    for seed in charges.SHIPPING_METHODS:
        categories = _categories_by_slug(seed.category_slugs)
        if len(categories) < len(seed.category_slugs):
            current_app.logger.info("Skipping %s; categories %s not found", seed.description, seed.category_slugs)
            summary.record("shipping_methods", "skipped")
            continue
        method = ShippingMethod(
            description=seed.description,
            countries=list(seed.countries),
            rates=[rate.as_dict() for rate in seed.rates],
            priority_fee=charges.PRIORITY_SHIPPING_FEE,
            priority_percent=charges.PRIORITY_SHIPPING_PERCENT,
            is_active=True,
            priority=seed.priority,
        )
        method.categories = categories
        method.priority_excluded_categories = list(excluded)
        db.session.add(method)
        summary.record("shipping_methods", "inserted")


def insert_charges(summary: MigrationSummary) -> None:
    """Insert the VA sales tax, category surcharges and shipping methods."""

    insert_tax_rates(summary)
    insert_surcharges(summary)
    insert_shipping_methods(summary)
    db.session.flush()
