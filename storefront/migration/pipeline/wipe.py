"""
Destructive wipe of the destination schema before a load.
"""

from __future__ import annotations

from typing import Sequence

from flask import current_app
from sqlalchemy import Table, delete

from storefront.models import (
    Address,
    Cart,
    CartItem,
    Category,
    CategorySale,
    Coupon,
    Customer,
    Order,
    OrderLineItem,
    OrderProduct,
    Page,
    Product,
    ProductSale,
    ProductVariant,
    SeedAttribute,
    ShippingMethod,
    Surcharge,
    TaxRate,
    category_sale_categories,
    db,
    product_categories,
    shipping_method_categories,
    shipping_method_excluded_categories,
    surcharge_categories,
)

# Children before parents.
WIPE_ORDER: Sequence[Table] = tuple(
    getattr(item, "__table__", item)
    for item in (
        SeedAttribute,
        ProductSale,
        category_sale_categories,
        CategorySale,
        Coupon,
        TaxRate,
        surcharge_categories,
        Surcharge,
        shipping_method_categories,
        shipping_method_excluded_categories,
        ShippingMethod,
        CartItem,
        Cart,
        OrderProduct,
        OrderLineItem,
        Order,
        Address,
        ProductVariant,
        product_categories,
        Product,
        Category,
        Page,
        Customer,
    )
)


def wipe_destination(session=None) -> int:
    """
    Delete every row the migration owns, in reverse dependency order.

    Returns the number of rows deleted. Runs inside the caller's transaction.
    """

    session = session or db.session
    total = 0
    for table in WIPE_ORDER:
        if table is Category.__table__:
            # Self-referencing parents; detach before the bulk delete.
            session.execute(Category.__table__.update().values(parent_id=None))
        result = session.execute(delete(table))
        deleted = result.rowcount or 0
        if deleted:
            current_app.logger.debug("Cleared %d rows from %s", deleted, table.name)
        total += deleted
    # Instances of the deleted rows must not collide with reused primary keys.
    session.expunge_all()
    return total
