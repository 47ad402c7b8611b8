"""
Post-load integrity passes over carts.
"""

from __future__ import annotations

from sqlalchemy import delete, or_, select

from storefront.models import Cart, CartItem, Customer, Product, ProductVariant, db


def purge_inactive_cart_items(session=None) -> int:
    """
    Delete cart items whose variant, or the variant's product, is inactive.

    Returns the number of deleted items.
    """

    session = session or db.session
    inactive_variants = (
        select(ProductVariant.id)
        .join(Product, ProductVariant.product_id == Product.id)
        .where(or_(ProductVariant.is_active.is_(False), Product.is_active.is_(False)))
    )
    result = session.execute(
        delete(CartItem).where(CartItem.product_variant_id.in_(inactive_variants)),
        execution_options={"synchronize_session": False},
    )
    return result.rowcount or 0


def remove_inactive_variant_items(session=None) -> int:
    """Delete cart items pointing at inactive variants."""

    session = session or db.session
    inactive_variants = select(ProductVariant.id).where(ProductVariant.is_active.is_(False))
    result = session.execute(
        delete(CartItem).where(CartItem.product_variant_id.in_(inactive_variants)),
        execution_options={"synchronize_session": False},
    )
    return result.rowcount or 0


def remove_legacy_password_carts(session=None) -> int:
    """
    Delete carts (and their items) of customers who never logged in to the new site.

    Those customers still carry the legacy ``hash:salt`` password format.
    Returns the number of deleted carts.
    """

    session = session or db.session
    cart_ids = [
        cart_id
        for (cart_id,) in session.execute(
            select(Cart.id)
            .join(Customer, Cart.customer_id == Customer.id)
            .where(Customer.encrypted_password.like("%:%"))
        )
    ]
    if not cart_ids:
        return 0
    session.execute(
        delete(CartItem).where(CartItem.cart_id.in_(cart_ids)),
        execution_options={"synchronize_session": False},
    )
    result = session.execute(
        delete(Cart).where(Cart.id.in_(cart_ids)),
        execution_options={"synchronize_session": False},
    )
    return result.rowcount or 0


def clean_carts(session=None) -> dict:
    """Maintenance pass run outside the migration; returns deleted counts."""

    session = session or db.session
    return {
        "cart_items": remove_inactive_variant_items(session),
        "carts": remove_legacy_password_carts(session),
    }
