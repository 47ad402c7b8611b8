"""
Insertion stages writing staging records into the destination schema.

Each stage receives the ID maps it reads from the orchestrator and returns
the map it builds. Unresolved optional references are logged and skipped;
unresolved required references raise.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from flask import current_app

from config.legacy_exceptions import DeletedProduct, LegacyExceptionTable, RecreatedProduct
from storefront.models import (
    Address,
    Cart,
    CartItem,
    Category,
    CategorySale,
    Coupon,
    Customer,
    Page,
    Product,
    ProductSale,
    ProductVariant,
    SeedAttribute,
    db,
)

from ..errors import VariantSkuConflictError
from .id_map import IdMap
from .normalize import slugify
from .records import (
    StagedAddress,
    StagedCart,
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
from .summary import MigrationSummary

# Suffix given to the inactive side of a variant SKU collision.
RESERVED_SKU_SUFFIX = "X"


def _claim_slug(taken: Set[str], slug: str, disambiguator: object) -> str:
    """Reserve ``slug``, appending the disambiguator (then a counter) on collision."""

    candidate = slug
    if candidate in taken:
        candidate = f"{slug}-{slugify(str(disambiguator))}".strip("-")
    counter = 2
    base = candidate
    while candidate in taken:
        candidate = f"{base}-{counter}"
        counter += 1
    taken.add(candidate)
    return candidate


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def insert_categories(categories: Iterable[StagedCategory], summary: MigrationSummary) -> IdMap[int]:
    """
    Insert categories in source order and map legacy category IDs.

    The source query orders parents first, so a parent's new ID is always in
    the map by the time its children are inserted.
    """

    session = db.session
    category_map: IdMap[int] = IdMap("category")
    slugs: Set[str] = set()
    for staged in categories:
        category = Category(
            name=staged.name,
            slug=_claim_slug(slugs, staged.slug, staged.legacy_id),
            parent_id=category_map.lookup(staged.legacy_parent_id),
            description=staged.description,
            image_url=staged.image_url,
            sort_order=staged.sort_order,
        )
        session.add(category)
        session.flush()
        category_map.register(staged.legacy_id, category.id)
        summary.record("categories", "inserted")
    return category_map


def insert_category_sales(
    sales: Iterable[StagedCategorySale],
    category_map: IdMap[int],
    summary: MigrationSummary,
) -> None:
    """Insert category sales; an unknown category ID aborts the run."""

    session = db.session
    for staged in sales:
        category_ids = [category_map.require(legacy_id, staged) for legacy_id in staged.legacy_category_ids]
        sale = CategorySale(
            name=staged.name,
            sale_type=staged.sale_type,
            amount=staged.amount,
            start_date=staged.start_date,
            end_date=staged.end_date,
        )
        sale.categories = [session.get(Category, category_id) for category_id in category_ids]
        session.add(sale)
        summary.record("category_sales", "inserted")
    session.flush()


def insert_products(
    products: Iterable[StagedProduct],
    category_map: IdMap[int],
    summary: MigrationSummary,
) -> IdMap[str]:
    """
    Insert merged products and map base SKUs to new product IDs.

    A product whose category is unknown is inserted without one.
    """

    session = db.session
    product_map: IdMap[str] = IdMap("product")
    slugs: Set[str] = set()
    for staged in products:
        product = Product(
            name=staged.name,
            slug=_claim_slug(slugs, staged.slug, staged.base_sku),
            base_sku=staged.base_sku,
            short_description=staged.short_description,
            long_description=staged.long_description,
            image_url=staged.image_url,
            is_active=staged.is_active,
        )
        category_id = category_map.lookup(staged.legacy_category_id)
        if category_id is None:
            current_app.logger.warning(
                "No category %s for product %s (%s); inserting uncategorized",
                staged.legacy_category_id,
                staged.legacy_id,
                staged.base_sku,
            )
        else:
            product.categories = [session.get(Category, category_id)]
        session.add(product)
        session.flush()
        product_map.register(staged.base_sku, product.id)
        summary.record("products", "inserted")
    return product_map


def _find_variant(product_id: int, sku_suffix: str) -> Optional[ProductVariant]:
    return (
        db.session.query(ProductVariant)
        .filter(ProductVariant.product_id == product_id, ProductVariant.sku_suffix == sku_suffix)
        .first()
    )


def _add_variant(staged: StagedVariant, product_id: int, sku_suffix: str) -> ProductVariant:
    variant = ProductVariant(
        product_id=product_id,
        sku_suffix=sku_suffix,
        price=staged.price,
        quantity=staged.quantity,
        weight=staged.weight,
        is_active=staged.is_active,
    )
    db.session.add(variant)
    db.session.flush()
    return variant


def insert_variant(staged: StagedVariant, product_id: int, summary: MigrationSummary) -> ProductVariant:
    """
    Insert one variant, resolving a (product, suffix) collision.

    An inactive incoming variant takes the reserved suffix. An active incoming
    variant displaces an inactive existing one onto the reserved suffix. Two
    active variants, or a rename onto an occupied reserved suffix, raise
    :class:`VariantSkuConflictError`.
    """

    existing = _find_variant(product_id, staged.sku_suffix)
    if existing is None:
        return _add_variant(staged, product_id, staged.sku_suffix)
    if not staged.is_active or not existing.is_active:
        occupant = _find_variant(product_id, RESERVED_SKU_SUFFIX)
        if occupant is not None:
            raise VariantSkuConflictError(staged, occupant)
    if not staged.is_active:
        summary.record("variants", "renamed")
        return _add_variant(staged, product_id, RESERVED_SKU_SUFFIX)
    if not existing.is_active:
        existing.sku_suffix = RESERVED_SKU_SUFFIX
        db.session.flush()
        summary.record("variants", "renamed")
        return _add_variant(staged, product_id, staged.sku_suffix)
    raise VariantSkuConflictError(staged, existing)


def _alias_recreated_product(
    recreated: RecreatedProduct,
    product_map: IdMap[str],
    variant_map: IdMap[int],
    summary: MigrationSummary,
) -> None:
    product_id = product_map.lookup(recreated.base_sku)
    if product_id is None:
        current_app.logger.warning("No product for recreated product: %s", recreated.legacy_id)
        summary.record("recreated_products", "skipped")
        return
    variant = _find_variant(product_id, recreated.sku_suffix)
    if variant is None:
        current_app.logger.warning("No variant for recreated product: %s", recreated.legacy_id)
        summary.record("recreated_products", "skipped")
        return
    variant_map.register(recreated.legacy_id, variant.id)
    summary.record("recreated_products", "inserted")


def _insert_deleted_product(
    deleted: DeletedProduct,
    slugs: Set[str],
    product_map: IdMap[str],
    variant_map: IdMap[int],
    summary: MigrationSummary,
) -> None:
    session = db.session
    product = Product(
        name=deleted.name,
        slug=_claim_slug(slugs, slugify(deleted.name), deleted.base_sku),
        base_sku=deleted.base_sku,
        short_description="",
        long_description="",
        image_url="",
        is_active=False,
    )
    session.add(product)
    session.flush()
    variant = ProductVariant(
        product_id=product.id,
        sku_suffix=deleted.sku_suffix,
        price=deleted.price,
        quantity=deleted.quantity,
        weight=deleted.weight,
        is_active=False,
    )
    session.add(variant)
    session.flush()
    product_map.register(deleted.base_sku, product.id)
    variant_map.register(deleted.legacy_id, variant.id)
    summary.record("deleted_products", "inserted")


def insert_variants(
    variants: Iterable[StagedVariant],
    product_map: IdMap[str],
    exceptions: LegacyExceptionTable,
    summary: MigrationSummary,
) -> IdMap[int]:
    """
    Insert variants and map legacy product IDs to new variant IDs.

    After the main pass the exception table aliases recreated products and
    inserts placeholders for deleted ones. Placeholder products are also
    registered in ``product_map``.
    """

    variant_map: IdMap[int] = IdMap("variant")
    for staged in variants:
        product_id = product_map.lookup(staged.base_sku)
        if product_id is None:
            current_app.logger.warning("No product for: %r", staged)
            summary.record("variants", "skipped")
            continue
        variant = insert_variant(staged, product_id, summary)
        variant_map.register(staged.legacy_product_id, variant.id)
        summary.record("variants", "inserted")

    for recreated in exceptions.recreated_products:
        _alias_recreated_product(recreated, product_map, variant_map, summary)
    slugs = {slug for (slug,) in db.session.query(Product.slug)}
    for deleted in exceptions.deleted_products:
        _insert_deleted_product(deleted, slugs, product_map, variant_map, summary)
    return variant_map


def insert_seed_attributes(
    attributes: Iterable[StagedSeedAttribute],
    product_map: IdMap[str],
    summary: MigrationSummary,
) -> None:
    session = db.session
    for staged in attributes:
        product_id = product_map.lookup(staged.base_sku)
        if product_id is None:
            current_app.logger.warning("No product for: %r", staged)
            summary.record("seed_attributes", "skipped")
            continue
        session.add(
            SeedAttribute(
                product_id=product_id,
                is_organic=staged.is_organic,
                is_heirloom=staged.is_heirloom,
                is_ecological=staged.is_ecological,
                is_regional=staged.is_regional,
            )
        )
        summary.record("seed_attributes", "inserted")
    session.flush()


def insert_product_sales(
    sales: Iterable[StagedProductSale],
    variant_map: IdMap[int],
    summary: MigrationSummary,
) -> None:
    session = db.session
    for staged in sales:
        variant_id = variant_map.lookup(staged.legacy_product_id)
        if variant_id is None:
            current_app.logger.warning("Could not find old variant ID: %s", staged.legacy_product_id)
            summary.record("product_sales", "skipped")
            continue
        session.add(
            ProductSale(
                price=staged.price,
                product_variant_id=variant_id,
                start_date=staged.start_date,
                end_date=staged.end_date,
            )
        )
        summary.record("product_sales", "inserted")
    session.flush()


def insert_pages(pages: Iterable[StagedPage], summary: MigrationSummary) -> None:
    session = db.session
    slugs: Set[str] = set()
    for index, staged in enumerate(pages, start=1):
        session.add(Page(name=staged.name, slug=_claim_slug(slugs, staged.slug, index), content=staged.content))
        summary.record("pages", "inserted")
    session.flush()


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------


def insert_customers(customers: Iterable[StagedCustomer], summary: MigrationSummary) -> IdMap[int]:
    """Insert merged customers, registering every merged legacy ID."""

    session = db.session
    customer_map: IdMap[int] = IdMap("customer")
    for staged in customers:
        customer = Customer(
            email=staged.email,
            store_credit=staged.store_credit,
            member_number=staged.member_number,
            encrypted_password=staged.encrypted_password,
            auth_token=staged.auth_token,
            stripe_id=None,
            is_admin=staged.is_admin,
        )
        session.add(customer)
        session.flush()
        customer_map.register_many(staged.legacy_ids, customer.id)
        if len(staged.legacy_ids) > 1:
            current_app.logger.debug(
                "Merged legacy customers %s into %s", customer_map.keys_for(customer.id), staged.email
            )
        summary.record("customers", "inserted")
    return customer_map


def insert_address(staged: StagedAddress, customer_id: int, summary: MigrationSummary) -> Optional[Address]:
    """
    Insert an address unless an identical one exists for the customer.

    Only the first default address per (customer, type) keeps its flag.
    """

    session = db.session
    duplicate = (
        session.query(Address.id)
        .filter(
            Address.customer_id == customer_id,
            Address.address_type == staged.address_type,
            Address.first_name == staged.first_name,
            Address.last_name == staged.last_name,
            Address.company_name == staged.company_name,
            Address.address_one == staged.address_one,
            Address.address_two == staged.address_two,
            Address.city == staged.city,
            Address.region_type == staged.region_type,
            Address.region == staged.region,
            Address.zip_code == staged.zip_code,
            Address.country == staged.country,
        )
        .first()
    )
    if duplicate is not None:
        summary.record("addresses", "merged")
        return None

    already_default = (
        session.query(Address.id)
        .filter(
            Address.customer_id == customer_id,
            Address.address_type == staged.address_type,
            Address.is_default.is_(True),
        )
        .first()
        is not None
    )
    address = Address(
        first_name=staged.first_name,
        last_name=staged.last_name,
        company_name=staged.company_name,
        address_one=staged.address_one,
        address_two=staged.address_two,
        city=staged.city,
        region_type=staged.region_type,
        region=staged.region,
        zip_code=staged.zip_code,
        country=staged.country,
        is_default=staged.is_default and not already_default,
        address_type=staged.address_type,
        customer_id=customer_id,
        is_active=True,
    )
    session.add(address)
    session.flush()
    summary.record("addresses", "inserted")
    return address


def insert_addresses(
    addresses: Iterable[StagedAddress],
    customer_map: IdMap[int],
    summary: MigrationSummary,
) -> None:
    """Insert addresses; an address for an unknown customer aborts the run."""

    for staged in addresses:
        customer_id = customer_map.require(staged.legacy_customer_id, staged)
        insert_address(staged, customer_id, summary)


# ---------------------------------------------------------------------------
# Carts & coupons
# ---------------------------------------------------------------------------


def upsert_customer_cart(customer_id: int) -> Cart:
    session = db.session
    cart = session.query(Cart).filter(Cart.customer_id == customer_id).first()
    if cart is None:
        cart = Cart(customer_id=customer_id, session_token=None, expiration_time=None)
        session.add(cart)
        session.flush()
    return cart


def upsert_cart_item(cart_id: int, variant_id: int, quantity: int) -> CartItem:
    """Insert a cart item, or add ``quantity`` to the existing (cart, variant) row."""

    session = db.session
    item = (
        session.query(CartItem)
        .filter(CartItem.cart_id == cart_id, CartItem.product_variant_id == variant_id)
        .first()
    )
    if item is None:
        item = CartItem(cart_id=cart_id, product_variant_id=variant_id, quantity=quantity)
        session.add(item)
    else:
        item.quantity += quantity
    session.flush()
    return item


def insert_carts(
    carts: Iterable[StagedCart],
    variant_map: IdMap[int],
    customer_map: IdMap[int],
    exceptions: LegacyExceptionTable,
    summary: MigrationSummary,
) -> None:
    """
    Insert one cart per legacy customer.

    Unknown customers and variants are logged and skipped; basket rows for
    products listed in ``ignored_cart_product_ids`` are dropped silently.
    """

    logger = current_app.logger
    for staged in carts:
        customer_id = customer_map.lookup(staged.legacy_customer_id)
        if customer_id is None:
            logger.warning("Could not find customer for cart: %s", staged.legacy_customer_id)
            summary.record("carts", "skipped")
            continue
        cart = upsert_customer_cart(customer_id)
        summary.record("carts", "inserted")
        for item in staged.items:
            variant_id = variant_map.lookup(item.legacy_product_id)
            if variant_id is None:
                if item.legacy_product_id not in exceptions.ignored_cart_product_ids:
                    logger.warning("Could not find variant for cart item: %s", item.legacy_product_id)
                summary.record("cart_items", "skipped")
                continue
            upsert_cart_item(cart.id, variant_id, item.quantity)
            summary.record("cart_items", "inserted")


def insert_coupons(coupons: List[StagedCoupon], summary: MigrationSummary) -> None:
    session = db.session
    session.add_all(
        Coupon(
            code=staged.code,
            name=staged.name,
            description=staged.description,
            is_active=staged.is_active,
            discount_type=staged.discount_type,
            discount_amount=staged.discount_amount,
            minimum_order=staged.minimum_order,
            expiration_date=staged.expiration_date,
            total_uses=staged.total_uses,
            uses_per_customer=staged.uses_per_customer,
            legacy_created_at=staged.legacy_created_at,
        )
        for staged in coupons
    )
    session.flush()
    summary.record("coupons", "inserted", len(coupons))
