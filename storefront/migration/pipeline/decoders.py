"""
Row decoders: contract-validated legacy rows to staging records.

Decoders are pure apart from customer auth tokens. They raise :class:`ValueDecodeError` for values that
cannot be normalized; the extract stage attaches the query and row context.
"""

from __future__ import annotations

import math
import uuid
from decimal import Decimal
from typing import Any, Mapping

from storefront.models.enums import AddressType, DiscountType, SaleType

from ..errors import ValueDecodeError
from .normalize import (
    day_to_utc,
    dollars_to_cents,
    floor_int,
    local_to_utc,
    parse_basket_product_id,
    resolve_country,
    resolve_region,
    slugify,
    split_sku,
    take_file_name,
)
from .records import (
    StagedAddress,
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

Row = Mapping[str, Any]


def decode_category(row: Row) -> StagedCategory:
    name = row["categories_name"]
    return StagedCategory(
        legacy_id=row["categories_id"],
        legacy_parent_id=row["parent_id"],
        name=name,
        slug=slugify(name),
        description=row["categories_description"],
        image_url=take_file_name(row["categories_image"]),
        sort_order=row["sort_order"],
    )


def parse_category_ids(raw: str) -> tuple[int, ...]:
    """Parse a comma-separated category list, ignoring empty items."""

    ids = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            ids.append(int(item))
        except ValueError as exc:
            raise ValueDecodeError("sale category ID", item) from exc
    return tuple(ids)


def decode_category_sale(row: Row, *, utc_offset_hours: int) -> StagedCategorySale:
    deduction: Decimal = row["sale_deduction_value"]
    deduction_type = row["sale_deduction_type"]
    if deduction_type == 0:
        sale_type = SaleType.FLAT
    elif deduction_type == 1:
        sale_type = SaleType.PERCENT
    else:
        raise ValueDecodeError("category sale type", deduction_type)
    return StagedCategorySale(
        legacy_category_ids=parse_category_ids(row["sale_categories_selected"]),
        name=row["sale_name"],
        sale_type=sale_type,
        amount=floor_int(deduction),
        start_date=day_to_utc(row["sale_date_start"], utc_offset_hours),
        end_date=day_to_utc(row["sale_date_end"], utc_offset_hours),
    )


def decode_product(row: Row, description: Row) -> tuple[StagedProduct, StagedVariant]:
    """
    Decode a product row and its description into a product and its variant.

    Every legacy product row is one variant; products sharing a base SKU are
    merged later.
    """

    legacy_id = row["products_id"]
    name = description["products_name"] or f"Inactive Product - {legacy_id}"
    base_sku, sku_suffix = split_sku(row["products_model"])
    base_sku = base_sku.upper()
    is_active = row["products_status"] == 1
    product = StagedProduct(
        legacy_id=legacy_id,
        legacy_category_id=row["master_categories_id"],
        name=name,
        slug=slugify(name),
        base_sku=base_sku,
        short_description="",
        long_description=description["products_description"],
        image_url=take_file_name(row["products_image"]),
        is_active=is_active,
    )
    variant = StagedVariant(
        legacy_product_id=legacy_id,
        base_sku=base_sku,
        sku_suffix=sku_suffix.upper(),
        price=dollars_to_cents(row["products_price"]),
        quantity=math.floor(row["products_quantity"]),
        weight=round(1000 * row["products_weight"]),
        is_active=is_active,
    )
    return product, variant


def decode_seed_attribute(row: Row) -> StagedSeedAttribute:
    base_sku, _ = split_sku(row["products_model"])
    return StagedSeedAttribute(
        base_sku=base_sku.upper(),
        is_organic=row["is_organic"] == 1,
        is_heirloom=row["is_heirloom"] == 1,
        is_ecological=row["is_eco"] == 1,
        is_regional=row["is_southern"] == 1,
    )


def decode_product_sale(row: Row, *, utc_offset_hours: int) -> StagedProductSale:
    return StagedProductSale(
        legacy_product_id=row["products_id"],
        price=dollars_to_cents(row["specials_new_products_price"]),
        start_date=day_to_utc(row["specials_date_available"], utc_offset_hours),
        end_date=day_to_utc(row["expires_date"], utc_offset_hours),
    )


def decode_page(row: Row) -> StagedPage:
    name = row["pages_title"]
    return StagedPage(name=name, slug=slugify(name), content=row["pages_html_text"])


def decode_address(row: Row) -> StagedAddress:
    city = row["entry_city"]
    address_two = row["entry_suburb"]
    if address_two == city:
        address_two = ""
    zone = row["zone_name"]
    if zone is None:
        zone = row["entry_state"]
    country = resolve_country(row["countries_iso_code_2"], zone)
    region = resolve_region(country, zone)
    return StagedAddress(
        legacy_id=row["address_book_id"],
        legacy_customer_id=row["customers_id"],
        first_name=row["entry_firstname"],
        last_name=row["entry_lastname"],
        company_name=row["entry_company"],
        address_one=row["entry_street_address"],
        address_two=address_two,
        city=city,
        region_type=region.region_type,
        region=region.code,
        zip_code=row["entry_postcode"],
        country=country,
        is_default=row["customers_default_address_id"] == row["address_book_id"],
        address_type=AddressType.SHIPPING,
    )


def decode_cart_item(row: Row) -> tuple[int, int, int]:
    """Return ``(legacy customer id, legacy product id, quantity)``."""

    return (
        row["customers_id"],
        parse_basket_product_id(row["products_id"]),
        round(row["customers_basket_quantity"]),
    )


def decode_coupon(row: Row, *, utc_offset_hours: int) -> StagedCoupon:
    coupon_type = row["coupon_type"]
    amount: Decimal = row["coupon_amount"]
    if coupon_type == "S":
        discount_type, discount_amount = DiscountType.FREE_SHIPPING, 0
    elif coupon_type == "P":
        discount_type, discount_amount = DiscountType.PERCENTAGE, floor_int(amount)
    elif coupon_type == "F":
        discount_type, discount_amount = DiscountType.FLAT, floor_int(amount * 100)
    else:
        raise ValueDecodeError("coupon type", coupon_type)
    return StagedCoupon(
        code=row["coupon_code"],
        name=row["coupon_name"],
        description=row["coupon_description"],
        is_active=row["coupon_active"] == "Y",
        discount_type=discount_type,
        discount_amount=discount_amount,
        minimum_order=floor_int(row["coupon_minimum_order"] * 100),
        expiration_date=local_to_utc(row["coupon_expire_date"], utc_offset_hours),
        total_uses=row["uses_per_coupon"],
        uses_per_customer=row["uses_per_user"],
        legacy_created_at=local_to_utc(row["date_created"], utc_offset_hours),
    )


def decode_store_credit(row: Row) -> tuple[int, int]:
    """Return ``(legacy customer id, credit in cents)``."""

    return row["customer_id"], dollars_to_cents(row["amount"])


def decode_customer(
    row: Row,
    *,
    store_credits: Mapping[int, int],
    admin_emails: frozenset[str],
) -> StagedCustomer:
    legacy_id = row["customers_id"]
    email = row["customers_email_address"]
    return StagedCustomer(
        legacy_ids=(legacy_id,),
        email=email,
        store_credit=store_credits.get(legacy_id, 0),
        member_number="",
        encrypted_password="",
        auth_token=uuid.uuid4().hex,
        is_admin=email in admin_emails,
    )
