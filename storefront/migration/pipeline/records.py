"""
Staging records produced by the decoders.

Records are immutable and only live for one run. Legacy keys are kept on the
record so the load stages can resolve them through the ID maps.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from storefront.models.enums import AddressType, DiscountType, RegionType, SaleType


@dataclass(frozen=True)
class StagedCategory:
    legacy_id: int
    legacy_parent_id: int
    name: str
    slug: str
    description: str
    image_url: str
    sort_order: int


@dataclass(frozen=True)
class StagedCategorySale:
    legacy_category_ids: Tuple[int, ...]
    name: str
    sale_type: SaleType
    amount: int
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class StagedProduct:
    legacy_id: int
    legacy_category_id: int
    name: str
    slug: str
    base_sku: str
    short_description: str
    long_description: str
    image_url: str
    is_active: bool


@dataclass(frozen=True)
class StagedVariant:
    """Variant of the product with ``base_sku``; price in cents, weight in milligrams."""

    legacy_product_id: int
    base_sku: str
    sku_suffix: str
    price: int
    quantity: int
    weight: int
    is_active: bool


@dataclass(frozen=True)
class StagedSeedAttribute:
    base_sku: str
    is_organic: bool
    is_heirloom: bool
    is_ecological: bool
    is_regional: bool


@dataclass(frozen=True)
class StagedProductSale:
    legacy_product_id: int
    price: int
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class StagedPage:
    name: str
    slug: str
    content: str


@dataclass(frozen=True)
class StagedCustomer:
    """Customer keyed by email; ``legacy_ids`` lists every merged ZenCart account."""

    legacy_ids: Tuple[int, ...]
    email: str
    store_credit: int
    member_number: str
    encrypted_password: str
    auth_token: str
    is_admin: bool


@dataclass(frozen=True)
class StagedAddress:
    legacy_id: int
    legacy_customer_id: int
    first_name: str
    last_name: str
    company_name: str
    address_one: str
    address_two: str
    city: str
    region_type: RegionType
    region: str
    zip_code: str
    country: str
    is_default: bool
    address_type: AddressType


@dataclass(frozen=True)
class StagedCartItem:
    legacy_product_id: int
    quantity: int


@dataclass(frozen=True)
class StagedCart:
    legacy_customer_id: int
    items: Tuple[StagedCartItem, ...]


@dataclass(frozen=True)
class StagedCoupon:
    code: str
    name: str
    description: str
    is_active: bool
    discount_type: DiscountType
    discount_amount: int
    minimum_order: int
    expiration_date: datetime
    total_uses: int
    uses_per_customer: int
    legacy_created_at: datetime
