"""
Static checkout charges seeded by the migration.

These are business settings rather than legacy data: they are inserted fresh
on every run after the catalog exists, since surcharges and shipping methods
attach to categories by slug.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True)
class TaxRateSeed:
    description: str
    rate: int  # tenths of a percent
    country: str
    region: str | None = None


@dataclass(frozen=True)
class SurchargeSeed:
    """
    Per-order fee for items in the listed categories.

    With ``require_all`` the surcharge is only created when every slug
    exists; otherwise it is created with whichever categories are found.
    """

    description: str
    single_fee: int
    multiple_fee: int
    category_slugs: Sequence[str]
    require_all: bool = True


@dataclass(frozen=True)
class ShippingRate:
    """Bracket starting at ``threshold`` cents: a flat fee or a percentage of the subtotal."""

    kind: str
    threshold: int
    amount: int

    def as_dict(self) -> dict:
        return {"type": self.kind, "threshold": self.threshold, "amount": self.amount}


@dataclass(frozen=True)
class ShippingMethodSeed:
    description: str
    countries: Sequence[str]
    rates: Sequence[ShippingRate]
    priority: int
    category_slugs: Sequence[str] = field(default_factory=tuple)


VA_SALES_TAX = TaxRateSeed("VA Sales Tax (5.3%)", 53, "US", "VA")

SURCHARGES: tuple[SurchargeSeed, ...] = (
    SurchargeSeed("Potato Fee", 200, 400, ("potatoes",)),
    SurchargeSeed("Sweet Potato Fee", 200, 400, ("sweet-potatoes",)),
    SurchargeSeed(
        "Fall Item Fee",
        200,
        400,
        (
            "garlic",
            "asiatic-turban",
            "elephant-garlic",
            "garlic-samplers",
            "softneck-braidable",
            "perennial-onions",
            "ginseng-goldenseal",
        ),
        require_all=False,
    ),
)

PRIORITY_SHIPPING_FEE = 500  # cents
PRIORITY_SHIPPING_PERCENT = 5

PRIORITY_EXCLUDED_CATEGORY_SLUGS: tuple[str, ...] = (
    "potatoes",
    "sweet-potatoes",
    "garlic",
    "perennial-onions",
    "mushrooms",
    "ginseng-goldenseal",
)

SHIPPING_METHODS: tuple[ShippingMethodSeed, ...] = (
    ShippingMethodSeed(
        "Shipping to USA",
        ("US",),
        (
            ShippingRate("flat", 0, 350),
            ShippingRate("flat", 3000, 450),
            ShippingRate("flat", 5000, 550),
            ShippingRate("flat", 12000, 650),
            ShippingRate("percentage", 50000000, 5),
        ),
        priority=2,
    ),
    ShippingMethodSeed(
        "International Shipping",
        ("CA", "MX"),
        (
            ShippingRate("flat", 0, 550),
            ShippingRate("flat", 3000, 750),
            ShippingRate("flat", 5000, 950),
            ShippingRate("percentage", 12000, 8),
            ShippingRate("percentage", 50000000, 10),
        ),
        priority=2,
    ),
    # Only created when the catalog request category exists.
    ShippingMethodSeed(
        "Free Shipping",
        ("US",),
        (ShippingRate("flat", 0, 0),),
        priority=1,
        category_slugs=("request-a-catalog",),
    ),
)
