# storefront/models/checkout.py
"""
Checkout configuration models: Coupon, TaxRate, Surcharge, ShippingMethod
"""

from sqlalchemy import Enum

from .base import BaseModel, db
from .enums import DiscountType, RegionType

surcharge_categories = db.Table(
    "surcharge_categories",
    db.Column("surcharge_id", db.Integer, db.ForeignKey("surcharges.id", ondelete="CASCADE"), primary_key=True),
    db.Column("category_id", db.Integer, db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)

shipping_method_categories = db.Table(
    "shipping_method_categories",
    db.Column(
        "shipping_method_id", db.Integer, db.ForeignKey("shipping_methods.id", ondelete="CASCADE"), primary_key=True
    ),
    db.Column("category_id", db.Integer, db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)

shipping_method_excluded_categories = db.Table(
    "shipping_method_excluded_categories",
    db.Column(
        "shipping_method_id", db.Integer, db.ForeignKey("shipping_methods.id", ondelete="CASCADE"), primary_key=True
    ),
    db.Column("category_id", db.Integer, db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Coupon(BaseModel):
    """Discount code"""

    __tablename__ = "coupons"

    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(50), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    discount_type = db.Column(Enum(DiscountType, name="discount_type_enum"), nullable=False)
    discount_amount = db.Column(db.Integer, nullable=False, default=0)
    minimum_order = db.Column(db.Integer, nullable=False, default=0)
    expiration_date = db.Column(db.DateTime(timezone=True), nullable=False)
    total_uses = db.Column(db.Integer, nullable=False, default=0)
    uses_per_customer = db.Column(db.Integer, nullable=False, default=0)
    legacy_created_at = db.Column(db.DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Coupon {self.code}>"


class TaxRate(BaseModel):
    """Sales tax applied to a country/region; rate is in tenths of a percent"""

    __tablename__ = "tax_rates"

    id = db.Column(db.Integer, primary_key=True)
    description = db.Column(db.String(255), nullable=False)
    rate = db.Column(db.Integer, nullable=False)
    country = db.Column(db.String(2), nullable=False)
    region_type = db.Column(Enum(RegionType, name="tax_region_type_enum"), nullable=True)
    region = db.Column(db.String(100), nullable=True)
    excluded_product_ids = db.Column(db.JSON, nullable=False, default=list)
    is_active = db.Column(db.Boolean, default=True, nullable=False)


class Surcharge(BaseModel):
    """Per-order fee triggered by items from specific categories"""

    __tablename__ = "surcharges"

    id = db.Column(db.Integer, primary_key=True)
    description = db.Column(db.String(255), nullable=False)
    single_fee = db.Column(db.Integer, nullable=False)
    multiple_fee = db.Column(db.Integer, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    categories = db.relationship("Category", secondary=surcharge_categories, lazy="selectin")


class ShippingMethod(BaseModel):
    """Shipping rate table for a set of countries"""

    __tablename__ = "shipping_methods"

    id = db.Column(db.Integer, primary_key=True)
    description = db.Column(db.String(255), nullable=False)
    countries = db.Column(db.JSON, nullable=False, default=list)
    rates = db.Column(db.JSON, nullable=False, default=list)
    priority_fee = db.Column(db.Integer, nullable=False, default=0)
    priority_percent = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    priority = db.Column(db.Integer, nullable=False, default=1)

    categories = db.relationship("Category", secondary=shipping_method_categories, lazy="selectin")
    priority_excluded_categories = db.relationship(
        "Category", secondary=shipping_method_excluded_categories, lazy="selectin"
    )
