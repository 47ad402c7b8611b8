# storefront/models/sales.py
"""
Sale models: ProductSale and CategorySale
"""

from sqlalchemy import Enum

from .base import BaseModel, db
from .enums import SaleType

category_sale_categories = db.Table(
    "category_sale_categories",
    db.Column("category_sale_id", db.Integer, db.ForeignKey("category_sales.id", ondelete="CASCADE"), primary_key=True),
    db.Column("category_id", db.Integer, db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class ProductSale(BaseModel):
    """Sale price for a single variant over a date range"""

    __tablename__ = "product_sales"

    id = db.Column(db.Integer, primary_key=True)
    price = db.Column(db.Integer, nullable=False)
    product_variant_id = db.Column(db.Integer, db.ForeignKey("product_variants.id"), nullable=False)
    start_date = db.Column(db.DateTime(timezone=True), nullable=False)
    end_date = db.Column(db.DateTime(timezone=True), nullable=False)


class CategorySale(BaseModel):
    """Flat or percentage discount across one or more categories"""

    __tablename__ = "category_sales"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    sale_type = db.Column(Enum(SaleType, name="sale_type_enum"), nullable=False)
    amount = db.Column(db.Integer, nullable=False)
    start_date = db.Column(db.DateTime(timezone=True), nullable=False)
    end_date = db.Column(db.DateTime(timezone=True), nullable=False)

    categories = db.relationship("Category", secondary=category_sale_categories, lazy="selectin")

    def __repr__(self):
        return f"<CategorySale {self.name}>"
