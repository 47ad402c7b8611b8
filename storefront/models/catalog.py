# storefront/models/catalog.py
"""
Catalog models: Category, Product, ProductVariant, SeedAttribute, Page
"""

from sqlalchemy import Index

from .base import BaseModel, db

product_categories = db.Table(
    "product_categories",
    db.Column("product_id", db.Integer, db.ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    db.Column("category_id", db.Integer, db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Category(BaseModel):
    """Hierarchical product category"""

    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    parent_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True)
    description = db.Column(db.Text, nullable=False, default="")
    image_url = db.Column(db.String(500), nullable=False, default="")
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    parent = db.relationship("Category", remote_side=[id])

    def __repr__(self):
        return f"<Category {self.slug}>"


class Product(BaseModel):
    """Product identified by its base SKU"""

    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    base_sku = db.Column(db.String(50), unique=True, nullable=False, index=True)
    short_description = db.Column(db.Text, nullable=False, default="")
    long_description = db.Column(db.Text, nullable=False, default="")
    image_url = db.Column(db.String(500), nullable=False, default="")
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    categories = db.relationship("Category", secondary=product_categories, lazy="selectin")
    variants = db.relationship("ProductVariant", back_populates="product")

    def __repr__(self):
        return f"<Product {self.base_sku}>"


class ProductVariant(BaseModel):
    """Purchasable variant of a product; price in cents, weight in milligrams"""

    __tablename__ = "product_variants"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    sku_suffix = db.Column(db.String(20), nullable=False, default="")
    price = db.Column(db.Integer, nullable=False, default=0)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    weight = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    product = db.relationship("Product", back_populates="variants")

    __table_args__ = (db.UniqueConstraint("product_id", "sku_suffix", name="_variant_sku_uc"),)

    def __repr__(self):
        return f"<ProductVariant {self.product_id}/{self.sku_suffix!r}>"


class SeedAttribute(BaseModel):
    """Growing attributes attached to a product"""

    __tablename__ = "seed_attributes"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), unique=True, nullable=False)
    is_organic = db.Column(db.Boolean, default=False, nullable=False)
    is_heirloom = db.Column(db.Boolean, default=False, nullable=False)
    is_ecological = db.Column(db.Boolean, default=False, nullable=False)
    is_regional = db.Column(db.Boolean, default=False, nullable=False)


class Page(BaseModel):
    """Static content page"""

    __tablename__ = "pages"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    content = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (Index("idx_page_name", "name"),)
