# storefront/models/cart.py
"""
Cart and order models. Orders are never migrated but are cleared with the
rest of the destination schema.
"""

from .base import BaseModel, db


class Cart(BaseModel):
    """Shopping cart owned by a customer or an anonymous session"""

    __tablename__ = "carts"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), unique=True, nullable=True)
    session_token = db.Column(db.String(64), unique=True, nullable=True)
    expiration_time = db.Column(db.DateTime(timezone=True), nullable=True)

    items = db.relationship("CartItem", back_populates="cart")


class CartItem(BaseModel):
    """Quantity of a variant held in a cart"""

    __tablename__ = "cart_items"

    id = db.Column(db.Integer, primary_key=True)
    cart_id = db.Column(db.Integer, db.ForeignKey("carts.id"), nullable=False)
    product_variant_id = db.Column(db.Integer, db.ForeignKey("product_variants.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    cart = db.relationship("Cart", back_populates="items")

    __table_args__ = (db.UniqueConstraint("cart_id", "product_variant_id", name="_cart_item_variant_uc"),)


class Order(BaseModel):
    """Placed order"""

    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=False)
    status = db.Column(db.String(50), nullable=False, default="processing")
    customer_comment = db.Column(db.Text, nullable=False, default="")
    shipping_address_id = db.Column(db.Integer, db.ForeignKey("addresses.id"), nullable=True)
    billing_address_id = db.Column(db.Integer, db.ForeignKey("addresses.id"), nullable=True)


class OrderLineItem(BaseModel):
    """Charge or credit applied to an order"""

    __tablename__ = "order_line_items"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False)
    description = db.Column(db.String(255), nullable=False)
    amount = db.Column(db.Integer, nullable=False)


class OrderProduct(BaseModel):
    """Variant purchased on an order"""

    __tablename__ = "order_products"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False)
    product_variant_id = db.Column(db.Integer, db.ForeignKey("product_variants.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Integer, nullable=False)
