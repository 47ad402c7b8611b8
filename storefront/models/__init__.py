# storefront/models/__init__.py
"""
Database models package
"""

from .base import BaseModel, db
from .cart import Cart, CartItem, Order, OrderLineItem, OrderProduct
from .catalog import Category, Page, Product, ProductVariant, SeedAttribute, product_categories
from .checkout import (
    Coupon,
    ShippingMethod,
    Surcharge,
    TaxRate,
    shipping_method_categories,
    shipping_method_excluded_categories,
    surcharge_categories,
)
from .customer import Address, Customer
from .enums import AddressType, DiscountType, RegionType, SaleType, ShippingRateType
from .sales import CategorySale, ProductSale, category_sale_categories

__all__ = [
    "db",
    "BaseModel",
    # Catalog
    "Category",
    "Product",
    "ProductVariant",
    "SeedAttribute",
    "Page",
    "product_categories",
    # Sales
    "ProductSale",
    "CategorySale",
    "category_sale_categories",
    # Customers
    "Customer",
    "Address",
    # Carts & orders
    "Cart",
    "CartItem",
    "Order",
    "OrderLineItem",
    "OrderProduct",
    # Checkout
    "Coupon",
    "TaxRate",
    "Surcharge",
    "ShippingMethod",
    "surcharge_categories",
    "shipping_method_categories",
    "shipping_method_excluded_categories",
    # Enums
    "AddressType",
    "DiscountType",
    "RegionType",
    "SaleType",
    "ShippingRateType",
]
