# storefront/models/customer.py
"""
Customer models: Customer and Address
"""

from sqlalchemy import Enum, Index

from .base import BaseModel, db
from .enums import AddressType, RegionType


class Customer(BaseModel):
    """Storefront customer account, unique by email"""

    __tablename__ = "customers"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    store_credit = db.Column(db.Integer, nullable=False, default=0)  # cents
    member_number = db.Column(db.String(50), nullable=False, default="")
    encrypted_password = db.Column(db.String(255), nullable=False, default="")
    auth_token = db.Column(db.String(64), unique=True, nullable=False)
    stripe_id = db.Column(db.String(100), nullable=True)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)

    addresses = db.relationship("Address", back_populates="customer")

    def __repr__(self):
        return f"<Customer {self.email}>"


class Address(BaseModel):
    """Shipping or billing address owned by a customer"""

    __tablename__ = "addresses"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    company_name = db.Column(db.String(200), nullable=False, default="")
    address_one = db.Column(db.String(255), nullable=False)
    address_two = db.Column(db.String(255), nullable=False, default="")
    city = db.Column(db.String(100), nullable=False)
    region_type = db.Column(Enum(RegionType, name="region_type_enum"), nullable=False)
    region = db.Column(db.String(100), nullable=False)
    zip_code = db.Column(db.String(20), nullable=False)
    country = db.Column(db.String(2), nullable=False)
    is_default = db.Column(db.Boolean, default=False, nullable=False)
    address_type = db.Column(Enum(AddressType, name="address_type_enum"), nullable=False)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    customer = db.relationship("Customer", back_populates="addresses")

    __table_args__ = (Index("idx_address_customer_type", "customer_id", "address_type"),)

    def __repr__(self):
        return f"<Address {self.address_one}, {self.city} ({self.address_type.value})>"
