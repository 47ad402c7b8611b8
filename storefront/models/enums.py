# storefront/models/enums.py
"""
Enums for storefront models.
"""

from enum import Enum as PyEnum


class AddressType(PyEnum):
    """Address type"""

    SHIPPING = "shipping"
    BILLING = "billing"


class RegionType(PyEnum):
    """How an address region should be interpreted"""

    US_STATE = "us_state"
    US_ARMED_FORCES = "us_armed_forces"
    CA_PROVINCE = "ca_province"
    CUSTOM = "custom"


class SaleType(PyEnum):
    """Category sale deduction kind"""

    FLAT = "flat"  # cents
    PERCENT = "percent"


class DiscountType(PyEnum):
    """Coupon discount kind"""

    FREE_SHIPPING = "free_shipping"
    PERCENTAGE = "percentage"
    FLAT = "flat"


class ShippingRateType(PyEnum):
    """Shipping rate bracket kind"""

    FLAT = "flat"
    PERCENTAGE = "percentage"
