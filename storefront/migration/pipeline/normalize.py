"""
Pure normalization helpers shared by the legacy row decoders.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_EVEN, Decimal

from storefront.models.enums import RegionType

from ..errors import ValueDecodeError
from .regions import (
    CA_PROVINCE_ALIASES,
    CA_PROVINCES,
    DEFUNCT_COUNTRY_CODES,
    ISO_COUNTRY_CODES,
    US_REGION_ALIASES,
    US_STATES,
    ZONE_COUNTRY_OVERRIDES,
)

_SLUG_SEPARATOR_REGEX = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class Region:
    """Normalized address region."""

    region_type: RegionType
    code: str


def split_sku(full_sku: str) -> tuple[str, str]:
    """
    Split a legacy SKU into its base and alphabetic suffix.

    The first alphabetic character starts the suffix only when it is followed
    by another alphabetic character or ends the string; otherwise the whole
    SKU is the base.

    >>> split_sku("92504A")
    ('92504', 'A')
    >>> split_sku("92504")
    ('92504', '')
    """

    for index, char in enumerate(full_sku):
        if not char.isalpha():
            continue
        next_index = index + 1
        if next_index == len(full_sku) or full_sku[next_index].isalpha():
            return full_sku[:index], full_sku[index:]
        return full_sku, ""
    return full_sku, ""


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def dollars_to_cents(dollars: Decimal | float | int | str) -> int:
    """
    Convert a dollar amount to integer cents.

    Amounts whose thousandths digit is exactly 5 are forced upwards, since
    half-even rounding would send half of them to the lower cent.
    """

    amount = to_decimal(dollars)
    tenth_cents = (amount * 1000).to_integral_value(rounding=ROUND_FLOOR)
    if int(tenth_cents) % 10 == 5:
        return int((amount * 100).to_integral_value(rounding=ROUND_CEILING))
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_EVEN))


def floor_int(value: Decimal | float | int) -> int:
    return int(to_decimal(value).to_integral_value(rounding=ROUND_FLOOR))


def slugify(name: str) -> str:
    """Lower-case the name and collapse every non-alphanumeric run into a dash."""

    return _SLUG_SEPARATOR_REGEX.sub("-", name.lower()).strip("-")


def take_file_name(path: str) -> str:
    """Reduce a stored image path to its bare file name."""

    return posixpath.basename(path.replace("\\", "/"))


def resolve_country(raw_code: str, zone: str) -> str:
    """
    Map a legacy country code to an ISO 3166-1 alpha-2 code.

    A handful of zones pin their country regardless of the stored code, and
    withdrawn codes map to their successor.
    """

    if zone in ZONE_COUNTRY_OVERRIDES:
        return ZONE_COUNTRY_OVERRIDES[zone]
    if raw_code in ISO_COUNTRY_CODES:
        return raw_code
    if raw_code in DEFUNCT_COUNTRY_CODES:
        return DEFUNCT_COUNTRY_CODES[raw_code]
    raise ValueDecodeError("country code", raw_code)


def resolve_region(country: str, zone: str) -> Region:
    """
    Map a free-text zone name to a structured region for the US and Canada.

    Other countries keep the zone text verbatim as a custom region.
    """

    if country == "US":
        if zone in US_STATES:
            return Region(RegionType.US_STATE, US_STATES[zone])
        alias = US_REGION_ALIASES.get(zone)
        if alias is None:
            raise ValueDecodeError("state", zone)
        kind, code = alias
        region_type = RegionType.US_ARMED_FORCES if kind == "armed_forces" else RegionType.US_STATE
        return Region(region_type, code)
    if country == "CA":
        code = CA_PROVINCES.get(zone) or CA_PROVINCE_ALIASES.get(zone)
        if code is None:
            raise ValueDecodeError("Canadian province", zone)
        return Region(RegionType.CA_PROVINCE, code)
    return Region(RegionType.CUSTOM, zone)


def legacy_timezone(offset_hours: int) -> timezone:
    return timezone(timedelta(hours=offset_hours))


def day_to_utc(day: date, offset_hours: int) -> datetime:
    """Interpret a legacy calendar day as local midnight and convert to UTC."""

    local_midnight = datetime.combine(day, time.min, tzinfo=legacy_timezone(offset_hours))
    return local_midnight.astimezone(timezone.utc)


def local_to_utc(moment: datetime, offset_hours: int) -> datetime:
    """Attach the legacy UTC offset to a naive local datetime and convert to UTC."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=legacy_timezone(offset_hours))
    return moment.astimezone(timezone.utc)


def parse_basket_product_id(raw: str) -> int:
    """
    Extract the legacy product id from a basket key.

    Basket keys carry attribute hashes after a colon (``"1024:5f1e..."``).
    """

    integer_part = raw.split(":", 1)[0].strip()
    try:
        return int(integer_part)
    except ValueError as exc:
        raise ValueDecodeError("basket product id", raw) from exc
