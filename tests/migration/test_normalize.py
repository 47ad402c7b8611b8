from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from storefront.migration.errors import ValueDecodeError
from storefront.migration.pipeline.normalize import (
    day_to_utc,
    dollars_to_cents,
    floor_int,
    local_to_utc,
    parse_basket_product_id,
    resolve_country,
    resolve_region,
    slugify,
    split_sku,
    take_file_name,
)
from storefront.models import RegionType


@pytest.mark.parametrize(
    "full_sku, expected",
    [
        ("92504A", ("92504", "A")),
        ("92504", ("92504", "")),
        ("12345LB", ("12345", "LB")),
        ("1234A5", ("1234A5", "")),
        ("", ("", "")),
    ],
)
def test_split_sku(full_sku, expected):
    assert split_sku(full_sku) == expected


@pytest.mark.parametrize(
    "dollars, cents",
    [
        (Decimal("3.50"), 350),
        (Decimal("9.95"), 995),
        (Decimal("1.2350"), 124),
        (Decimal("1.2450"), 125),
        (Decimal("1.2449"), 124),
        (Decimal("0"), 0),
        (12, 1200),
    ],
)
def test_dollars_to_cents(dollars, cents):
    assert dollars_to_cents(dollars) == cents


def test_dollars_to_cents_result_is_int():
    assert isinstance(dollars_to_cents(Decimal("19.99")), int)


def test_floor_int_rounds_down():
    assert floor_int(Decimal("10.99")) == 10
    assert floor_int(Decimal("-0.5")) == -1


def test_slugify_collapses_punctuation():
    assert slugify("Free 2013 Catalog & Garden Guide") == "free-2013-catalog-garden-guide"
    assert slugify("  Heirloom Tomatoes! ") == "heirloom-tomatoes"


def test_take_file_name_handles_both_separators():
    assert take_file_name("images/products/cherokee.jpg") == "cherokee.jpg"
    assert take_file_name("images\\cherokee.jpg") == "cherokee.jpg"
    assert take_file_name("") == ""


def test_resolve_country_zone_overrides_win():
    assert resolve_country("US", "Federated States Of Micronesia") == "FM"
    assert resolve_country("US", "Marshall Islands") == "MH"


def test_resolve_country_maps_defunct_codes():
    assert resolve_country("AN", "Bonaire") == "BQ"


def test_resolve_country_rejects_unknown_code():
    with pytest.raises(ValueDecodeError) as excinfo:
        resolve_country("ZZ", "")
    assert excinfo.value.value == "ZZ"


def test_resolve_region_us_states_and_aliases():
    virginia = resolve_region("US", "Virginia")
    assert (virginia.region_type, virginia.code) == (RegionType.US_STATE, "VA")

    pacific = resolve_region("US", "Armed Forces Pacific")
    assert (pacific.region_type, pacific.code) == (RegionType.US_ARMED_FORCES, "AP")

    islands = resolve_region("US", "Virgin Islands")
    assert (islands.region_type, islands.code) == (RegionType.US_STATE, "VI")


def test_resolve_region_canadian_aliases():
    yukon = resolve_region("CA", "Yukon Territory")
    assert (yukon.region_type, yukon.code) == (RegionType.CA_PROVINCE, "YT")
    newfoundland = resolve_region("CA", "Newfoundland")
    assert newfoundland.code == "NL"


def test_resolve_region_unknown_names_raise():
    with pytest.raises(ValueDecodeError):
        resolve_region("US", "Atlantis")
    with pytest.raises(ValueDecodeError):
        resolve_region("CA", "Atlantis")


def test_resolve_region_other_countries_keep_zone():
    region = resolve_region("DE", "Bayern")
    assert (region.region_type, region.code) == (RegionType.CUSTOM, "Bayern")


def test_day_to_utc_uses_legacy_midnight():
    assert day_to_utc(date(2020, 3, 1), -5) == datetime(2020, 3, 1, 5, 0, tzinfo=timezone.utc)


def test_local_to_utc_attaches_offset_to_naive_values():
    assert local_to_utc(datetime(2020, 1, 1, 9, 30), -5) == datetime(2020, 1, 1, 14, 30, tzinfo=timezone.utc)
    aware = datetime(2020, 1, 1, 9, 30, tzinfo=timezone.utc)
    assert local_to_utc(aware, -5) == aware


def test_parse_basket_product_id():
    assert parse_basket_product_id("1024:5f1e9a") == 1024
    assert parse_basket_product_id("77") == 77
    with pytest.raises(ValueDecodeError):
        parse_basket_product_id("abc:1")
