import pytest

from storefront.migration.errors import RequiredReferenceError
from storefront.migration.pipeline.id_map import IdMap
from storefront.migration.pipeline.merge import (
    dedupe_seed_attributes,
    merge_by_key,
    merge_customers,
    merge_products,
)
from storefront.migration.pipeline.records import StagedCustomer, StagedProduct, StagedSeedAttribute


def _product(legacy_id, base_sku, *, is_active=True, name="Cherokee Purple"):
    return StagedProduct(
        legacy_id=legacy_id,
        legacy_category_id=1,
        name=name,
        slug="cherokee-purple",
        base_sku=base_sku,
        short_description="",
        long_description="",
        image_url="",
        is_active=is_active,
    )


def _customer(legacy_id, email, credit=0):
    return StagedCustomer(
        legacy_ids=(legacy_id,),
        email=email,
        store_credit=credit,
        member_number="",
        encrypted_password="",
        auth_token=f"token-{legacy_id}",
        is_admin=False,
    )


def test_merge_by_key_keeps_first_seen_order():
    merged = merge_by_key(["b1", "a1", "b2", "c1"], lambda value: value[0], lambda first, other: first + other)
    assert merged == ["b1b2", "a1", "c1"]


def test_merge_products_ors_active_flag():
    merged = merge_products([_product(1, "12345", is_active=False), _product(2, "12345", is_active=True)])
    assert len(merged) == 1
    assert merged[0].is_active is True
    assert merged[0].legacy_id == 1


def test_merge_products_all_inactive_stays_inactive():
    merged = merge_products([_product(1, "12345", is_active=False), _product(2, "12345", is_active=False)])
    assert merged[0].is_active is False


def test_merge_customers_sums_credit_and_collects_ids():
    merged = merge_customers([_customer(1, "alice@example.com", 500), _customer(2, "alice@example.com", 300)])
    assert len(merged) == 1
    assert merged[0].store_credit == 800
    assert set(merged[0].legacy_ids) == {1, 2}
    assert merged[0].auth_token == "token-1"


def test_merge_customers_unions_guest_checkouts():
    merged = merge_customers(
        [_customer(1, "alice@example.com", 500)],
        [_customer(4, "bob@example.com"), _customer(5, "alice@example.com", 100)],
    )
    assert [customer.email for customer in merged] == ["alice@example.com", "bob@example.com"]
    assert merged[0].store_credit == 600
    assert set(merged[0].legacy_ids) == {1, 5}


def test_dedupe_seed_attributes_keeps_first():
    first = StagedSeedAttribute("12345", True, False, False, False)
    second = StagedSeedAttribute("12345", False, True, True, True)
    assert dedupe_seed_attributes([first, second]) == [first]


def test_id_map_lookup_and_require():
    id_map = IdMap("customer")
    id_map.register_many([1, 2], 10)
    id_map.register(3, 11)

    assert id_map.lookup(2) == 10
    assert id_map.lookup(99) is None
    assert id_map.require(3) == 11
    assert id_map.keys_for(10) == (1, 2)
    assert 1 in id_map
    assert len(id_map) == 3


def test_id_map_require_names_missing_key():
    id_map = IdMap("customer")
    with pytest.raises(RequiredReferenceError) as excinfo:
        id_map.require(42, record="address 7")
    assert excinfo.value.entity == "customer"
    assert excinfo.value.legacy_key == 42
    assert "42" in str(excinfo.value)
