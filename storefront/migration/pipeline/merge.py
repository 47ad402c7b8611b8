"""
Entity mergers collapsing staging records that share a natural key.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Hashable, Iterable, List, TypeVar

from .records import StagedCustomer, StagedProduct, StagedSeedAttribute

T = TypeVar("T")


def merge_by_key(records: Iterable[T], key: Callable[[T], Hashable], combine: Callable[[T, T], T]) -> List[T]:
    """
    Group ``records`` by ``key`` and fold each group left to right with ``combine``.

    Groups are returned in the order their first record appeared.
    """

    merged: dict[Hashable, T] = {}
    for record in records:
        record_key = key(record)
        if record_key in merged:
            merged[record_key] = combine(merged[record_key], record)
        else:
            merged[record_key] = record
    return list(merged.values())


def combine_products(first: StagedProduct, other: StagedProduct) -> StagedProduct:
    """Keep the first product's fields; the product is active if any duplicate is."""

    return replace(first, is_active=first.is_active or other.is_active)


def merge_products(products: Iterable[StagedProduct]) -> List[StagedProduct]:
    return merge_by_key(products, lambda product: product.base_sku, combine_products)


def combine_customers(first: StagedCustomer, other: StagedCustomer) -> StagedCustomer:
    """Keep the first customer's identity, sum store credit and collect every legacy ID."""

    return replace(
        first,
        legacy_ids=first.legacy_ids + other.legacy_ids,
        store_credit=first.store_credit + other.store_credit,
    )


def merge_customers(
    with_accounts: Iterable[StagedCustomer],
    without_accounts: Iterable[StagedCustomer] = (),
) -> List[StagedCustomer]:
    """
    Merge customers by email.

    Each source query is merged on its own first, then the two results are
    unioned by email with account holders taking precedence.
    """

    account_customers = merge_by_key(with_accounts, lambda customer: customer.email, combine_customers)
    guest_customers = merge_by_key(without_accounts, lambda customer: customer.email, combine_customers)
    return merge_by_key(account_customers + guest_customers, lambda customer: customer.email, combine_customers)


def dedupe_seed_attributes(attributes: Iterable[StagedSeedAttribute]) -> List[StagedSeedAttribute]:
    """Keep the first attribute row seen for each base SKU."""

    return merge_by_key(attributes, lambda attribute: attribute.base_sku, lambda first, _: first)
