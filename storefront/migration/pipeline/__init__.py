"""
Extract, merge and load stages of the legacy migration.
"""

from .extract import LegacyDataset, extract_legacy_dataset
from .id_map import IdMap
from .integrity import clean_carts, purge_inactive_cart_items
from .merge import dedupe_seed_attributes, merge_customers, merge_products
from .orchestrator import load_dataset, merge_dataset, run_migration
from .summary import EntityCounts, MigrationSummary
from .wipe import wipe_destination

__all__ = [
    "EntityCounts",
    "IdMap",
    "LegacyDataset",
    "MigrationSummary",
    "clean_carts",
    "dedupe_seed_attributes",
    "extract_legacy_dataset",
    "load_dataset",
    "merge_customers",
    "merge_dataset",
    "merge_products",
    "purge_inactive_cart_items",
    "run_migration",
    "wipe_destination",
]
