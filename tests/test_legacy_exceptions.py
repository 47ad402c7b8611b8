import json

import pytest

from config.legacy_exceptions import (
    DEFAULT_EXCEPTION_TABLE,
    ExceptionTableError,
    load_exception_table,
)
from storefront.migration.settings import MigrationSettings


def test_defaults_without_override():
    table = load_exception_table({})

    assert table is DEFAULT_EXCEPTION_TABLE
    assert [item.legacy_id for item in table.recreated_products] == [1039, 1641]
    assert [item.legacy_id for item in table.deleted_products] == [1639, 1811]
    assert table.ignored_cart_product_ids == frozenset({1639})
    assert table.excluded_sale_names == frozenset({"", "GuardN Inoculant"})


def test_json_override_replaces_sections(tmp_path):
    path = tmp_path / "exceptions.json"
    path.write_text(
        json.dumps(
            {
                "recreated_products": [{"legacy_id": 42, "base_sku": "abc12", "sku_suffix": "b"}],
                "ignored_cart_product_ids": [7, "8"],
            }
        ),
        encoding="utf-8",
    )

    table = load_exception_table({"MIGRATION_EXCEPTIONS_PATH": str(path)})

    assert len(table.recreated_products) == 1
    assert table.recreated_products[0].base_sku == "ABC12"
    assert table.recreated_products[0].sku_suffix == "B"
    assert table.ignored_cart_product_ids == frozenset({7, 8})
    assert table.deleted_products == DEFAULT_EXCEPTION_TABLE.deleted_products


def test_yaml_override(tmp_path):
    path = tmp_path / "exceptions.yaml"
    path.write_text(
        "deleted_products:\n"
        "  - legacy_id: 500\n"
        "    name: Retired Sampler\n"
        "    base_sku: '40001'\n"
        "    price: 995\n"
        "excluded_sale_names: ['', 'Clearance']\n",
        encoding="utf-8",
    )

    table = load_exception_table({"MIGRATION_EXCEPTIONS_PATH": str(path)})

    assert table.deleted_products[0].name == "Retired Sampler"
    assert table.deleted_products[0].price == 995
    assert table.excluded_sale_names == frozenset({"", "Clearance"})


def test_override_rejects_duplicate_legacy_ids(tmp_path):
    path = tmp_path / "exceptions.json"
    path.write_text(
        json.dumps(
            {
                "recreated_products": [{"legacy_id": 1639, "base_sku": "92504"}],
            }
        ),
        encoding="utf-8",
    )

    with pytest.raises(ExceptionTableError, match="1639"):
        load_exception_table({"MIGRATION_EXCEPTIONS_PATH": str(path)})


def test_override_rejects_missing_file(tmp_path):
    with pytest.raises(ExceptionTableError, match="does not exist"):
        load_exception_table({"MIGRATION_EXCEPTIONS_PATH": str(tmp_path / "missing.json")})


def test_override_rejects_non_object(tmp_path):
    path = tmp_path / "exceptions.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ExceptionTableError, match="must be a JSON/YAML object"):
        load_exception_table({"MIGRATION_EXCEPTIONS_PATH": str(path)})


def test_settings_from_config(app, tmp_path):
    path = tmp_path / "exceptions.json"
    path.write_text(json.dumps({"ignored_cart_product_ids": []}), encoding="utf-8")
    app.config.update(
        {
            "MIGRATION_EXCEPTIONS_PATH": str(path),
            "LEGACY_UTC_OFFSET_HOURS": -4,
            "MIGRATION_ADMIN_EMAILS": ("ops@example.com",),
        }
    )

    settings = MigrationSettings.from_config(app.config)

    assert settings.utc_offset_hours == -4
    assert settings.admin_emails == frozenset({"ops@example.com"})
    assert settings.exceptions.ignored_cart_product_ids == frozenset()
