import pytest
from sqlalchemy import create_engine, text

from storefront.migration.adapters import SqlLegacySource, create_legacy_source
from storefront.migration.contracts import ColumnSpec, LegacyQuery
from storefront.migration.errors import MigrationError, RowDecodeError
from storefront.migration.pipeline.wipe import WIPE_ORDER, wipe_destination
from storefront.models import Cart, CartItem, Category, Customer, Product, ProductVariant, db

BASKET = LegacyQuery(
    name="basket",
    sql="SELECT customers_id, products_id, qty FROM basket WHERE customers_id = :customer_id ORDER BY products_id",
    columns=(
        ColumnSpec("customers_id", "int"),
        ColumnSpec("products_id", "text"),
        ColumnSpec("qty", "float", nullable=True),
    ),
)


@pytest.fixture
def legacy_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'legacy.db'}")
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE basket (customers_id INTEGER, products_id TEXT, qty REAL)"))
        connection.execute(
            text("INSERT INTO basket VALUES (1, '101:abc', 2.0), (1, '102', NULL), (2, '103', 1.0)")
        )
    yield engine
    engine.dispose()


def test_sql_source_validates_rows(legacy_engine):
    source = SqlLegacySource(legacy_engine)
    try:
        rows = list(source.fetch(BASKET, {"customer_id": 1}))
        first = source.fetch_one(BASKET, {"customer_id": 2})
        missing = source.fetch_one(BASKET, {"customer_id": 3})
    finally:
        source.close()

    assert rows == [
        {"customers_id": 1, "products_id": "101:abc", "qty": 2.0},
        {"customers_id": 1, "products_id": "102", "qty": 0},
    ]
    assert first["products_id"] == "103"
    assert missing is None


def test_sql_source_reports_contract_drift(legacy_engine):
    drifted = LegacyQuery(
        name="basket",
        sql="SELECT customers_id, qty FROM basket",
        columns=BASKET.columns[:1] + (ColumnSpec("qty", "text"),),
    )
    source = SqlLegacySource(legacy_engine)
    try:
        with pytest.raises(RowDecodeError) as excinfo:
            list(source.fetch(drifted))
    finally:
        source.close()

    assert excinfo.value.column == "qty"
    assert excinfo.value.row_number == 1


def test_create_legacy_source_requires_url(app):
    app.config["LEGACY_DATABASE_URL"] = None
    with pytest.raises(MigrationError, match="LEGACY_DATABASE_URL"):
        create_legacy_source(app)


def test_wipe_destination_clears_owned_tables(product, variant_factory, customer_factory):
    parent = db.session.query(Category).one()
    child = Category(name="Heirloom", slug="heirloom", parent_id=parent.id, description="", image_url="", sort_order=0)
    db.session.add(child)
    variant = variant_factory(product, sku_suffix="A")
    customer = customer_factory("alice@example.com")
    cart = Cart(customer_id=customer.id)
    db.session.add(cart)
    db.session.flush()
    db.session.add(CartItem(cart_id=cart.id, product_variant_id=variant.id, quantity=1))
    db.session.commit()

    deleted = wipe_destination()
    db.session.commit()

    # category x2, product, product_categories link, variant, customer, cart, cart item
    assert deleted == 8
    for model in (Category, Product, ProductVariant, Customer, Cart, CartItem):
        assert db.session.query(model).count() == 0


def test_wipe_order_deletes_children_first():
    names = [table.name for table in WIPE_ORDER]
    assert names.index("cart_items") < names.index("carts") < names.index("customers")
    assert names.index("product_variants") < names.index("products") < names.index("categories")
    assert names.index("product_categories") < names.index("products")
