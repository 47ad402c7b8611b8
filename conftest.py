# conftest.py

import os

import pytest

# Set testing environment BEFORE importing app so app.py picks TestingConfig
os.environ["FLASK_ENV"] = "testing"

# Now import app and other modules after environment is set
from app import app as flask_app
from storefront.migration.metrics import set_metrics_enabled
from storefront.models import Category, Customer, Product, ProductVariant, db


@pytest.fixture(scope="function")
def app():
    """Create and configure a test Flask application"""
    flask_app.config.update(
        {
            "TESTING": True,
            "SQLALCHEMY_ECHO": False,
            "LOG_LEVEL": "DEBUG",
            "ENABLE_FILE_LOGGING": False,
            "ENABLE_CONSOLE_LOGGING": False,
            "LEGACY_DATABASE_URL": None,
            "MIGRATION_EXCEPTIONS_PATH": None,
            "LEGACY_UTC_OFFSET_HOURS": -5,
            "MIGRATION_ADMIN_EMAILS": ("gardens@southernexposure.com",),
            "MIGRATION_METRICS_ENABLED": False,
        }
    )
    set_metrics_enabled(False)

    # Re-initialize logging with updated config to pick up LOG_LEVEL=DEBUG
    from storefront.utils.logging_config import setup_logging

    setup_logging(flask_app)

    with flask_app.app_context():
        # Drop any existing tables to ensure clean state
        db.drop_all()
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture(autouse=True)
def app_context(app):
    """Automatically provide app context for all tests"""
    with app.app_context():
        yield


@pytest.fixture
def runner(app):
    """Create a test CLI runner for the Flask application"""
    return app.test_cli_runner()


@pytest.fixture
def category(app):
    """A persisted top-level category"""
    category = Category(name="Tomatoes", slug="tomatoes", description="", image_url="", sort_order=1)
    db.session.add(category)
    db.session.commit()
    return category


@pytest.fixture
def product(app, category):
    """A persisted active product in ``category`` with no variants"""
    product = Product(
        name="Cherokee Purple",
        slug="cherokee-purple",
        base_sku="12345",
        short_description="",
        long_description="",
        image_url="",
        is_active=True,
    )
    product.categories = [category]
    db.session.add(product)
    db.session.commit()
    return product


@pytest.fixture
def variant_factory(app):
    """Persist variants for a product"""

    def _factory(product, *, sku_suffix="", is_active=True, price=350, quantity=10, weight=1000):
        variant = ProductVariant(
            product_id=product.id,
            sku_suffix=sku_suffix,
            price=price,
            quantity=quantity,
            weight=weight,
            is_active=is_active,
        )
        db.session.add(variant)
        db.session.commit()
        return variant

    return _factory


@pytest.fixture
def customer_factory(app):
    """Persist customers with unique auth tokens"""
    created = []

    def _factory(email, *, encrypted_password="", store_credit=0):
        customer = Customer(
            email=email,
            store_credit=store_credit,
            member_number="",
            encrypted_password=encrypted_password,
            auth_token=f"token-{len(created)}-{email}",
            is_admin=False,
        )
        db.session.add(customer)
        db.session.commit()
        created.append(customer)
        return customer

    return _factory
