"""
Declared queries against the legacy ZenCart store.

Column order in every ``columns`` tuple must match the SELECT list.
"""

from __future__ import annotations

from . import ColumnSpec, LegacyQuery

CATEGORIES = LegacyQuery(
    name="categories",
    sql=(
        "SELECT c.categories_id, categories_image, parent_id, sort_order, "
        "    categories_name, categories_description "
        "FROM categories AS c "
        "LEFT JOIN categories_description AS cd ON c.categories_id=cd.categories_id "
        "WHERE categories_status=1 "
        "ORDER BY parent_id ASC"
    ),
    columns=(
        ColumnSpec("categories_id", "int"),
        ColumnSpec("categories_image", "text", nullable=True),
        ColumnSpec("parent_id", "int"),
        ColumnSpec("sort_order", "int", nullable=True),
        ColumnSpec("categories_name", "text"),
        ColumnSpec("categories_description", "text", nullable=True),
    ),
)

CATEGORY_SALES = LegacyQuery(
    name="category_sales",
    sql=(
        "SELECT sale_name, sale_deduction_value, sale_deduction_type, "
        "    sale_categories_selected, sale_date_start, sale_date_end "
        "FROM salemaker_sales"
    ),
    columns=(
        ColumnSpec("sale_name", "text", nullable=True),
        ColumnSpec("sale_deduction_value", "decimal"),
        ColumnSpec("sale_deduction_type", "int"),
        ColumnSpec("sale_categories_selected", "text", nullable=True),
        ColumnSpec("sale_date_start", "date"),
        ColumnSpec("sale_date_end", "date"),
    ),
)

PRODUCTS = LegacyQuery(
    name="products",
    sql=(
        "SELECT products_id, master_categories_id, products_price, "
        "    products_quantity, products_weight, products_model, "
        "    products_image, products_status "
        "FROM products"
    ),
    columns=(
        ColumnSpec("products_id", "int"),
        ColumnSpec("master_categories_id", "int", nullable=True),
        ColumnSpec("products_price", "decimal"),
        ColumnSpec("products_quantity", "float", nullable=True),
        ColumnSpec("products_weight", "float", nullable=True),
        ColumnSpec("products_model", "text"),
        ColumnSpec("products_image", "text", nullable=True),
        ColumnSpec("products_status", "int"),
    ),
)

PRODUCT_DESCRIPTION = LegacyQuery(
    name="product_description",
    sql=(
        "SELECT products_id, products_name, products_description "
        "FROM products_description WHERE products_id=:product_id"
    ),
    columns=(
        ColumnSpec("products_id", "int"),
        ColumnSpec("products_name", "text", nullable=True),
        ColumnSpec("products_description", "text", nullable=True),
    ),
)

SEED_ATTRIBUTES = LegacyQuery(
    name="seed_attributes",
    sql=(
        "SELECT p.products_id, products_model, is_eco, "
        "    is_organic, is_heirloom, is_southern "
        "FROM sese_products_icons AS i "
        "RIGHT JOIN products AS p "
        "ON p.products_id=i.products_id"
    ),
    columns=(
        ColumnSpec("products_id", "int"),
        ColumnSpec("products_model", "text"),
        ColumnSpec("is_eco", "int", nullable=True),
        ColumnSpec("is_organic", "int", nullable=True),
        ColumnSpec("is_heirloom", "int", nullable=True),
        ColumnSpec("is_southern", "int", nullable=True),
    ),
)

PRODUCT_SALES = LegacyQuery(
    name="product_sales",
    sql=(
        "SELECT products_id, specials_new_products_price, expires_date, "
        "    specials_date_available "
        "FROM specials"
    ),
    columns=(
        ColumnSpec("products_id", "int"),
        ColumnSpec("specials_new_products_price", "decimal"),
        ColumnSpec("expires_date", "date"),
        ColumnSpec("specials_date_available", "date"),
    ),
)

PAGES = LegacyQuery(
    name="pages",
    sql='SELECT pages_title, pages_html_text FROM ezpages WHERE pages_html_text <> ""',
    columns=(
        ColumnSpec("pages_title", "text"),
        ColumnSpec("pages_html_text", "text", nullable=True),
    ),
)

STORE_CREDITS = LegacyQuery(
    name="store_credits",
    sql="SELECT customer_id, amount FROM coupon_gv_customer WHERE amount > 0",
    columns=(
        ColumnSpec("customer_id", "int"),
        ColumnSpec("amount", "decimal"),
    ),
)

CUSTOMERS = LegacyQuery(
    name="customers",
    sql=(
        "SELECT customers_id, customers_email_address "
        "FROM customers WHERE COWOA_account=:cowoa"
    ),
    columns=(
        ColumnSpec("customers_id", "int"),
        ColumnSpec("customers_email_address", "text"),
    ),
)

ADDRESSES = LegacyQuery(
    name="addresses",
    sql=(
        "SELECT a.address_book_id, a.entry_firstname, a.entry_lastname, "
        "    a.entry_company, a.entry_street_address, a.entry_suburb, "
        "    a.entry_postcode, a.entry_city, a.entry_state, "
        "    z.zone_name, co.countries_iso_code_2, c.customers_id, "
        "    c.customers_default_address_id "
        "FROM address_book AS a "
        "RIGHT JOIN customers AS c ON c.customers_id=a.customers_id "
        "LEFT JOIN zones AS z ON a.entry_zone_id=z.zone_id "
        "RIGHT JOIN countries AS co ON entry_country_id=co.countries_id "
        "WHERE a.address_book_id IS NOT NULL"
    ),
    columns=(
        ColumnSpec("address_book_id", "int"),
        ColumnSpec("entry_firstname", "text", nullable=True),
        ColumnSpec("entry_lastname", "text", nullable=True),
        ColumnSpec("entry_company", "text", nullable=True),
        ColumnSpec("entry_street_address", "text", nullable=True),
        ColumnSpec("entry_suburb", "text", nullable=True),
        ColumnSpec("entry_postcode", "text", nullable=True),
        ColumnSpec("entry_city", "text", nullable=True),
        ColumnSpec("entry_state", "text", nullable=True),
        # NULL zone falls back to the free-text state in the decoder.
        ColumnSpec("zone_name", "text", nullable=True, default=None),
        ColumnSpec("countries_iso_code_2", "text"),
        ColumnSpec("customers_id", "int"),
        ColumnSpec("customers_default_address_id", "int", nullable=True),
    ),
)

CART_ITEMS = LegacyQuery(
    name="cart_items",
    sql=(
        "SELECT customers_id, products_id, customers_basket_quantity "
        "FROM customers_basket ORDER BY customers_id"
    ),
    columns=(
        ColumnSpec("customers_id", "int"),
        ColumnSpec("products_id", "text"),
        ColumnSpec("customers_basket_quantity", "float"),
    ),
)

COUPONS = LegacyQuery(
    name="coupons",
    sql=(
        "SELECT c.coupon_id, coupon_type, coupon_code, "
        "    coupon_amount, coupon_minimum_order, coupon_expire_date, "
        "    uses_per_coupon, uses_per_user, coupon_active, "
        "    date_created, coupon_name, coupon_description "
        "FROM coupons AS c "
        "RIGHT JOIN coupons_description AS cd ON cd.coupon_id=c.coupon_id "
        'WHERE coupon_type <> "G"'
    ),
    columns=(
        ColumnSpec("coupon_id", "int"),
        ColumnSpec("coupon_type", "text"),
        ColumnSpec("coupon_code", "text"),
        ColumnSpec("coupon_amount", "decimal", nullable=True),
        ColumnSpec("coupon_minimum_order", "decimal", nullable=True),
        ColumnSpec("coupon_expire_date", "datetime"),
        ColumnSpec("uses_per_coupon", "int", nullable=True),
        ColumnSpec("uses_per_user", "int", nullable=True),
        ColumnSpec("coupon_active", "text"),
        ColumnSpec("date_created", "datetime"),
        ColumnSpec("coupon_name", "text", nullable=True),
        ColumnSpec("coupon_description", "text", nullable=True),
    ),
)
