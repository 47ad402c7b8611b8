# scripts/clean_carts.py

"""
Cart maintenance script.
Removes cart items for inactive variants and drops the carts of customers
who still carry a legacy password, i.e. have not logged in since the
migration.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import app
from storefront.migration.pipeline import clean_carts
from storefront.models import db


def main():
    with app.app_context():
        removed = clean_carts()
        db.session.commit()
    print(f"Removed {removed['cart_items']} inactive cart item(s) and {removed['carts']} legacy cart(s).")


if __name__ == "__main__":
    main()
