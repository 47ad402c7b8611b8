# scripts/migrate_legacy.py

"""
Legacy store migration script.
Wipes the storefront database and reloads it from the ZenCart store at
LEGACY_DATABASE_URL. Takes no arguments; configuration comes from the
environment (see .env.example).

Exit codes: 0 on success, 1 on any fatal migration error.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import app
from config.legacy_exceptions import ExceptionTableError
from storefront.migration import MigrationError, MigrationSettings, run_migration
from storefront.migration.adapters import create_legacy_source


def migrate_legacy():
    """Run the full migration and print the per-entity summary"""
    with app.app_context():
        try:
            settings = MigrationSettings.from_config(app.config)
            source = create_legacy_source(app)
        except (MigrationError, ExceptionTableError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

        try:
            summary = run_migration(source, settings)
        except MigrationError as exc:
            print(f"Migration failed: {exc}", file=sys.stderr)
            return 1
        except Exception as exc:
            print(f"Migration failed unexpectedly: {exc}", file=sys.stderr)
            return 1
        finally:
            source.close()

    print("\nMigration complete!")
    for entity, counts in summary.entities.items():
        print(
            f"  - {entity}: inserted={counts.inserted} skipped={counts.skipped} "
            f"merged={counts.merged} renamed={counts.renamed}"
        )
    print(f"  - cart items purged: {summary.cart_items_purged}")
    return 0


if __name__ == "__main__":
    sys.exit(migrate_legacy())
