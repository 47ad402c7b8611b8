"""
Legacy store migration feature package.

Registers the ``migration`` CLI group and applies the metrics toggle.
"""

from __future__ import annotations

from flask import Flask

from .cli import migration_cli
from .errors import MigrationError, RequiredReferenceError, RowDecodeError, ValueDecodeError, VariantSkuConflictError
from .metrics import set_metrics_enabled
from .pipeline import MigrationSummary, run_migration
from .settings import MigrationSettings

MIGRATION_EXTENSION_KEY = "migration"

__all__ = [
    "init_migration",
    "MIGRATION_EXTENSION_KEY",
    "MigrationError",
    "MigrationSettings",
    "MigrationSummary",
    "RequiredReferenceError",
    "RowDecodeError",
    "ValueDecodeError",
    "VariantSkuConflictError",
    "run_migration",
]


def init_migration(app: Flask) -> None:
    """Mount the migration CLI and record the metrics flag on ``app.extensions``."""
    metrics_enabled = bool(app.config.get("MIGRATION_METRICS_ENABLED", True))
    set_metrics_enabled(metrics_enabled)
    app.extensions[MIGRATION_EXTENSION_KEY] = {"metrics_enabled": metrics_enabled}

    # Avoid duplicate registrations when running tests
    if migration_cli.name in app.cli.commands:
        app.cli.commands.pop(migration_cli.name)
    app.cli.add_command(migration_cli)
