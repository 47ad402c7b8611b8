"""
CLI commands for the legacy store migration.

Registered on the Flask app as ``flask migration ...``.
"""

from __future__ import annotations

import json

import click
from flask.cli import ScriptInfo

from config.legacy_exceptions import ExceptionTableError
from storefront.models import db

from .adapters import create_legacy_source
from .errors import MigrationError
from .pipeline import MigrationSummary, clean_carts, run_migration
from .settings import MigrationSettings


@click.group(name="migration")
def migration_cli():
    """Legacy store migration commands."""


def _format_summary(summary: MigrationSummary) -> str:
    lines = ["Migration completed."]
    lines.append(f"  rows_wiped         : {summary.rows_wiped}")
    lines.append(f"  cart_items_purged  : {summary.cart_items_purged}")
    for entity, counts in summary.entities.items():
        lines.append(
            f"  {entity:<19}: inserted={counts.inserted} skipped={counts.skipped} "
            f"merged={counts.merged} renamed={counts.renamed}"
        )
    return "\n".join(lines)


@migration_cli.command("run")
@click.option(
    "--summary-format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="How to print the run summary.",
)
@click.pass_context
def migration_run(ctx, summary_format: str):
    """Wipe the destination database and reload it from the legacy store."""
    info = ctx.ensure_object(ScriptInfo)
    app = info.load_app()
    with app.app_context():
        try:
            settings = MigrationSettings.from_config(app.config)
            source = create_legacy_source(app)
        except (MigrationError, ExceptionTableError) as exc:
            raise click.ClickException(str(exc)) from exc
        try:
            summary = run_migration(source, settings)
        except MigrationError as exc:
            raise click.ClickException(f"Migration failed: {exc}") from exc
        except Exception as exc:
            raise click.ClickException(f"Migration failed unexpectedly: {exc}") from exc
        finally:
            source.close()

    if summary_format == "json":
        click.echo(json.dumps(summary.as_dict(), indent=2))
    else:
        click.echo(_format_summary(summary))


@migration_cli.command("clean-carts")
@click.pass_context
def migration_clean_carts(ctx):
    """Drop inactive cart items and carts of customers who never logged in."""
    info = ctx.ensure_object(ScriptInfo)
    app = info.load_app()
    with app.app_context():
        try:
            removed = clean_carts()
            db.session.commit()
        except Exception as exc:
            db.session.rollback()
            raise click.ClickException(f"Cart cleanup failed: {exc}") from exc
    click.echo(f"Removed {removed['cart_items']} inactive cart item(s) and {removed['carts']} legacy cart(s).")
