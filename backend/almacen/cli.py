# Overview: Flask CLI command group for sample data and stock consistency checks.

# backend/almacen/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Use: flask --app wsgi <group> <command> [options]
# - The default store is in-memory; set DATABASE_URL=sqlite:///almacen.sqlite3 to
#   keep data between commands.
#
# Catalog:
# - flask --app wsgi catalog seed [--reset --yes]
#   Load the demo catalog (idempotent; --reset empties every collection first).
# - flask --app wsgi catalog check
#   Audit product/inventory stock and status agreement; exits 1 on any drift.
# - flask --app wsgi catalog status-band 7
#   Print the status band a stock level falls in.

import click
from flask.cli import with_appcontext

from .seed import load_sample_data
from .services.record_store import get_record_store
from .services.stock_service import check_consistency, derive_status


@click.group('catalog')
def catalog_group():
    """Sample data and stock consistency commands."""


@catalog_group.command('seed')
@click.option('--reset', is_flag=True, help='Empty every collection before seeding')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def seed_catalog(reset, yes):
    """Load the demo products, inventory rows and movements."""
    store = get_record_store()
    if reset:
        if not yes:
            click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)
        store.reset()
        click.echo("PASS All collections emptied")

    counts = load_sample_data(store)
    if counts["products"] == 0:
        click.echo("SKIP Catalog not empty; nothing seeded")
    else:
        click.echo(f"PASS Seeded {counts['products']} products, {counts['movements']} movements")


@catalog_group.command('check')
@with_appcontext
def check_catalog():
    """Report products whose inventory row disagrees with them."""
    problems = check_consistency(get_record_store())
    if not problems:
        click.echo("PASS Stock and status are consistent")
        return

    for p in problems:
        click.echo(f"FAIL [{p.kind}] product={p.product_id} inventory={p.inventory_id}: {p.detail}")
    raise SystemExit(1)


@catalog_group.command('status-band')
@click.argument('stock', type=int)
def status_band(stock):
    """Print the status band for STOCK."""
    click.echo(derive_status(stock))


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(catalog_group)
