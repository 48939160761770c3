"""CLI commands for the catalog."""

from __future__ import annotations

import click

from perfumery.application.seed_catalog import SeedCatalogHandler
from perfumery.application.show_products import ShowProductsHandler
from perfumery.domain.exceptions import DomainException
from perfumery.domain.model.product import ProductCategory
from perfumery.infrastructure.cli.context import current_container


@click.command("list")
@click.option(
    "--category",
    type=click.Choice(["all"] + [c.value for c in ProductCategory]),
    default="all",
    show_default=True,
)
@click.option("--in-stock", is_flag=True, default=False, help="Only products in stock.")
def product_list(category: str, in_stock: bool) -> None:
    """List the products in the catalog."""
    handler = ShowProductsHandler(product_repo=current_container().product_repo)

    try:
        products = handler.handle(category=category, in_stock=in_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<20} {'Category':<10} {'Qty':>5} {'Price':>12}")
    click.echo("-" * 77)
    for p in products:
        click.echo(
            f"{p.id:<26} {p.name:<20} {p.category.value:<10} {p.quantity:>5} {str(p.price):>12}"
        )


@click.command("setup-db")
@click.confirmation_option(prompt="This replaces the whole catalog with the sample products. Continue?")
def setup_db() -> None:
    """Reseed the catalog with the sample perfumes."""
    handler = SeedCatalogHandler(product_repo=current_container().product_repo)

    try:
        summary = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{len(summary.products)} sample products inserted")
    click.echo()
    click.echo("Database Setup Summary:")
    click.echo("========================")
    for entry in summary.categories:
        click.echo(f"{entry.category.capitalize()}: {entry.count} products")
    click.echo()
    click.echo(f"Total inventory value: {summary.inventory_value}")
