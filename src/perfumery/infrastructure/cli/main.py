import click
import uvicorn

from perfumery.infrastructure.cli.context import current_container
from perfumery.infrastructure.cli.order_commands import (
    order_list,
    order_resend,
    order_show,
    order_update,
)
from perfumery.infrastructure.cli.product_commands import product_list, setup_db
from perfumery.infrastructure.observability import configure_logging
from perfumery.infrastructure.web.app import create_app


@click.group()
def cli() -> None:
    """Herman Perfume storefront backend"""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to HOST).")
@click.option("--port", type=int, default=None, help="Port (defaults to PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API and storefront pages."""
    container = current_container()
    settings = container.settings
    configure_logging(log_level=settings.log_level, json_format=settings.log_json)
    uvicorn.run(
        create_app(container),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


# Register subcommands
cli.add_command(setup_db)
order.add_command(order_list)
order.add_command(order_resend)
order.add_command(order_show)
order.add_command(order_update)
product.add_command(product_list)
