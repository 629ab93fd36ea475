import sys

import click
import uvicorn

from storefront.infrastructure.api.app import create_app
from storefront.infrastructure.bootstrap import build_services
from storefront.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_create,
    product_list,
    product_show,
    product_stock,
    product_update,
)
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront: catalog, orders and users"""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.ClickException(str(exc))

    # stdout carries command output only.
    configure_logging(settings, stream=sys.stderr)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: STOREFRONT_HOST).")
@click.option("--port", default=None, type=int, help="Port (default: STOREFRONT_PORT).")
@click.pass_obj
def serve(settings: Settings, host: str | None, port: int | None) -> None:
    """Run the HTTP gateway."""
    app = create_app(build_services(settings))
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_create)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_stock)
product.add_command(product_update)
