"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import Product
from storefront.infrastructure.bootstrap import build_services


def _display_product(product: Product) -> None:
    click.echo(f"Product {product.id}")
    click.echo(f"  Name:        {product.name}")
    click.echo(f"  Description: {product.description}")
    click.echo(f"  Category:    {product.category}")
    click.echo(f"  Price:       {product.price}")
    click.echo(f"  Stock:       {product.stock_quantity}")


@click.command("create")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Initial stock quantity.")
@click.option("--category", default="", help="Category used for list filtering.")
@click.option("--description", default="", help="Free-form description.")
def product_create(name: str, price: str, stock: int, category: str, description: str) -> None:
    """Add a new product to the catalog."""
    catalog = build_services().catalog

    try:
        product = catalog.create(
            name=name,
            description=description,
            price=price,
            stock_quantity=stock,
            category=category,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' created at {product.price}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product."""
    catalog = build_services().catalog

    try:
        product = catalog.get(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(product)


@click.command("list")
@click.option("--category", default="", help="Only list products in this category.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def product_list(category: str, page: int, limit: int) -> None:
    """List products, newest first."""
    catalog = build_services().catalog

    try:
        result = catalog.list(category, page, limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 74)
    for p in result.items:
        click.echo(f"{p.id:<34} {p.name:<20} {str(p.price):>10} {p.stock_quantity:>7}")
    click.echo(f"Page {result.page}, {len(result.items)} of {result.total} products")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.option("--category", default="", help="New category.")
@click.option("--description", default="", help="New description.")
def product_update(
    product_id: str, name: str, price: str, category: str, description: str
) -> None:
    """Replace a product's name, description, price and category."""
    catalog = build_services().catalog

    try:
        product = catalog.update(
            product_id,
            name=name,
            description=description,
            price=price,
            category=category,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(product)


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Stock change; negative consumes stock.")
def product_stock(product_id: str, delta: int) -> None:
    """Adjust a product's stock count."""
    catalog = build_services().catalog

    try:
        product = catalog.adjust_stock(product_id, delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} stock is now {product.stock_quantity}")
