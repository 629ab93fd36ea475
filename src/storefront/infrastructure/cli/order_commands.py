"""CLI commands for orders."""

from __future__ import annotations

import click

from storefront.application.dto import OrderItemSpec
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import Order
from storefront.infrastructure.bootstrap import build_services


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'PRODUCT_ID:QTY:PRICE,PRODUCT_ID:QTY:PRICE' into specs."""
    specs: list[OrderItemSpec] = []
    for triple in raw.split(","):
        triple = triple.strip()
        parts = triple.split(":")
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{triple}'. Expected 'ProductId:Quantity:Price'."
            )
        product_id, qty_str, price = (part.strip() for part in parts)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty, price=price))
    return specs


def _display_order(order: Order) -> None:
    click.echo(f"Order {order.id}  (status={order.status})")
    click.echo(f"User:    {order.user_id}")
    click.echo(f"Created: {order.created_at:%Y-%m-%d %H:%M UTC}")
    click.echo()
    click.echo(f"  {'Product':<34} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*62}")
    for item in order.items:
        click.echo(
            f"  {item.product_id:<34} {item.quantity.value:>5} "
            f"{str(item.unit_price):>10} {str(item.line_total):>10}"
        )
    click.echo(f"  {'-'*62}")
    click.echo(f"  {'Order Total':<40} {str(order.total_amount):>21}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="Owning user ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty:Price,...'.")
def order_create(user_id: str, items: str) -> None:
    """Place a new order at the given prices."""
    specs = _parse_items(items)
    orders = build_services().orders

    try:
        order = orders.create(user_id, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(order)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    orders = build_services().orders

    try:
        order = orders.get(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(order)


@click.command("list")
@click.option("--user", "user_id", default="", help="Only list this user's orders.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def order_list(user_id: str, page: int, limit: int) -> None:
    """List orders, newest first."""
    orders = build_services().orders

    try:
        result = orders.list(user_id, page, limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<34} {'User':<34} {'Status':<12} {'Total':>10}")
    click.echo("-" * 93)
    for o in result.items:
        click.echo(f"{o.id:<34} {o.user_id:<34} {o.status:<12} {str(o.total_amount):>10}")
    click.echo(f"Page {result.page}, {len(result.items)} of {result.total} orders")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--set", "status", required=True, help="New status, e.g. shipped.")
def order_status(order_id: str, status: str) -> None:
    """Overwrite an order's status."""
    orders = build_services().orders

    try:
        order = orders.update_status(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order.id} status set to '{order.status}'.")
