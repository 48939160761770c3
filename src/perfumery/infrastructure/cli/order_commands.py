"""CLI commands for the admin order desk."""

from __future__ import annotations

import click

from perfumery.application.dto import OrderUpdateSpec
from perfumery.application.list_orders import ListOrdersHandler
from perfumery.application.notifications.channels import NotificationResult
from perfumery.application.resend_confirmation import ResendConfirmationHandler
from perfumery.application.show_order import ShowOrderHandler
from perfumery.application.update_order import UpdateOrderHandler
from perfumery.domain.exceptions import DomainException
from perfumery.domain.model.order import Order, OrderStatus
from perfumery.domain.service.order_numbering import is_order_number
from perfumery.infrastructure.cli.context import current_container
from perfumery.infrastructure.web.schemas import iso

STATUS_CHOICES = click.Choice([s.value for s in OrderStatus])


def _display_order(order: Order) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {order.order_number}  (status={order.status.value})")
    click.echo(f"ID:       {order.id}")
    click.echo(f"Customer: {order.customer.full_name}  {order.customer.phone}")
    if order.customer.email:
        click.echo(f"Email:    {order.customer.email}")
    click.echo(f"Deliver:  {order.delivery.address}, {order.delivery.city}")
    click.echo(f"Payment:  {order.payment.method.label} ({order.payment.status.value})")
    click.echo(f"Created:  {iso(order.created_at)}")
    click.echo()

    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*56}")
    for item in order.items:
        click.echo(
            f"  {item.name:<24} {item.quantity.value:>5} "
            f"{str(item.unit_price):>12} {str(item.line_total):>12}"
        )
    click.echo(f"  {'-'*56}")
    click.echo(f"  {'Subtotal':<30} {str(order.totals.subtotal):>26}")
    click.echo(f"  {'Delivery':<30} {str(order.totals.delivery_charge):>26}")
    click.echo(f"  {'Order Total':<30} {str(order.totals.total):>26}")

    if order.admin_notes:
        click.echo()
        click.echo(f"Admin notes: {order.admin_notes}")


def _display_notifications(result: NotificationResult) -> None:
    for channel, outcome in (("email", result.email), ("sms", result.sms)):
        if outcome is None:
            click.echo(f"  {channel}: not attempted")
        elif outcome.success:
            click.echo(f"  {channel}: sent")
        else:
            click.echo(f"  {channel}: failed ({outcome.error})")


@click.command("show")
@click.argument("ref")
def order_show(ref: str) -> None:
    """Show an order by record ID or order number."""
    handler = ShowOrderHandler(order_repo=current_container().order_repo)

    try:
        if is_order_number(ref.upper()):
            order = handler.handle_number(ref.upper())
        else:
            order = handler.handle(ref)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(order)


@click.command("list")
@click.option("--status", type=STATUS_CHOICES, default=None, help="Only orders in this status.")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=20, show_default=True)
def order_list(status: str | None, page: int, limit: int) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=current_container().order_repo)

    try:
        result = handler.handle(status=status, page=page, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<13} {'Status':<11} {'Customer':<24} {'Total':>12}")
    click.echo("-" * 63)
    for o in result.orders:
        click.echo(
            f"{o.order_number:<13} {o.status.value:<11} "
            f"{o.customer.full_name:<24} {str(o.totals.total):>12}"
        )
    click.echo(
        f"\nPage {result.current_page} of {result.total_pages} "
        f"({result.total_orders} orders)"
    )


@click.command("update")
@click.argument("order_id")
@click.option("--status", type=STATUS_CHOICES, default=None, help="New order status.")
@click.option("--payment-status", default=None, help="pending, paid or failed.")
@click.option("--notes", "admin_notes", default=None, help="Replace the admin notes.")
def order_update(
    order_id: str,
    status: str | None,
    payment_status: str | None,
    admin_notes: str | None,
) -> None:
    """Update an order; a status change notifies the customer."""
    container = current_container()
    handler = UpdateOrderHandler(order_repo=container.order_repo, dispatcher=container.dispatcher)

    try:
        revision = handler.handle(
            order_id,
            OrderUpdateSpec(status=status, admin_notes=admin_notes, payment_status=payment_status),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    order = revision.order
    click.echo(f"Order {order.order_number} updated  (status={order.status.value})")
    if revision.notifications is not None:
        click.echo("Customer notified:")
        _display_notifications(revision.notifications)


@click.command("resend")
@click.argument("order_id")
def order_resend(order_id: str) -> None:
    """Send the order confirmation again."""
    container = current_container()
    handler = ResendConfirmationHandler(
        order_repo=container.order_repo,
        dispatcher=container.dispatcher,
    )

    try:
        result = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Confirmation sent:")
    _display_notifications(result)
