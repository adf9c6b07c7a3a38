"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from bookstore.application.cancel_order import CancelOrderHandler
from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.dto import (
    ROLE_ADMIN,
    ROLE_USER,
    OrderDTO,
    OrderPageDTO,
    PaymentSpec,
    Requester,
    ShippingAddressSpec,
)
from bookstore.application.list_orders import ListAllOrdersHandler, ListOrdersHandler
from bookstore.application.show_order import ShowOrderHandler
from bookstore.application.update_order_status import UpdateOrderStatusHandler
from bookstore.domain.exceptions import DomainException
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.model.value_objects import PaymentMethod
from bookstore.infrastructure.bootstrap import unit_of_work

user_option = click.option("--user", "user_id", required=True, help="User ID.")
admin_option = click.option(
    "--admin", is_flag=True, default=False, help="Act as an admin (any user's order)."
)


def _requester(user_id: str, admin: bool) -> Requester:
    return Requester(user_id=user_id, role=ROLE_ADMIN if admin else ROLE_USER)


def _money(amount) -> str:
    return f"${amount:.2f}"


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at.strftime('%Y-%m-%d %H:%M UTC')}")
    address = dto.shipping_address
    click.echo(
        f"Ship to:  {address.street}, {address.city}, {address.state} "
        f"{address.zip_code}, {address.country}"
    )
    click.echo(f"Payment:  {dto.payment_method} ({dto.payment_status})")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number}")
    click.echo()

    click.echo(f"  {'Title':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*57}")
    for item in dto.items:
        click.echo(
            f"  {item.title[:30]:<30} {item.quantity:>5} "
            f"{_money(item.price):>10} {_money(item.line_total):>10}"
        )
    click.echo(f"  {'-'*57}")
    click.echo(f"  {'Order Total':<37} {_money(dto.total_amount):>20}")


def _display_page(page: OrderPageDTO) -> None:
    if not page.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':>6} {'User':<20} {'Status':<12} {'Items':>6} {'Total':>12}  Created")
    click.echo("-" * 78)
    for dto in page.orders:
        click.echo(
            f"{dto.id:>6} {dto.user_id[:20]:<20} {dto.status:<12} {len(dto.items):>6} "
            f"{_money(dto.total_amount):>12}  {dto.created_at.strftime('%Y-%m-%d %H:%M')}"
        )
    click.echo(f"Page {page.current_page} of {max(page.total_pages, 1)}")


@click.command("create")
@user_option
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--zip-code", required=True)
@click.option("--country", required=True)
@click.option(
    "--payment-method",
    required=True,
    type=click.Choice([m.value for m in PaymentMethod]),
    help="How the order is paid.",
)
@click.option("--transaction-id", default=None, help="Payment transaction reference.")
def order_create(
    user_id: str,
    street: str,
    city: str,
    state: str,
    zip_code: str,
    country: str,
    payment_method: str,
    transaction_id: str | None,
) -> None:
    """Check out the user's cart into a new order (reserves stock)."""
    handler = CreateOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(
            user_id=user_id,
            shipping_address=ShippingAddressSpec(
                street=street,
                city=city,
                state=state,
                zip_code=zip_code,
                country=country,
            ),
            payment=PaymentSpec(method=payment_method, transaction_id=transaction_id),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@user_option
@admin_option
def order_show(order_id: int, user_id: str, admin: bool) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(_requester(user_id, admin), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@user_option
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
def order_list(user_id: str, page: int, limit: int) -> None:
    """List a user's orders, newest first."""
    handler = ListOrdersHandler(uow=unit_of_work())

    try:
        result = handler.handle(user_id, page=page, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_page(result)


@click.command("list-all")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in OrderStatus]),
    help="Only orders in this status.",
)
@click.option("--for-user", "for_user", default=None, help="Only this user's orders.")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
def order_list_all(status: str | None, for_user: str | None, page: int, limit: int) -> None:
    """List every order (admin)."""
    handler = ListAllOrdersHandler(uow=unit_of_work())

    try:
        result = handler.handle(page=page, limit=limit, status=status, user_id=for_user)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_page(result)


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@user_option
@admin_option
def order_cancel(order_id: int, user_id: str, admin: bool) -> None:
    """Cancel a processing order (returns its stock)."""
    handler = CancelOrderHandler(uow=unit_of_work())

    try:
        handler.handle(_requester(user_id, admin), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled, stock released.")


@click.command("update-status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", default=None, help="New status.")
@click.option("--tracking-number", default=None, help="Carrier tracking number.")
def order_update_status(
    order_id: int, status: str | None, tracking_number: str | None
) -> None:
    """Set an order's status and/or tracking number (admin)."""
    if status is None and tracking_number is None:
        raise click.ClickException("Nothing to update: pass --status and/or --tracking-number")

    handler = UpdateOrderStatusHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_id, status=status, tracking_number=tracking_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")
