"""CLI commands for a user's cart."""

from __future__ import annotations

import click

from bookstore.application.add_to_cart import AddToCartHandler
from bookstore.application.clear_cart import ClearCartHandler
from bookstore.application.dto import CartDTO
from bookstore.application.get_cart import GetCartHandler
from bookstore.application.remove_from_cart import RemoveFromCartHandler
from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure.bootstrap import unit_of_work

user_option = click.option("--user", "user_id", required=True, help="User ID.")


def _money(amount) -> str:
    return f"${amount:.2f}"


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo(f"Cart for {dto.user_id} is empty.")
        return

    click.echo(f"Cart for {dto.user_id}")
    click.echo()
    click.echo(f"  {'Book':<34} {'Title':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*86}")
    for item in dto.items:
        click.echo(
            f"  {item.book_id:<34} {item.title[:24]:<24} {item.quantity:>5} "
            f"{_money(item.price):>10} {_money(item.line_total):>10}"
        )
    click.echo(f"  {'-'*86}")
    click.echo(f"  {'Cart Total':<65} {_money(dto.total):>20}")


@click.command("show")
@user_option
def cart_show(user_id: str) -> None:
    """Show a user's cart."""
    handler = GetCartHandler(uow=unit_of_work())

    try:
        dto = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("add")
@user_option
@click.option("--book", "book_id", required=True, help="Book ID.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Units to add.")
def cart_add(user_id: str, book_id: str, quantity: int) -> None:
    """Add a book to a user's cart."""
    handler = AddToCartHandler(uow=unit_of_work())

    try:
        dto = handler.handle(user_id=user_id, book_id=book_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Item added to cart")
    _display_cart(dto)


@click.command("remove")
@user_option
@click.option("--book", "book_id", required=True, help="Book ID.")
def cart_remove(user_id: str, book_id: str) -> None:
    """Remove a book from a user's cart."""
    handler = RemoveFromCartHandler(uow=unit_of_work())

    try:
        dto = handler.handle(user_id=user_id, book_id=book_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Item removed from cart")
    _display_cart(dto)


@click.command("clear")
@user_option
def cart_clear(user_id: str) -> None:
    """Empty a user's cart."""
    handler = ClearCartHandler(uow=unit_of_work())

    try:
        handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Cart cleared")
