import click

from bookstore.infrastructure.bootstrap import init_logging
from bookstore.infrastructure.cli.book_commands import book_add, book_list, book_stock
from bookstore.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
)
from bookstore.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_list_all,
    order_show,
    order_update_status,
)


@click.group()
def cli() -> None:
    """Bookstore carts, checkout and orders."""
    init_logging()


@cli.group()
def book() -> None:
    """Manage books and stock."""


@cli.group()
def cart() -> None:
    """Manage a user's cart."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
book.add_command(book_add)
book.add_command(book_list)
book.add_command(book_stock)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_list_all)
order.add_command(order_show)
order.add_command(order_update_status)
