"""CLI commands for the catalog and its stock."""

from __future__ import annotations

import click

from bookstore.application.add_book import AddBookHandler
from bookstore.application.set_stock import SetStockHandler
from bookstore.application.show_inventory import ShowInventoryHandler
from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--isbn", required=True, help="ISBN (unique).")
@click.option("--title", required=True, help="Book title.")
@click.option("--author", required=True, help="Author name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, show_default=True, help="Units in stock.")
@click.option("--cover-image", default=None, help="Cover image file name.")
def book_add(
    isbn: str, title: str, author: str, price: str, stock: int, cover_image: str | None
) -> None:
    """Add a new book to the catalog."""
    handler = AddBookHandler(uow=unit_of_work())

    try:
        book = handler.handle(
            isbn=isbn,
            title=title,
            author=author,
            price=price,
            stock=stock,
            cover_image=cover_image,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {book.id} '{book.title}' added at {book.price} (stock={book.stock})")


@click.command("list")
def book_list() -> None:
    """List every book with its stock level."""
    handler = ShowInventoryHandler(uow=unit_of_work())

    try:
        lines = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<34} {'Title':<30} {'Price':>10} {'Stock':>7} {'Available':>10}")
    click.echo("-" * 95)
    for line in lines:
        available = "yes" if line.is_available else "no"
        click.echo(
            f"{line.id:<34} {line.title[:30]:<30} {'$' + format(line.price, '.2f'):>10} "
            f"{line.stock:>7} {available:>10}"
        )


@click.command("stock")
@click.option("--id", "book_id", required=True, help="Book ID.")
@click.option("--quantity", required=True, type=int, help="New stock level.")
def book_stock(book_id: str, quantity: int) -> None:
    """Set the stock level of a book."""
    handler = SetStockHandler(uow=unit_of_work())

    try:
        handler.handle(book_id=book_id, stock=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for book {book_id} set to {quantity}")
