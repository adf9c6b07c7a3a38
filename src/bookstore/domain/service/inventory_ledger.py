"""Domain service: Inventory Ledger.

The ledger is the only code allowed to change a book's stock. Every
call runs against the repositories of the caller's unit of work, so
nothing it does is durable until that unit commits.

Reservations read the book with a locking read and then decrement with
a conditional update that refuses to go below zero. The read gives a
useful error message; the conditional update is what actually keeps
two concurrent checkouts from overdrawing the same book.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

import structlog

from bookstore.domain.exceptions import (
    BookNotFound,
    BookUnavailable,
    InsufficientStock,
    ValidationError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Quantity
from bookstore.domain.repository.book_repository import BookRepository

logger = structlog.get_logger(__name__)


class StockLine(Protocol):
    """Anything that names a book and a quantity: cart lines, order items."""

    book_id: str
    title: str
    quantity: Quantity


class InventoryLedger:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def check_available(self, book_id: str, quantity: int) -> bool:
        book = self._book_repo.get_by_id(book_id)
        return book is not None and book.can_supply(quantity)

    def require_available(self, book_id: str, quantity: int) -> Book:
        """Return the book if it can supply *quantity*.

        Raises BookNotFound for an unknown book and BookUnavailable when
        stock is short.
        """
        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise BookNotFound()
        if not book.can_supply(quantity):
            raise BookUnavailable()
        return book

    def reserve(self, book_id: str, quantity: int) -> None:
        """Take *quantity* units of the book out of stock.

        Raises InsufficientStock if the book is missing, unavailable or
        short.
        """
        book = self._book_repo.get_for_update(book_id)
        self._reserve_checked(book_id, book, quantity)

    def release(self, book_id: str, quantity: int) -> None:
        """Return *quantity* units of a previous reservation to stock.

        A book deleted from the catalog since it was reserved has no
        stock to return to and is skipped.
        """
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        if not self._book_repo.adjust_stock(book_id, quantity):
            logger.warning("stock_release_skipped", book_id=book_id, quantity=quantity)
            return
        logger.info("stock_released", book_id=book_id, quantity=quantity)

    def reserve_all(self, lines: Iterable[StockLine]) -> None:
        """Reserve stock for every line, or for none of them.

        Uses a two-phase approach:
          Phase 1: lock and validate every line. Fails on the first
                    short line before any stock changes.
          Phase 2: decrement each line.

        Phase 2 can still fail if the store refuses a decrement; the
        caller's unit of work then rolls back the lines already taken.
        """
        checked: list[tuple[StockLine, Book | None]] = []

        # Phase 1: lock and validate
        for line in lines:
            book = self._book_repo.get_for_update(line.book_id)
            if book is None or not book.can_supply(line.quantity.value):
                logger.info(
                    "checkout_rejected",
                    book_id=line.book_id,
                    requested=line.quantity.value,
                    stock=None if book is None else book.stock,
                )
                raise InsufficientStock(line.book_id, line.title)
            checked.append((line, book))

        # Phase 2: decrement
        for line, book in checked:
            self._reserve_checked(line.book_id, book, line.quantity.value, line.title)

    def release_all(self, lines: Iterable[StockLine]) -> None:
        for line in lines:
            self.release(line.book_id, line.quantity.value)

    def set_stock(self, book_id: str, stock: int) -> None:
        """Overwrite the stock level (catalog restock or correction)."""
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        if not self._book_repo.set_stock(book_id, stock):
            raise BookNotFound()
        logger.info("stock_set", book_id=book_id, stock=stock)

    # --- Internal helpers -----------------------------------------------------

    def _reserve_checked(
        self,
        book_id: str,
        book: Book | None,
        quantity: int,
        title: str | None = None,
    ) -> None:
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        label = title or (book.title if book is not None else book_id)
        if book is None or not book.can_supply(quantity):
            raise InsufficientStock(book_id, label)
        if not self._book_repo.adjust_stock(book_id, -quantity):
            raise InsufficientStock(book_id, label)
        logger.info("stock_reserved", book_id=book_id, quantity=quantity)
