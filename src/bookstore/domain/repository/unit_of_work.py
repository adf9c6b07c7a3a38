"""Abstract unit of work: one atomic transaction across all repositories.

Handlers open a unit with ``with uow:``, work through ``uow.books``,
``uow.carts`` and ``uow.orders``, and call ``commit()``. Leaving the
block without committing, normally or by exception, rolls back every
write made inside it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.cart_repository import CartRepository
from bookstore.domain.repository.order_repository import OrderRepository


class UnitOfWork(ABC):

    books: BookRepository
    carts: CartRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write in this unit durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted write. Safe to call after commit."""
