"""Abstract repository for the Book aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Stock changes go through ``adjust_stock`` only, which
the InventoryLedger is the sole caller of.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.book import Book


class BookRepository(ABC):

    @abstractmethod
    def get_by_id(self, book_id: str) -> Book | None:
        """Return a book by its ID, or None if not found."""

    @abstractmethod
    def get_for_update(self, book_id: str) -> Book | None:
        """Return a book, locking its row for the rest of the unit of work."""

    @abstractmethod
    def get_by_isbn(self, isbn: str) -> Book | None:
        """Return a book by its ISBN, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Book]:
        """Return every book in the catalog."""

    @abstractmethod
    def add(self, book: Book) -> None:
        """Insert a new book."""

    @abstractmethod
    def adjust_stock(self, book_id: str, delta: int) -> bool:
        """Atomically add *delta* to the book's stock.

        Returns False, changing nothing, if the book is missing or the
        result would be negative. Availability is rewritten with stock.
        """

    @abstractmethod
    def set_stock(self, book_id: str, stock: int) -> bool:
        """Overwrite the book's stock. Returns False if the book is missing."""
