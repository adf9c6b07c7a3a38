"""SQLAlchemy-backed implementation of BookRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Connection, RowMapping, insert, select, update

from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.infrastructure.persistence.tables import books


class SqlBookRepository(BookRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    # --- BookRepository interface ---------------------------------------------

    def get_by_id(self, book_id: str) -> Book | None:
        row = self._connection.execute(
            select(books).where(books.c.id == book_id)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def get_for_update(self, book_id: str) -> Book | None:
        # FOR UPDATE is dropped by the SQLite dialect, where BEGIN IMMEDIATE
        # already serialises writers.
        row = self._connection.execute(
            select(books).where(books.c.id == book_id).with_for_update()
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def get_by_isbn(self, isbn: str) -> Book | None:
        row = self._connection.execute(
            select(books).where(books.c.isbn == isbn)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Book]:
        rows = self._connection.execute(select(books).order_by(books.c.title)).mappings()
        return [self._to_domain(row) for row in rows]

    def add(self, book: Book) -> None:
        self._connection.execute(insert(books).values(**self._to_raw(book)))

    def adjust_stock(self, book_id: str, delta: int) -> bool:
        new_stock = books.c.stock + delta
        result = self._connection.execute(
            update(books)
            .where(books.c.id == book_id, new_stock >= 0)
            .values(stock=new_stock, is_available=new_stock > 0)
        )
        return result.rowcount == 1

    def set_stock(self, book_id: str, stock: int) -> bool:
        result = self._connection.execute(
            update(books)
            .where(books.c.id == book_id)
            .values(stock=stock, is_available=stock > 0)
        )
        return result.rowcount == 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(book: Book) -> dict:
        return {
            "id": book.id,
            "isbn": book.isbn,
            "title": book.title,
            "author": book.author,
            "price": str(book.price.amount),
            "currency": book.price.currency,
            "cover_image": book.cover_image,
            "stock": book.stock,
            "is_available": book.is_available,
        }

    @staticmethod
    def _to_domain(raw: RowMapping) -> Book:
        return Book(
            id=raw["id"],
            isbn=raw["isbn"],
            title=raw["title"],
            author=raw["author"],
            price=Money(Decimal(raw["price"]), raw["currency"]),
            stock=raw["stock"],
            cover_image=raw["cover_image"],
        )
