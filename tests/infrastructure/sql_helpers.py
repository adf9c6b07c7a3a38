"""Shortcuts for arranging and inspecting a SQLite test database."""

from __future__ import annotations

from sqlalchemy import Engine

from bookstore.domain.model.book import Book
from bookstore.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork


def seed_books(engine: Engine, *books: Book) -> None:
    with SqlAlchemyUnitOfWork(engine) as uow:
        for book in books:
            uow.books.add(book)
        uow.commit()


def stock_of(engine: Engine, book_id: str) -> int:
    with SqlAlchemyUnitOfWork(engine) as uow:
        return uow.books.get_by_id(book_id).stock
