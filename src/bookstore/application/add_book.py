"""Application service: Add Book use case (catalog seeding)."""

from __future__ import annotations

import uuid

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.book import DEFAULT_COVER_IMAGE, Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import UnitOfWork


class AddBookHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        isbn: str,
        title: str,
        author: str,
        price: str,
        stock: int = 0,
        cover_image: str | None = None,
    ) -> Book:
        """Add a new book to the catalog."""
        if not title or not title.strip():
            raise ValidationError("Book must have a title")
        if not isbn or not isbn.strip():
            raise ValidationError("Book must have an ISBN")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")

        book = Book(
            id=uuid.uuid4().hex,
            isbn=isbn.strip(),
            title=title.strip(),
            author=author.strip(),
            price=Money.of(price),
            stock=stock,
            cover_image=cover_image or DEFAULT_COVER_IMAGE,
        )

        with self._uow as uow:
            if uow.books.get_by_isbn(book.isbn) is not None:
                raise ValidationError(f"Book with ISBN '{book.isbn}' already exists")
            uow.books.add(book)
            uow.commit()

        return book
