"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from bookstore.application.dto import BookStockDTO
from bookstore.domain.repository.unit_of_work import UnitOfWork


class ShowInventoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[BookStockDTO]:
        with self._uow as uow:
            books = uow.books.list_all()
        return [
            BookStockDTO(
                id=book.id,
                isbn=book.isbn,
                title=book.title,
                price=book.price.amount,
                stock=book.stock,
                is_available=book.is_available,
            )
            for book in books
        ]
