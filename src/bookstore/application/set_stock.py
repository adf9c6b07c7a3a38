"""Application service: Set Stock use case (catalog restock)."""

from __future__ import annotations

from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.domain.service.inventory_ledger import InventoryLedger


class SetStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: str, stock: int) -> None:
        """Set the stock level of a book; availability follows."""
        with self._uow as uow:
            InventoryLedger(uow.books).set_stock(book_id, stock)
            uow.commit()
