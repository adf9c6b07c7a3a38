"""Application service: Add To Cart use case.

Availability is checked once, when the book is added. Adding more of a
book already in the cart only bumps the line's quantity; stock is
enforced again at checkout, not here.
"""

from __future__ import annotations

import structlog

from bookstore.application.dto import CartDTO
from bookstore.application.get_cart import get_or_create_cart
from bookstore.application.mapping import cart_to_dto
from bookstore.domain.model.value_objects import Quantity
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, book_id: str, quantity: int = 1) -> CartDTO:
        qty = Quantity(quantity)

        with self._uow as uow:
            book = InventoryLedger(uow.books).require_available(book_id, qty.value)

            cart = get_or_create_cart(uow, user_id)
            cart.add_item(book, qty)  # <-- title/price snapshot
            uow.carts.save(cart)
            uow.commit()

        logger.info("cart_item_added", user_id=user_id, book_id=book_id, quantity=qty.value)
        return cart_to_dto(cart)
