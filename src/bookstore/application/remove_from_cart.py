"""Application service: Remove From Cart use case."""

from __future__ import annotations

import structlog

from bookstore.application.dto import CartDTO
from bookstore.application.mapping import cart_to_dto
from bookstore.domain.exceptions import CartNotFound
from bookstore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class RemoveFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, book_id: str) -> CartDTO:
        with self._uow as uow:
            cart = uow.carts.get_by_user_id(user_id)
            if cart is None:
                raise CartNotFound()
            cart.remove_item(book_id)
            uow.carts.save(cart)
            uow.commit()

        logger.info("cart_item_removed", user_id=user_id, book_id=book_id)
        return cart_to_dto(cart)
