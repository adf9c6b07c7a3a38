"""Application service: Clear Cart use case.

Clearing empties the cart; the cart itself stays.
"""

from __future__ import annotations

import structlog

from bookstore.domain.exceptions import CartNotFound
from bookstore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> None:
        with self._uow as uow:
            cart = uow.carts.get_by_user_id(user_id)
            if cart is None:
                raise CartNotFound()
            cart.clear()
            uow.carts.save(cart)
            uow.commit()

        logger.info("cart_cleared", user_id=user_id)
