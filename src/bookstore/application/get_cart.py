"""Application service: Get Cart use case.

A cart is created implicitly the first time a user reads or writes
it, so asking for a cart never fails.
"""

from __future__ import annotations

from bookstore.application.dto import CartDTO
from bookstore.application.mapping import cart_to_dto
from bookstore.domain.model.cart import Cart
from bookstore.domain.repository.unit_of_work import UnitOfWork


def get_or_create_cart(uow: UnitOfWork, user_id: str) -> Cart:
    cart = uow.carts.get_by_user_id(user_id)
    if cart is None:
        cart = Cart(user_id=user_id)
        uow.carts.save(cart)
    return cart


class GetCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> CartDTO:
        with self._uow as uow:
            cart = get_or_create_cart(uow, user_id)
            uow.commit()
        return cart_to_dto(cart)
