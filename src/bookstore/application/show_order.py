"""Application service: Show Order use case (query).

Users only see their own orders; admins can see any order.
"""

from __future__ import annotations

from bookstore.application.dto import OrderDTO, Requester
from bookstore.application.mapping import order_to_dto
from bookstore.domain.exceptions import OrderNotFound
from bookstore.domain.model.order import Order
from bookstore.domain.repository.unit_of_work import UnitOfWork


def find_order_for(
    uow: UnitOfWork, requester: Requester, order_id: int, for_update: bool = False
) -> Order:
    """Load an order the requester may see; with *for_update* its row is locked."""
    user_id = None if requester.is_admin else requester.user_id
    if for_update:
        order = uow.orders.get_for_update(order_id, user_id)
    elif user_id is None:
        order = uow.orders.get_by_id(order_id)
    else:
        order = uow.orders.get_for_user(order_id, user_id)
    if order is None:
        raise OrderNotFound()
    return order


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, requester: Requester, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = find_order_for(uow, requester, order_id)
        return order_to_dto(order)
