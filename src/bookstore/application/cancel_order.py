"""Application service: Cancel Order use case.

Only a processing order can be cancelled. The status change and the
release of every item's stock commit together or not at all, so a
second cancel of the same order is rejected by the status guard and
never credits stock twice. The order row is locked before the guard
runs, so a concurrent cancel sees the committed status.
"""

from __future__ import annotations

import structlog

from bookstore.application.dto import OrderDTO, Requester
from bookstore.application.mapping import order_to_dto
from bookstore.application.show_order import find_order_for
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, requester: Requester, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = find_order_for(uow, requester, order_id, for_update=True)

            order.cancel()
            uow.orders.save(order)
            InventoryLedger(uow.books).release_all(order.items)

            uow.commit()

        logger.info(
            "order_cancelled",
            order_id=order_id,
            user_id=order.user_id,
            cancelled_by=requester.user_id,
        )
        return order_to_dto(order)
