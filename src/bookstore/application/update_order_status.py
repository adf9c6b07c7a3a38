"""Application service: Update Order Status use case (admin).

Operators may set any of the known statuses from any current status,
and attach a tracking number. Only cancellation through
CancelOrderHandler touches stock; this override never does.
"""

from __future__ import annotations

import structlog

from bookstore.application.dto import OrderDTO
from bookstore.application.mapping import order_to_dto
from bookstore.domain.exceptions import OrderNotFound
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        status: str | None = None,
        tracking_number: str | None = None,
    ) -> OrderDTO:
        new_status = OrderStatus.parse(status) if status else None

        with self._uow as uow:
            order = uow.orders.get_for_update(order_id)
            if order is None:
                raise OrderNotFound()

            previous = order.status
            if new_status is not None:
                order.set_status(new_status)
            if tracking_number:
                order.set_tracking_number(tracking_number)

            uow.orders.save(order)
            uow.commit()

        if (
            new_status is not None
            and new_status != previous
            and not previous.can_transition(new_status)
        ):
            logger.warning(
                "order_status_overridden",
                order_id=order_id,
                previous=previous.value,
                status=new_status.value,
            )
        else:
            logger.info(
                "order_status_updated",
                order_id=order_id,
                status=order.status.value,
                tracking_number=order.tracking_number,
            )
        return order_to_dto(order)
