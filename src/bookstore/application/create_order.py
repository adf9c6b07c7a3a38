"""Application service: Create Order (checkout) use case.

Turns the user's cart into an order. Everything happens inside one unit
of work:

1. Lock and load the cart (EmptyCart if there is nothing in it), so a
   second checkout of the same cart waits and then finds it empty.
2. Lock and re-check every book, then reserve stock for every line.
3. Build the order from the cart lines (price snapshot) and insert it.
4. Empty the cart.
5. Commit.

If any step raises, the unit of work rolls back and stock, cart and
orders are exactly as they were before the call.
"""

from __future__ import annotations

import structlog

from bookstore.application.dto import OrderDTO, PaymentSpec, ShippingAddressSpec
from bookstore.application.mapping import order_to_dto
from bookstore.domain.exceptions import EmptyCart, InsufficientStock
from bookstore.domain.model.order import Order
from bookstore.domain.model.value_objects import PaymentInfo, ShippingAddress
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str,
        shipping_address: ShippingAddressSpec,
        payment: PaymentSpec,
    ) -> OrderDTO:
        address = ShippingAddress(
            street=shipping_address.street,
            city=shipping_address.city,
            state=shipping_address.state,
            zip_code=shipping_address.zip_code,
            country=shipping_address.country,
        )
        payment_info = PaymentInfo.of(
            payment.method,
            status=payment.status,
            transaction_id=payment.transaction_id,
        )

        with self._uow as uow:
            cart = uow.carts.get_for_update(user_id)
            if cart is None or cart.is_empty:
                raise EmptyCart()

            try:
                InventoryLedger(uow.books).reserve_all(cart.items)
            except InsufficientStock as exc:
                logger.info(
                    "order_rejected",
                    user_id=user_id,
                    book_id=exc.book_id,
                    reason="insufficient_stock",
                )
                raise

            order = Order.create(cart, address, payment_info)
            uow.orders.add(order)

            cart.clear()
            uow.carts.save(cart)

            uow.commit()

        logger.info(
            "order_created",
            order_id=order.id,
            user_id=user_id,
            items=len(order.items),
            total_amount=str(order.total_amount.amount),
        )
        return order_to_dto(order)
