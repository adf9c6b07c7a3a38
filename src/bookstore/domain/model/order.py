"""Order aggregate: the immutable record a checkout produces.

The Order is an aggregate root that owns its line items. Items and the
total are snapshots taken from the cart at checkout; only the status,
tracking number and timestamps change afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from bookstore.domain.exceptions import EmptyCart, InvalidTransition, ValidationError
from bookstore.domain.model.cart import Cart
from bookstore.domain.model.value_objects import (
    Money,
    PaymentInfo,
    Quantity,
    ShippingAddress,
)


class OrderStatus(Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    @staticmethod
    def parse(value: str) -> OrderStatus:
        try:
            return OrderStatus(value)
        except ValueError:
            raise ValidationError("Invalid order status") from None

    def can_transition(self, target: OrderStatus) -> bool:
        return target in _TRANSITIONS[self]


# Only processing has outgoing edges; everything else is terminal.
_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PROCESSING: frozenset(
        {
            OrderStatus.SHIPPED,
            OrderStatus.DELIVERED,
            OrderStatus.CANCELLED,
            OrderStatus.REFUNDED,
        }
    ),
    OrderStatus.SHIPPED: frozenset(),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}


@dataclass(frozen=True)
class OrderItem:
    """Price and title snapshot of a book at checkout time."""

    book_id: str
    title: str
    quantity: Quantity
    price: Money

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use ``Order.create()`` for new orders. The ``__init__`` stays simple
    so the repository can reconstitute persisted orders without
    recomputing anything, ``total_amount`` included.
    """

    id: int | None
    user_id: str
    items: tuple[OrderItem, ...]
    shipping_address: ShippingAddress
    payment_info: PaymentInfo
    total_amount: Money
    status: OrderStatus = OrderStatus.PROCESSING
    tracking_number: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        cart: Cart,
        shipping_address: ShippingAddress,
        payment_info: PaymentInfo,
    ) -> Order:
        """Build a processing order from the cart's current lines."""
        if cart.is_empty:
            raise EmptyCart()

        items = tuple(
            OrderItem(
                book_id=line.book_id,
                title=line.title,
                quantity=line.quantity,
                price=line.price,
            )
            for line in cart.items
        )
        return Order(
            id=None,
            user_id=cart.user_id,
            items=items,
            shipping_address=shipping_address,
            payment_info=payment_info,
            total_amount=cart.total,
        )

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition processing -> cancelled.

        Stock release is coordinated by the application handler inside
        the same unit of work.
        """
        if self.status != OrderStatus.PROCESSING:
            raise InvalidTransition(
                f"Order cannot be cancelled in '{self.status.value}' status"
            )
        self.status = OrderStatus.CANCELLED
        self._touch()

    def set_status(self, status: OrderStatus) -> None:
        """Operator override: any known status from any current one."""
        self.status = status
        self._touch()

    def set_tracking_number(self, tracking_number: str) -> None:
        self.tracking_number = tracking_number
        self._touch()

    # --- Internal helpers -----------------------------------------------------

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
