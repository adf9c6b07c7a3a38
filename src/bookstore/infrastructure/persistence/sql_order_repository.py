"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Connection, RowMapping, Select, func, insert, select, update

from bookstore.domain.model.order import Order, OrderItem, OrderStatus
from bookstore.domain.model.value_objects import (
    Money,
    PaymentInfo,
    PaymentMethod,
    PaymentStatus,
    Quantity,
    ShippingAddress,
)
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.infrastructure.persistence.tables import as_utc, orders


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._connection.execute(
            select(orders).where(orders.c.id == order_id)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def get_for_user(self, order_id: int, user_id: str) -> Order | None:
        row = self._connection.execute(
            select(orders).where(orders.c.id == order_id, orders.c.user_id == user_id)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def get_for_update(self, order_id: int, user_id: str | None = None) -> Order | None:
        stmt = select(orders).where(orders.c.id == order_id)
        if user_id is not None:
            stmt = stmt.where(orders.c.user_id == user_id)
        row = self._connection.execute(stmt.with_for_update()).mappings().first()
        return self._to_domain(row) if row is not None else None

    def find(
        self,
        *,
        user_id: str | None = None,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Order]:
        stmt = (
            self._filtered(select(orders), user_id, status)
            .order_by(orders.c.created_at.desc(), orders.c.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return [self._to_domain(row) for row in self._connection.execute(stmt).mappings()]

    def count(
        self,
        *,
        user_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> int:
        stmt = self._filtered(select(func.count()).select_from(orders), user_id, status)
        return self._connection.execute(stmt).scalar_one()

    def add(self, order: Order) -> None:
        raw = self._to_raw(order)
        raw.pop("id")
        result = self._connection.execute(insert(orders).values(**raw))
        order.id = result.inserted_primary_key[0]

    def save(self, order: Order) -> None:
        # Items, address, payment and total are immutable after creation.
        self._connection.execute(
            update(orders)
            .where(orders.c.id == order.id)
            .values(
                status=order.status.value,
                tracking_number=order.tracking_number,
                updated_at=order.updated_at,
            )
        )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _filtered(stmt: Select, user_id: str | None, status: OrderStatus | None) -> Select:
        if user_id is not None:
            stmt = stmt.where(orders.c.user_id == user_id)
        if status is not None:
            stmt = stmt.where(orders.c.status == status.value)
        return stmt

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        address = order.shipping_address
        return {
            "id": order.id,
            "user_id": order.user_id,
            "items": [
                {
                    "book_id": item.book_id,
                    "title": item.title,
                    "quantity": item.quantity.value,
                    "price": str(item.price.amount),
                    "currency": item.price.currency,
                }
                for item in order.items
            ],
            "shipping_address": {
                "street": address.street,
                "city": address.city,
                "state": address.state,
                "zip_code": address.zip_code,
                "country": address.country,
            },
            "payment_method": order.payment_info.method.value,
            "payment_status": order.payment_info.status.value,
            "transaction_id": order.payment_info.transaction_id,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "status": order.status.value,
            "tracking_number": order.tracking_number,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
        }

    @staticmethod
    def _to_domain(raw: RowMapping) -> Order:
        items = tuple(
            OrderItem(
                book_id=i["book_id"],
                title=i["title"],
                quantity=Quantity(i["quantity"]),
                price=Money(Decimal(i["price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        )
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            payment_info=PaymentInfo(
                method=PaymentMethod(raw["payment_method"]),
                status=PaymentStatus(raw["payment_status"]),
                transaction_id=raw["transaction_id"],
            ),
            total_amount=Money(Decimal(raw["total_amount"]), raw["currency"]),
            status=OrderStatus(raw["status"]),
            tracking_number=raw["tracking_number"],
            created_at=as_utc(raw["created_at"]),
            updated_at=as_utc(raw["updated_at"]),
        )
