"""SQLAlchemy-backed implementation of CartRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Connection, RowMapping, insert, select, update

from bookstore.domain.model.cart import Cart, CartItem
from bookstore.domain.model.value_objects import Money, Quantity
from bookstore.domain.repository.cart_repository import CartRepository
from bookstore.infrastructure.persistence.tables import as_utc, carts


class SqlCartRepository(CartRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    # --- CartRepository interface ---------------------------------------------

    def get_by_user_id(self, user_id: str) -> Cart | None:
        row = self._connection.execute(
            select(carts).where(carts.c.user_id == user_id)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def get_for_update(self, user_id: str) -> Cart | None:
        row = self._connection.execute(
            select(carts).where(carts.c.user_id == user_id).with_for_update()
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def save(self, cart: Cart) -> None:
        raw = self._to_raw(cart)
        result = self._connection.execute(
            update(carts).where(carts.c.user_id == cart.user_id).values(**raw)
        )
        if result.rowcount == 0:
            self._connection.execute(insert(carts).values(**raw))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "user_id": cart.user_id,
            "updated_at": cart.updated_at,
            "items": [
                {
                    "book_id": item.book_id,
                    "title": item.title,
                    "quantity": item.quantity.value,
                    "price": str(item.price.amount),
                    "currency": item.price.currency,
                    "cover_image": item.cover_image,
                }
                for item in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: RowMapping) -> Cart:
        items = [
            CartItem(
                book_id=i["book_id"],
                title=i["title"],
                quantity=Quantity(i["quantity"]),
                price=Money(Decimal(i["price"]), i.get("currency", "USD")),
                cover_image=i["cover_image"],
            )
            for i in raw["items"]
        ]
        return Cart(
            user_id=raw["user_id"], items=items, updated_at=as_utc(raw["updated_at"])
        )
