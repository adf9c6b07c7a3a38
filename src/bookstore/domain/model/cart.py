"""Cart aggregate: the mutable basket a user fills before checkout.

One cart per user. Title, price and cover image are copied from the
book when a line is first added and are not refreshed afterwards;
stock is re-validated only at checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from bookstore.domain.exceptions import ItemNotFound
from bookstore.domain.model.book import DEFAULT_COVER_IMAGE, Book
from bookstore.domain.model.value_objects import Money, Quantity


@dataclass
class CartItem:
    book_id: str
    title: str
    quantity: Quantity
    price: Money  # snapshot taken when the line was added
    cover_image: str = DEFAULT_COVER_IMAGE

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Cart:
    user_id: str
    items: list[CartItem] = field(default_factory=list)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    def add_item(self, book: Book, quantity: Quantity) -> CartItem:
        """Add *quantity* of *book*, merging with an existing line.

        Availability must have been checked by the caller. Merging into
        an existing line does not re-check stock.
        """
        for item in self.items:
            if item.book_id == book.id:
                item.quantity = Quantity(item.quantity.value + quantity.value)
                self._touch()
                return item

        item = CartItem(
            book_id=book.id,
            title=book.title,
            quantity=quantity,
            price=book.price,
            cover_image=book.cover_image,
        )
        self.items.append(item)
        self._touch()
        return item

    def remove_item(self, book_id: str) -> None:
        for i, item in enumerate(self.items):
            if item.book_id == book_id:
                del self.items[i]
                self._touch()
                return
        raise ItemNotFound()

    def clear(self) -> None:
        self.items = []
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
