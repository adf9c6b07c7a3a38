"""Book aggregate.

Books belong to the catalog. The only part of a book this service
cares about beyond display fields is its stock count, which is shared
mutable state across every cart and order.
"""

from __future__ import annotations

from dataclasses import dataclass

from bookstore.domain.model.value_objects import Money

DEFAULT_COVER_IMAGE = "default-book-cover.jpg"


@dataclass
class Book:
    """A book in the catalog.

    Invariants:
    - ``stock`` is never negative
    - ``is_available`` is always ``stock > 0`` (derived, never stored
      on the aggregate)
    """

    id: str
    isbn: str
    title: str
    author: str
    price: Money
    stock: int = 0
    cover_image: str = DEFAULT_COVER_IMAGE

    @property
    def is_available(self) -> bool:
        return self.stock > 0

    def can_supply(self, quantity: int) -> bool:
        return self.is_available and self.stock >= quantity
