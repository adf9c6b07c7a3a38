"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP adapters and application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

ROLE_USER = "user"
ROLE_ADMIN = "admin"


# --- Inputs -----------------------------------------------------------------


@dataclass(frozen=True)
class Requester:
    """Who is calling: resolved by the authentication layer in front of us."""

    user_id: str
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass(frozen=True)
class ShippingAddressSpec:
    street: str
    city: str
    state: str
    zip_code: str
    country: str


@dataclass(frozen=True)
class PaymentSpec:
    method: str
    status: str | None = None
    transaction_id: str | None = None


# --- Outputs ----------------------------------------------------------------


@dataclass(frozen=True)
class CartLineDTO:
    book_id: str
    title: str
    quantity: int
    price: Decimal
    cover_image: str
    line_total: Decimal


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    items: list[CartLineDTO]
    total: Decimal


@dataclass(frozen=True)
class OrderItemDTO:
    book_id: str
    title: str
    quantity: int
    price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: str
    status: str
    items: list[OrderItemDTO]
    shipping_address: ShippingAddressSpec
    payment_method: str
    payment_status: str
    transaction_id: str | None
    total_amount: Decimal
    tracking_number: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrderPageDTO:
    orders: list[OrderDTO]
    total_pages: int
    current_page: int

    @property
    def results(self) -> int:
        return len(self.orders)


@dataclass(frozen=True)
class BookStockDTO:
    id: str
    isbn: str
    title: str
    price: Decimal
    stock: int
    is_available: bool
