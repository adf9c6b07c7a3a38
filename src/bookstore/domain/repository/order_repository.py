"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_for_user(self, order_id: int, user_id: str) -> Order | None:
        """Return the order only if it belongs to *user_id*."""

    @abstractmethod
    def get_for_update(self, order_id: int, user_id: str | None = None) -> Order | None:
        """Return an order, locking its row for the rest of the unit of work.

        With *user_id*, only an order belonging to that user is returned.
        """

    @abstractmethod
    def find(
        self,
        *,
        user_id: str | None = None,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Order]:
        """Return matching orders, newest first."""

    @abstractmethod
    def count(
        self,
        *,
        user_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> int:
        """Count orders matching the same filters as ``find``."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order and assign its ID."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist status, tracking number and timestamps of an existing order."""
