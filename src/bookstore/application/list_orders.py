"""Application services: order listings (queries).

Both listings are newest first and paginated with ``page``/``limit``.
"""

from __future__ import annotations

import math

from bookstore.application.dto import OrderPageDTO
from bookstore.application.mapping import order_to_dto
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.repository.unit_of_work import UnitOfWork

DEFAULT_PAGE_SIZE = 10


def _page_window(page: int, limit: int) -> tuple[int, int]:
    if page < 1:
        raise ValidationError("Page must be at least 1")
    if limit < 1:
        raise ValidationError("Limit must be at least 1")
    return (page - 1) * limit, limit


def _load_page(
    uow: UnitOfWork,
    page: int,
    limit: int,
    user_id: str | None,
    status: OrderStatus | None,
) -> OrderPageDTO:
    offset, limit = _page_window(page, limit)
    with uow:
        orders = uow.orders.find(user_id=user_id, status=status, offset=offset, limit=limit)
        total = uow.orders.count(user_id=user_id, status=status)
    return OrderPageDTO(
        orders=[order_to_dto(o) for o in orders],
        total_pages=math.ceil(total / limit),
        current_page=page,
    )


class ListOrdersHandler:
    """A user's own orders."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, user_id: str, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> OrderPageDTO:
        return _load_page(self._uow, page, limit, user_id=user_id, status=None)


class ListAllOrdersHandler:
    """Every order, for admins, optionally filtered by status and user."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        status: str | None = None,
        user_id: str | None = None,
    ) -> OrderPageDTO:
        status_filter = OrderStatus.parse(status) if status else None
        return _load_page(self._uow, page, limit, user_id=user_id, status=status_filter)
