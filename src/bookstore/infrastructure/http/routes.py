"""FastAPI routes for carts and orders.

Identity comes from the authentication layer in front of this service,
which forwards the caller as ``X-User-Id`` / ``X-User-Role`` headers.
Static paths (``/cart``, ``/admin/all``) are declared before
``/{order_id}`` so they are not captured by it.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from bookstore.application.add_to_cart import AddToCartHandler
from bookstore.application.cancel_order import CancelOrderHandler
from bookstore.application.clear_cart import ClearCartHandler
from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.dto import (
    ROLE_ADMIN,
    ROLE_USER,
    PaymentSpec,
    Requester,
    ShippingAddressSpec,
)
from bookstore.application.get_cart import GetCartHandler
from bookstore.application.list_orders import ListAllOrdersHandler, ListOrdersHandler
from bookstore.application.remove_from_cart import RemoveFromCartHandler
from bookstore.application.show_order import ShowOrderHandler
from bookstore.application.update_order_status import UpdateOrderStatusHandler
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.infrastructure import bootstrap
from bookstore.infrastructure.http.schemas import (
    AddToCartRequest,
    CreateOrderRequest,
    UpdateOrderStatusRequest,
    cart_json,
    order_json,
    order_page_json,
    success,
)


def get_uow() -> UnitOfWork:
    return bootstrap.unit_of_work()


def current_requester(
    x_user_id: str | None = Header(default=None),
    x_user_role: str = Header(default=ROLE_USER),
) -> Requester:
    if not x_user_id:
        raise HTTPException(
            status_code=401, detail="You are not logged in. Please log in to get access"
        )
    if x_user_role not in (ROLE_USER, ROLE_ADMIN):
        raise HTTPException(status_code=403, detail="Unknown role")
    return Requester(user_id=x_user_id, role=x_user_role)


def require_admin(requester: Requester = Depends(current_requester)) -> Requester:
    if not requester.is_admin:
        raise HTTPException(
            status_code=403, detail="You do not have permission to perform this action"
        )
    return requester


order_router = APIRouter(prefix="/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@order_router.get("/cart")
def get_cart(
    requester: Requester = Depends(current_requester),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    dto = GetCartHandler(uow).handle(requester.user_id)
    return success(cart_json(dto))


@order_router.post("/cart")
def add_to_cart(
    body: AddToCartRequest,
    requester: Requester = Depends(current_requester),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    dto = AddToCartHandler(uow).handle(requester.user_id, body.book_id, body.quantity)
    return success(cart_json(dto), message="Item added to cart")


@order_router.delete("/cart/{item_id}")
def remove_from_cart(
    item_id: str,
    requester: Requester = Depends(current_requester),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    dto = RemoveFromCartHandler(uow).handle(requester.user_id, item_id)
    return success(cart_json(dto), message="Item removed from cart")


@order_router.delete("/cart")
def clear_cart(
    requester: Requester = Depends(current_requester),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    ClearCartHandler(uow).handle(requester.user_id)
    return success(message="Cart cleared")


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
@order_router.get("/admin/all")
def list_all_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    status: str | None = None,
    user_id: str | None = Query(default=None, alias="userId"),
    _admin: Requester = Depends(require_admin),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    result = ListAllOrdersHandler(uow).handle(
        page=page, limit=limit, status=status, user_id=user_id
    )
    return order_page_json(result)


@order_router.patch("/admin/{order_id}")
def update_order_status(
    order_id: int,
    body: UpdateOrderStatusRequest,
    _admin: Requester = Depends(require_admin),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    dto = UpdateOrderStatusHandler(uow).handle(
        order_id, status=body.status, tracking_number=body.tracking_number
    )
    return success({"order": order_json(dto)})


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201)
def create_order(
    body: CreateOrderRequest,
    requester: Requester = Depends(current_requester),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    address = body.shipping_address
    payment = body.payment_info
    dto = CreateOrderHandler(uow).handle(
        requester.user_id,
        ShippingAddressSpec(
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
        ),
        PaymentSpec(
            method=payment.method,
            status=payment.status,
            transaction_id=payment.transaction_id,
        ),
    )
    return success({"order": order_json(dto)})


@order_router.get("")
def list_my_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    requester: Requester = Depends(current_requester),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    result = ListOrdersHandler(uow).handle(requester.user_id, page=page, limit=limit)
    return order_page_json(result)


@order_router.get("/{order_id}")
def get_order(
    order_id: int,
    requester: Requester = Depends(current_requester),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    dto = ShowOrderHandler(uow).handle(requester, order_id)
    return success({"order": order_json(dto)})


@order_router.patch("/{order_id}/cancel")
def cancel_order(
    order_id: int,
    requester: Requester = Depends(current_requester),
    uow: UnitOfWork = Depends(get_uow),
) -> dict[str, Any]:
    dto = CancelOrderHandler(uow).handle(requester, order_id)
    return success({"order": order_json(dto)}, message="Order cancelled successfully")
