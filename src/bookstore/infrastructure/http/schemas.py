"""Pydantic request schemas and response shaping for the orders API.

Field names on the wire keep the camelCase the existing clients send
(``bookId``, ``shippingAddress`` ...). These are external contracts,
kept separate from the application DTOs.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from bookstore.application.dto import CartDTO, OrderDTO, OrderPageDTO


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(_Body):
    book_id: str = Field(alias="bookId", min_length=1)
    quantity: int = Field(default=1, ge=1)


class ShippingAddressSchema(_Body):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(alias="zipCode", min_length=1)
    country: str = Field(min_length=1)


class PaymentInfoSchema(_Body):
    method: Literal["credit_card", "paypal", "bank_transfer"]
    status: Literal["pending", "paid", "failed"] | None = None
    transaction_id: str | None = Field(default=None, alias="transactionId")


class CreateOrderRequest(_Body):
    shipping_address: ShippingAddressSchema = Field(alias="shippingAddress")
    payment_info: PaymentInfoSchema = Field(alias="paymentInfo")


class UpdateOrderStatusRequest(_Body):
    status: str | None = None
    tracking_number: str | None = Field(default=None, alias="trackingNumber")


# ---------------------------------------------------------------------------
# Response shaping
# ---------------------------------------------------------------------------
def success(data: Any = None, message: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "success"}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def cart_json(dto: CartDTO) -> dict[str, Any]:
    return {
        "cart": {
            "userId": dto.user_id,
            "items": [
                {
                    "bookId": item.book_id,
                    "title": item.title,
                    "quantity": item.quantity,
                    "price": float(item.price),
                    "coverImage": item.cover_image,
                }
                for item in dto.items
            ],
        },
        "total": float(dto.total),
    }


def order_json(dto: OrderDTO) -> dict[str, Any]:
    address = dto.shipping_address
    payment: dict[str, Any] = {"method": dto.payment_method, "status": dto.payment_status}
    if dto.transaction_id:
        payment["transactionId"] = dto.transaction_id

    body: dict[str, Any] = {
        "id": dto.id,
        "userId": dto.user_id,
        "items": [
            {
                "bookId": item.book_id,
                "title": item.title,
                "quantity": item.quantity,
                "price": float(item.price),
            }
            for item in dto.items
        ],
        "shippingAddress": {
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "zipCode": address.zip_code,
            "country": address.country,
        },
        "paymentInfo": payment,
        "totalAmount": float(dto.total_amount),
        "status": dto.status,
        "createdAt": dto.created_at.isoformat(),
        "updatedAt": dto.updated_at.isoformat(),
    }
    if dto.tracking_number:
        body["trackingNumber"] = dto.tracking_number
    return body


def order_page_json(page: OrderPageDTO) -> dict[str, Any]:
    return {
        "status": "success",
        "results": page.results,
        "totalPages": page.total_pages,
        "currentPage": page.current_page,
        "data": [order_json(o) for o in page.orders],
    }
