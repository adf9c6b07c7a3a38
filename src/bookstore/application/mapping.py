"""Domain -> DTO mapping shared by the cart and order use cases."""

from __future__ import annotations

from bookstore.application.dto import (
    CartDTO,
    CartLineDTO,
    OrderDTO,
    OrderItemDTO,
    ShippingAddressSpec,
)
from bookstore.domain.model.cart import Cart
from bookstore.domain.model.order import Order


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        user_id=cart.user_id,
        items=[
            CartLineDTO(
                book_id=item.book_id,
                title=item.title,
                quantity=item.quantity.value,
                price=item.price.amount,
                cover_image=item.cover_image,
                line_total=item.line_total.amount,
            )
            for item in cart.items
        ],
        total=cart.total.amount,
    )


def order_to_dto(order: Order) -> OrderDTO:
    address = order.shipping_address
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        items=[
            OrderItemDTO(
                book_id=item.book_id,
                title=item.title,
                quantity=item.quantity.value,
                price=item.price.amount,
                line_total=item.line_total.amount,
            )
            for item in order.items
        ],
        shipping_address=ShippingAddressSpec(
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
        ),
        payment_method=order.payment_info.method.value,
        payment_status=order.payment_info.status.value,
        transaction_id=order.payment_info.transaction_id,
        total_amount=order.total_amount.amount,
        tracking_number=order.tracking_number,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
