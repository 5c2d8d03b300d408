"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from commerce.ordering.domain.model.order import Order, OrderItem
from commerce.shared.domain.value_objects import Money


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (catalog product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class AddressSpec:
    """Input: a shipping address as typed by the caller."""

    street: str
    city: str
    state: str
    zip_code: str
    country: str


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    subtotal: str


@dataclass(frozen=True)
class CustomerInfoDTO:
    name: str
    email: str
    phone: str | None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    order_number: str | None
    customer_id: str
    customer_info: CustomerInfoDTO | None
    shipping_address: str
    items: list[OrderItemDTO]
    status: str
    subtotal: str
    shipping_cost: str
    total: str
    item_count: int
    total_quantity: int
    created_at: str
    updated_at: str
    cancellation_reason: str | None


def to_order_dto(order: Order, shipping_cost: Money) -> OrderDTO:
    subtotal = order.calculate_total_amount()
    info = order.customer_info
    return OrderDTO(
        id=order.id.value,
        order_number=order.order_number.value if order.order_number else None,
        customer_id=order.customer_id.value,
        customer_info=(
            CustomerInfoDTO(name=info.name, email=info.email, phone=info.phone)
            if info is not None
            else None
        ),
        shipping_address=order.shipping_address.full_address,
        items=[_to_item_dto(item) for item in order.items],
        status=order.status.value,
        subtotal=str(subtotal),
        shipping_cost=str(shipping_cost),
        total=str(subtotal + shipping_cost),
        item_count=order.item_count,
        total_quantity=order.total_quantity,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        updated_at=order.updated_at.strftime("%Y-%m-%d %H:%M UTC"),
        cancellation_reason=order.cancellation_reason,
    )


def _to_item_dto(item: OrderItem) -> OrderItemDTO:
    return OrderItemDTO(
        product_id=item.product_id.value,
        product_name=item.product_name,
        quantity=item.quantity.value,
        unit_price=str(item.unit_price),
        subtotal=str(item.subtotal),
    )
