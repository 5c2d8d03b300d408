"""Helpers shared by the Ordering use cases."""

from __future__ import annotations

from commerce.ordering.application.ports import ProductInfo, ProductPort
from commerce.ordering.domain.model.identifiers import OrderId, ProductId
from commerce.ordering.domain.model.order import Order, OrderItem
from commerce.ordering.domain.model.order_status import OrderStatus
from commerce.ordering.domain.repository.order_repository import OrderRepository
from commerce.shared.application.event_publisher import EventPublisher
from commerce.shared.domain.exceptions import (
    OrderNotFound,
    ProductNotAvailable,
    ProductNotFound,
    ValidationError,
)
from commerce.shared.domain.value_objects import Money, Quantity


def load_order(order_repo: OrderRepository, order_id: str) -> Order:
    order = order_repo.get_by_id(OrderId.of(order_id))
    if order is None:
        raise OrderNotFound(f"Order '{order_id}' not found")
    return order


def parse_order_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value.strip().upper())
    except (AttributeError, ValueError) as exc:
        raise ValidationError(f"Unknown order status: {value!r}") from exc


def purchasable_product(product_port: ProductPort, product_id: str) -> ProductInfo:
    """Look the product up in the catalog and insist it can be bought.

    "Does not exist" and "exists but not for sale" are reported as
    different errors.
    """
    info = product_port.find_product(product_id)
    if info is None:
        raise ProductNotFound(f"Product not found: '{product_id}'")
    if not info.available_for_purchase:
        raise ProductNotAvailable(f"Product is not available for purchase: {info.name}")
    return info


def snapshot_item(info: ProductInfo, quantity: int) -> OrderItem:
    """Build an OrderItem carrying the catalog's *current* name and price."""
    return OrderItem.create(
        product_id=ProductId.of(info.product_id),
        product_name=info.name,
        unit_price=Money.of(info.price, info.currency),
        quantity=Quantity(quantity),
    )


def save_and_publish(
    order_repo: OrderRepository,
    event_publisher: EventPublisher,
    order: Order,
) -> Order:
    """Persist first; only a successful save releases the pending events."""
    saved = order_repo.save(order)
    event_publisher.publish(saved.events)
    saved.clear_events()
    return saved
