"""Domain events raised by the Order aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Union

from commerce.ordering.domain.model.order_status import OrderStatus
from commerce.shared.domain.events import new_event_id, utcnow
from commerce.shared.domain.value_objects import Money


@dataclass(frozen=True)
class OrderCreated:
    event_type: ClassVar[str] = "OrderCreated"

    aggregate_id: str
    customer_id: str
    total_amount: Money
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class OrderItemAdded:
    event_type: ClassVar[str] = "OrderItemAdded"

    aggregate_id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: Money
    subtotal: Money
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class OrderItemRemoved:
    event_type: ClassVar[str] = "OrderItemRemoved"

    aggregate_id: str
    product_id: str
    quantity_removed: int
    amount_removed: Money
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class OrderItemQuantityChanged:
    event_type: ClassVar[str] = "OrderItemQuantityChanged"

    aggregate_id: str
    product_id: str
    previous_quantity: int
    new_quantity: int
    subtotal: Money
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class OrderSubmitted:
    event_type: ClassVar[str] = "OrderSubmitted"

    aggregate_id: str
    order_number: str
    customer_id: str
    customer_email: str
    total_amount: Money
    item_count: int
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class OrderStatusChanged:
    event_type: ClassVar[str] = "OrderStatusChanged"

    aggregate_id: str
    previous_status: OrderStatus
    new_status: OrderStatus
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class OrderCancelled:
    event_type: ClassVar[str] = "OrderCancelled"

    aggregate_id: str
    reason: str
    refund_amount: Money
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


OrderEvent = Union[
    OrderCreated,
    OrderItemAdded,
    OrderItemRemoved,
    OrderItemQuantityChanged,
    OrderSubmitted,
    OrderStatusChanged,
    OrderCancelled,
]
