"""Order lifecycle states and the table of legal transitions.

    DRAFT -> PENDING (submit only) | CANCELLED
    PENDING -> CONFIRMED | CANCELLED
    CONFIRMED -> PROCESSING | CANCELLED
    PROCESSING -> SHIPPED | CANCELLED
    SHIPPED -> DELIVERED
    DELIVERED, CANCELLED -> terminal

The table is plain data; the enum methods only look things up in it.
"""

from __future__ import annotations

from enum import Enum

from commerce.shared.domain.exceptions import InvalidStatusTransition


class OrderStatus(Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ORDER_TRANSITIONS[self]

    def transition_to(self, target: OrderStatus) -> OrderStatus:
        if not self.can_transition_to(target):
            raise InvalidStatusTransition(
                f"Cannot transition from {self.value} to {target.value}"
            )
        return target

    def is_modifiable(self) -> bool:
        return self is OrderStatus.DRAFT

    def can_submit(self) -> bool:
        return self is OrderStatus.DRAFT

    def can_update_customer_info(self) -> bool:
        return self is OrderStatus.DRAFT

    def is_terminal(self) -> bool:
        return not ORDER_TRANSITIONS[self]


ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.DRAFT: frozenset({OrderStatus.PENDING, OrderStatus.CANCELLED}),
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

_DESCRIPTIONS = {
    OrderStatus.DRAFT: "Order is being prepared",
    OrderStatus.PENDING: "Order is pending confirmation",
    OrderStatus.CONFIRMED: "Order has been confirmed",
    OrderStatus.PROCESSING: "Order is being processed",
    OrderStatus.SHIPPED: "Order has been shipped",
    OrderStatus.DELIVERED: "Order has been delivered",
    OrderStatus.CANCELLED: "Order has been cancelled",
}
