"""Listeners for Order domain events.

Delivery is at-least-once; these only log, so a replay is harmless.
"""

from __future__ import annotations

import structlog

from commerce.ordering.domain.events import (
    OrderCancelled,
    OrderCreated,
    OrderItemAdded,
    OrderItemQuantityChanged,
    OrderItemRemoved,
    OrderStatusChanged,
    OrderSubmitted,
)
from commerce.shared.infrastructure.in_process_event_publisher import (
    InProcessEventPublisher,
)

logger = structlog.get_logger(__name__)


class OrderEventListener:

    def on_order_created(self, event: OrderCreated) -> None:
        logger.info(
            "ordering.event.order_created",
            order_id=event.aggregate_id,
            customer_id=event.customer_id,
            total=str(event.total_amount),
            event_id=event.event_id,
        )

    def on_item_added(self, event: OrderItemAdded) -> None:
        logger.info(
            "ordering.event.item_added",
            order_id=event.aggregate_id,
            product_id=event.product_id,
            quantity=event.quantity,
            subtotal=str(event.subtotal),
            event_id=event.event_id,
        )

    def on_item_removed(self, event: OrderItemRemoved) -> None:
        logger.info(
            "ordering.event.item_removed",
            order_id=event.aggregate_id,
            product_id=event.product_id,
            amount_removed=str(event.amount_removed),
            event_id=event.event_id,
        )

    def on_item_quantity_changed(self, event: OrderItemQuantityChanged) -> None:
        logger.info(
            "ordering.event.item_quantity_changed",
            order_id=event.aggregate_id,
            product_id=event.product_id,
            previous_quantity=event.previous_quantity,
            new_quantity=event.new_quantity,
            event_id=event.event_id,
        )

    def on_order_submitted(self, event: OrderSubmitted) -> None:
        # customer_email is masked by the logging processors.
        logger.info(
            "ordering.event.order_submitted",
            order_id=event.aggregate_id,
            order_number=event.order_number,
            customer_email=event.customer_email,
            total=str(event.total_amount),
            item_count=event.item_count,
            event_id=event.event_id,
        )

    def on_status_changed(self, event: OrderStatusChanged) -> None:
        logger.info(
            "ordering.event.status_changed",
            order_id=event.aggregate_id,
            previous_status=event.previous_status.value,
            new_status=event.new_status.value,
            event_id=event.event_id,
        )

    def on_order_cancelled(self, event: OrderCancelled) -> None:
        logger.info(
            "ordering.event.order_cancelled",
            order_id=event.aggregate_id,
            reason=event.reason,
            refund=str(event.refund_amount),
            event_id=event.event_id,
        )

    def register(self, publisher: InProcessEventPublisher) -> None:
        publisher.subscribe(OrderCreated, self.on_order_created)
        publisher.subscribe(OrderItemAdded, self.on_item_added)
        publisher.subscribe(OrderItemRemoved, self.on_item_removed)
        publisher.subscribe(OrderItemQuantityChanged, self.on_item_quantity_changed)
        publisher.subscribe(OrderSubmitted, self.on_order_submitted)
        publisher.subscribe(OrderStatusChanged, self.on_status_changed)
        publisher.subscribe(OrderCancelled, self.on_order_cancelled)
