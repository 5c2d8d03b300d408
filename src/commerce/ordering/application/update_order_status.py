"""Application services: lifecycle transitions after submission.

DRAFT -> PENDING only happens through SubmitOrderHandler, which runs the
availability and submission checks first.  The generic status update
therefore refuses PENDING and DRAFT as targets.
"""

from __future__ import annotations

import structlog

from commerce.ordering.application.dto import OrderDTO, to_order_dto
from commerce.ordering.application.order_support import (
    load_order,
    parse_order_status,
    save_and_publish,
)
from commerce.ordering.domain.model.order import Order
from commerce.ordering.domain.model.order_status import OrderStatus
from commerce.ordering.domain.repository.order_repository import OrderRepository
from commerce.ordering.domain.service.order_domain_service import OrderDomainService
from commerce.shared.application.event_publisher import EventPublisher
from commerce.shared.domain.exceptions import InvalidStatusTransition

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        domain_service: OrderDomainService,
        event_publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._domain_service = domain_service
        self._event_publisher = event_publisher

    def handle(
        self,
        order_id: str,
        new_status: str,
        reason: str | None = None,
    ) -> OrderDTO:
        target = parse_order_status(new_status)
        order = load_order(self._order_repo, order_id)
        previous = order.status

        _apply(order, target, reason)
        save_and_publish(self._order_repo, self._event_publisher, order)

        logger.info(
            "order.status_changed",
            order_id=order_id,
            previous_status=previous.value,
            new_status=order.status.value,
        )
        return to_order_dto(order, self._domain_service.calculate_shipping_cost(order))


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        domain_service: OrderDomainService,
        event_publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._domain_service = domain_service
        self._event_publisher = event_publisher

    def handle(self, order_id: str, reason: str) -> OrderDTO:
        """Cancel an order that has not shipped yet."""
        order = load_order(self._order_repo, order_id)

        order.cancel(reason)
        save_and_publish(self._order_repo, self._event_publisher, order)

        logger.info("order.cancelled", order_id=order_id, reason=order.cancellation_reason)
        return to_order_dto(order, self._domain_service.calculate_shipping_cost(order))


def _apply(order: Order, target: OrderStatus, reason: str | None) -> None:
    if target is OrderStatus.CONFIRMED:
        order.confirm()
    elif target is OrderStatus.PROCESSING:
        order.start_processing()
    elif target is OrderStatus.SHIPPED:
        order.ship()
    elif target is OrderStatus.DELIVERED:
        order.deliver()
    elif target is OrderStatus.CANCELLED:
        order.cancel(reason or "")
    else:
        raise InvalidStatusTransition(
            f"Cannot transition to {target.value} via a status update; "
            f"submit the order instead"
        )
