"""Application service: Submit Order use case."""

from __future__ import annotations

import structlog

from commerce.ordering.application.dto import OrderDTO, to_order_dto
from commerce.ordering.application.order_support import load_order, save_and_publish
from commerce.ordering.application.ports import ProductPort
from commerce.ordering.domain.model.order import Order
from commerce.ordering.domain.repository.order_repository import OrderRepository
from commerce.ordering.domain.service.order_domain_service import OrderDomainService
from commerce.shared.application.event_publisher import EventPublisher
from commerce.shared.domain.exceptions import DuplicateOrderNumber

logger = structlog.get_logger(__name__)

# Fresh order numbers drawn before a collision is reported
SUBMIT_ATTEMPTS = 3


class SubmitOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_port: ProductPort,
        domain_service: OrderDomainService,
        event_publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._product_port = product_port
        self._domain_service = domain_service
        self._event_publisher = event_publisher

    def handle(self, order_id: str) -> OrderDTO:
        """Move a DRAFT order to PENDING.

        Steps:
        1. Re-check with the catalog that every item can still be bought.
           Products may have been deactivated since they were added.
        2. Run the submission rules (items, customer info, minimum amount).
        3. Submit: the aggregate assigns the order number.  A number already
           taken by another order is redrawn from a freshly loaded order.
        """
        for attempt in range(1, SUBMIT_ATTEMPTS + 1):
            try:
                order = self._submit_once(order_id)
                break
            except DuplicateOrderNumber:
                if attempt == SUBMIT_ATTEMPTS:
                    raise
                logger.warning("order.number_collision", order_id=order_id, attempt=attempt)

        logger.info(
            "order.submitted",
            order_id=order_id,
            order_number=order.order_number.value,
            total=str(self._domain_service.calculate_order_total(order)),
        )
        return to_order_dto(order, self._domain_service.calculate_shipping_cost(order))

    def _submit_once(self, order_id: str) -> Order:
        order = load_order(self._order_repo, order_id)

        available = [
            item.product_id.value
            for item in order.items
            if self._product_port.is_product_available(item.product_id.value)
        ]
        self._domain_service.validate_product_availability(order, available)
        self._domain_service.validate_order_for_submission(order)

        order.submit()
        return save_and_publish(self._order_repo, self._event_publisher, order)
