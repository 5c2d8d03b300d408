"""Application service: Create Order use case.

Orchestrates the flow between the catalog (through ProductPort), the
domain service and the Order aggregate.
"""

from __future__ import annotations

import structlog

from commerce.ordering.application.dto import (
    AddressSpec,
    OrderDTO,
    OrderItemSpec,
    to_order_dto,
)
from commerce.ordering.application.order_support import (
    purchasable_product,
    save_and_publish,
    snapshot_item,
)
from commerce.ordering.application.ports import ProductPort
from commerce.ordering.domain.model.identifiers import CustomerId
from commerce.ordering.domain.model.order import Order, OrderItem
from commerce.ordering.domain.model.value_objects import Address
from commerce.ordering.domain.repository.order_repository import OrderRepository
from commerce.ordering.domain.service.order_domain_service import OrderDomainService
from commerce.shared.application.event_publisher import EventPublisher

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

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

    def handle(
        self,
        customer_id: str,
        address: AddressSpec,
        item_specs: list[OrderItemSpec] | None = None,
    ) -> OrderDTO:
        """Open a new DRAFT order.

        Steps:
        1. Resolve each product id through the catalog (fail if missing or
           not purchasable).
        2. Build OrderItems with *current* names and prices (snapshot).
        3. Let the Order aggregate validate the item collection.
        4. Check the minimum order amount if any items were given.
        5. Persist, publish events and return a DTO.
        """
        items: list[OrderItem] = []
        for spec in item_specs or []:
            info = purchasable_product(self._product_port, spec.product_id)
            items.append(snapshot_item(info, spec.quantity))

        order = Order.create(
            customer_id=CustomerId.of(customer_id),
            shipping_address=Address(
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            items=items,
        )
        if items:
            self._domain_service.validate_minimum_order_amount(order)

        save_and_publish(self._order_repo, self._event_publisher, order)

        logger.info(
            "order.created",
            order_id=order.id.value,
            customer_id=customer_id,
            item_count=order.item_count,
            total=str(order.calculate_total_amount()),
        )
        return to_order_dto(order, self._domain_service.calculate_shipping_cost(order))
