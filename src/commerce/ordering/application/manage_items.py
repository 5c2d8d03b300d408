"""Application services: item collection and customer info of a DRAFT order.

Every item change re-checks the minimum order amount, so a stored DRAFT
order with items never falls below it.
"""

from __future__ import annotations

import structlog

from commerce.ordering.application.dto import OrderDTO, to_order_dto
from commerce.ordering.application.order_support import (
    load_order,
    purchasable_product,
    save_and_publish,
    snapshot_item,
)
from commerce.ordering.application.ports import ProductPort
from commerce.ordering.domain.model.identifiers import ProductId
from commerce.ordering.domain.model.order import Order
from commerce.ordering.domain.model.value_objects import CustomerInfo
from commerce.ordering.domain.repository.order_repository import OrderRepository
from commerce.ordering.domain.service.order_domain_service import OrderDomainService
from commerce.shared.application.event_publisher import EventPublisher
from commerce.shared.domain.exceptions import OrderNotModifiable
from commerce.shared.domain.value_objects import Quantity

logger = structlog.get_logger(__name__)


class _OrderCommandHandler:
    """Load, mutate, save, publish."""

    def __init__(
        self,
        order_repo: OrderRepository,
        domain_service: OrderDomainService,
        event_publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._domain_service = domain_service
        self._event_publisher = event_publisher

    def _commit(self, order: Order) -> OrderDTO:
        save_and_publish(self._order_repo, self._event_publisher, order)
        return to_order_dto(order, self._domain_service.calculate_shipping_cost(order))


class AddOrderItemHandler(_OrderCommandHandler):

    def __init__(
        self,
        order_repo: OrderRepository,
        product_port: ProductPort,
        domain_service: OrderDomainService,
        event_publisher: EventPublisher,
    ) -> None:
        super().__init__(order_repo, domain_service, event_publisher)
        self._product_port = product_port

    def handle(self, order_id: str, product_id: str, quantity: int) -> OrderDTO:
        order = load_order(self._order_repo, order_id)
        if not order.status.is_modifiable():
            raise OrderNotModifiable(
                f"Order cannot be modified in status {order.status.value}"
            )
        info = purchasable_product(self._product_port, product_id)

        order.add_item(snapshot_item(info, quantity))
        self._domain_service.validate_minimum_order_amount(order)

        dto = self._commit(order)
        logger.info(
            "order.item_added",
            order_id=order_id,
            product_id=product_id,
            quantity=quantity,
            unit_price=str(order.find_item(ProductId.of(product_id)).unit_price),
        )
        return dto


class RemoveOrderItemHandler(_OrderCommandHandler):

    def handle(self, order_id: str, product_id: str) -> OrderDTO:
        order = load_order(self._order_repo, order_id)

        order.remove_item(ProductId.of(product_id))
        if order.items:
            self._domain_service.validate_minimum_order_amount(order)

        dto = self._commit(order)
        logger.info("order.item_removed", order_id=order_id, product_id=product_id)
        return dto


class UpdateItemQuantityHandler(_OrderCommandHandler):

    def handle(self, order_id: str, product_id: str, quantity: int) -> OrderDTO:
        order = load_order(self._order_repo, order_id)

        order.update_item_quantity(ProductId.of(product_id), Quantity(quantity))
        self._domain_service.validate_minimum_order_amount(order)

        dto = self._commit(order)
        logger.info(
            "order.item_quantity_changed",
            order_id=order_id,
            product_id=product_id,
            quantity=quantity,
        )
        return dto


class SetCustomerInfoHandler(_OrderCommandHandler):

    def handle(
        self,
        order_id: str,
        name: str,
        email: str,
        phone: str | None = None,
    ) -> OrderDTO:
        order = load_order(self._order_repo, order_id)

        order.set_customer_info(CustomerInfo(name=name, email=email, phone=phone))

        dto = self._commit(order)
        logger.info("order.customer_info_set", order_id=order_id)
        return dto
