"""Application services: order queries, statistics and explicit deletion."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from commerce.ordering.application.dto import OrderDTO, to_order_dto
from commerce.ordering.application.order_support import load_order, parse_order_status
from commerce.ordering.domain.model.identifiers import CustomerId, OrderId
from commerce.ordering.domain.model.order import Order
from commerce.ordering.domain.repository.order_repository import OrderRepository
from commerce.ordering.domain.service.order_domain_service import OrderDomainService
from commerce.shared.domain.exceptions import OrderNotFound
from commerce.shared.domain.value_objects import DEFAULT_CURRENCY

logger = structlog.get_logger(__name__)


class GetOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        domain_service: OrderDomainService,
    ) -> None:
        self._order_repo = order_repo
        self._domain_service = domain_service

    def handle(self, order_id: str) -> OrderDTO:
        order = load_order(self._order_repo, order_id)
        return to_order_dto(order, self._domain_service.calculate_shipping_cost(order))


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        domain_service: OrderDomainService,
    ) -> None:
        self._order_repo = order_repo
        self._domain_service = domain_service

    def all(self) -> list[OrderDTO]:
        return self._to_dtos(self._order_repo.list_all())

    def by_customer(self, customer_id: str) -> list[OrderDTO]:
        return self._to_dtos(self._order_repo.list_by_customer_id(CustomerId.of(customer_id)))

    def by_status(self, status: str) -> list[OrderDTO]:
        return self._to_dtos(self._order_repo.list_by_status(parse_order_status(status)))

    def _to_dtos(self, orders: list[Order]) -> list[OrderDTO]:
        return [
            to_order_dto(order, self._domain_service.calculate_shipping_cost(order))
            for order in orders
        ]


@dataclass(frozen=True)
class OrderStatisticsDTO:
    order_count: int
    total_revenue: str
    average_order_value: str


class OrderStatisticsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        domain_service: OrderDomainService,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._order_repo = order_repo
        self._domain_service = domain_service
        self._currency = currency

    def handle(self, status: str | None = None) -> OrderStatisticsDTO:
        """Revenue over all orders, or only those in *status*."""
        if status is None:
            orders = self._order_repo.list_all()
        else:
            orders = self._order_repo.list_by_status(parse_order_status(status))

        stats = self._domain_service.calculate_statistics(orders, self._currency)
        return OrderStatisticsDTO(
            order_count=stats.order_count,
            total_revenue=str(stats.total_revenue),
            average_order_value=str(stats.average_order_value),
        )


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> None:
        oid = OrderId.of(order_id)
        if not self._order_repo.exists_by_id(oid):
            raise OrderNotFound(f"Order '{order_id}' not found")
        self._order_repo.delete_by_id(oid)
        logger.info("order.deleted", order_id=order_id)

