"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Settings are read on
each call so a test can point the data directory elsewhere.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from commerce.catalog.application.show_product import GetProductHandler
from commerce.catalog.infrastructure.event_listener import CatalogEventListener
from commerce.catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from commerce.infrastructure import settings
from commerce.ordering.domain.service.order_domain_service import (
    FlatRateShippingPolicy,
    OrderDomainService,
)
from commerce.ordering.infrastructure.catalog_product_port import CatalogProductPort
from commerce.ordering.infrastructure.event_listener import OrderEventListener
from commerce.ordering.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from commerce.shared.domain.value_objects import Money
from commerce.shared.infrastructure.in_process_event_publisher import (
    InProcessEventPublisher,
)

_publisher: InProcessEventPublisher | None = None


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings.DATA_DIR / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings.DATA_DIR / "orders.json")


def event_publisher() -> InProcessEventPublisher:
    """The process-wide publisher, with every listener subscribed."""
    global _publisher
    if _publisher is None:
        executor = None
        if settings.EVENT_WORKERS > 0:
            executor = ThreadPoolExecutor(
                max_workers=settings.EVENT_WORKERS,
                thread_name_prefix="commerce-events",
            )
        publisher = InProcessEventPublisher(executor)
        CatalogEventListener().register(publisher)
        OrderEventListener().register(publisher)
        _publisher = publisher
    return _publisher


def order_domain_service() -> OrderDomainService:
    currency = settings.DEFAULT_CURRENCY
    return OrderDomainService(
        minimum_order_amount=Money(settings.MINIMUM_ORDER_AMOUNT, currency),
        shipping_policy=FlatRateShippingPolicy(
            free_threshold=Money(settings.FREE_SHIPPING_THRESHOLD, currency),
            standard_cost=Money(settings.STANDARD_SHIPPING_COST, currency),
        ),
    )


def product_port() -> CatalogProductPort:
    return CatalogProductPort(GetProductHandler(product_repo=product_repository()))
