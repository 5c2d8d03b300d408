"""Listeners for Product domain events.

They only log for now, which keeps them safe under at-least-once delivery.
"""

from __future__ import annotations

import structlog

from commerce.catalog.domain.events import (
    ProductActivated,
    ProductCreated,
    ProductDeactivated,
    ProductInfoUpdated,
    ProductPriceChanged,
)
from commerce.shared.infrastructure.in_process_event_publisher import (
    InProcessEventPublisher,
)

logger = structlog.get_logger(__name__)


class CatalogEventListener:

    def on_product_created(self, event: ProductCreated) -> None:
        logger.info(
            "catalog.event.product_created",
            product_id=event.aggregate_id,
            sku=event.sku,
            price=str(event.price),
            event_id=event.event_id,
        )

    def on_product_activated(self, event: ProductActivated) -> None:
        logger.info(
            "catalog.event.product_activated",
            product_id=event.aggregate_id,
            name=event.name,
            event_id=event.event_id,
        )

    def on_product_deactivated(self, event: ProductDeactivated) -> None:
        logger.info(
            "catalog.event.product_deactivated",
            product_id=event.aggregate_id,
            name=event.name,
            event_id=event.event_id,
        )

    def on_price_changed(self, event: ProductPriceChanged) -> None:
        logger.info(
            "catalog.event.price_changed",
            product_id=event.aggregate_id,
            old_price=str(event.old_price),
            new_price=str(event.new_price),
            event_id=event.event_id,
        )

    def on_info_updated(self, event: ProductInfoUpdated) -> None:
        logger.info(
            "catalog.event.info_updated",
            product_id=event.aggregate_id,
            event_id=event.event_id,
        )

    def register(self, publisher: InProcessEventPublisher) -> None:
        publisher.subscribe(ProductCreated, self.on_product_created)
        publisher.subscribe(ProductActivated, self.on_product_activated)
        publisher.subscribe(ProductDeactivated, self.on_product_deactivated)
        publisher.subscribe(ProductPriceChanged, self.on_price_changed)
        publisher.subscribe(ProductInfoUpdated, self.on_info_updated)
