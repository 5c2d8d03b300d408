"""Application service: Activate / Deactivate Product use cases."""

from __future__ import annotations

import structlog

from commerce.catalog.application.dto import ProductDTO, to_product_dto
from commerce.catalog.application.update_product import load_product
from commerce.catalog.domain.repository.product_repository import ProductRepository
from commerce.shared.application.event_publisher import EventPublisher

logger = structlog.get_logger(__name__)


class ActivateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        event_publisher: EventPublisher,
    ) -> None:
        self._product_repo = product_repo
        self._event_publisher = event_publisher

    def handle(self, product_id: str) -> ProductDTO:
        product = load_product(self._product_repo, product_id)
        previous = product.status

        product.activate()

        self._product_repo.save(product)
        self._event_publisher.publish(product.events)
        product.clear_events()

        logger.info(
            "product.activated",
            product_id=product_id,
            previous_status=previous.value,
        )
        return to_product_dto(product)


class DeactivateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        event_publisher: EventPublisher,
    ) -> None:
        self._product_repo = product_repo
        self._event_publisher = event_publisher

    def handle(self, product_id: str) -> ProductDTO:
        product = load_product(self._product_repo, product_id)

        product.deactivate()

        self._product_repo.save(product)
        self._event_publisher.publish(product.events)
        product.clear_events()

        logger.info("product.deactivated", product_id=product_id)
        return to_product_dto(product)
