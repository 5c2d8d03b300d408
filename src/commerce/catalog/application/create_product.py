"""Application service: Create Product use case."""

from __future__ import annotations

import structlog

from commerce.catalog.application.dto import ProductDTO, to_product_dto
from commerce.catalog.domain.model.product import Product
from commerce.catalog.domain.repository.product_repository import ProductRepository
from commerce.shared.application.event_publisher import EventPublisher
from commerce.shared.domain.exceptions import DuplicateSku
from commerce.shared.domain.value_objects import DEFAULT_CURRENCY, Money

logger = structlog.get_logger(__name__)


class CreateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        event_publisher: EventPublisher,
    ) -> None:
        self._product_repo = product_repo
        self._event_publisher = event_publisher

    def handle(
        self,
        name: str,
        description: str | None,
        price: str,
        sku: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> ProductDTO:
        """Add a new product to the catalog in DRAFT status.

        SKUs are unique across the whole catalog.
        """
        product = Product.create(
            name=name,
            description=description,
            price=Money.of(price, currency),
            sku=sku,
        )
        if self._product_repo.exists_by_sku(product.sku):
            raise DuplicateSku(f"SKU '{product.sku}' is already in use")

        self._product_repo.save(product)
        self._event_publisher.publish(product.events)
        product.clear_events()

        logger.info(
            "product.created",
            product_id=product.id.value,
            sku=product.sku,
            price=str(product.price),
        )
        return to_product_dto(product)
