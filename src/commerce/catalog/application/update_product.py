"""Application service: Update Product info and Update Price use cases."""

from __future__ import annotations

import structlog

from commerce.catalog.application.dto import ProductDTO, to_product_dto
from commerce.catalog.domain.model.product import Product, ProductId
from commerce.catalog.domain.repository.product_repository import ProductRepository
from commerce.shared.application.event_publisher import EventPublisher
from commerce.shared.domain.exceptions import ProductNotFound
from commerce.shared.domain.value_objects import DEFAULT_CURRENCY, Money

logger = structlog.get_logger(__name__)


def load_product(product_repo: ProductRepository, product_id: str) -> Product:
    product = product_repo.get_by_id(ProductId.of(product_id))
    if product is None:
        raise ProductNotFound(f"Product with ID '{product_id}' not found")
    return product


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        event_publisher: EventPublisher,
    ) -> None:
        self._product_repo = product_repo
        self._event_publisher = event_publisher

    def handle(self, product_id: str, name: str, description: str | None) -> ProductDTO:
        product = load_product(self._product_repo, product_id)

        product.update_info(name, description)

        self._product_repo.save(product)
        self._event_publisher.publish(product.events)
        product.clear_events()

        logger.info("product.info_updated", product_id=product_id)
        return to_product_dto(product)


class UpdatePriceHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        event_publisher: EventPublisher,
    ) -> None:
        self._product_repo = product_repo
        self._event_publisher = event_publisher

    def handle(
        self,
        product_id: str,
        new_price: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> ProductDTO:
        """Update a product's price.

        Existing orders keep the unit price they captured when the
        item was added.
        """
        product = load_product(self._product_repo, product_id)
        old_price = product.price

        product.update_price(Money.of(new_price, currency))

        self._product_repo.save(product)
        self._event_publisher.publish(product.events)
        product.clear_events()

        logger.info(
            "product.price_changed",
            product_id=product_id,
            old_price=str(old_price),
            new_price=str(product.price),
        )
        return to_product_dto(product)
