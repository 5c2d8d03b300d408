"""Application service: catalog queries and explicit deletion."""

from __future__ import annotations

import structlog

from commerce.catalog.application.dto import ProductDTO, to_product_dto
from commerce.catalog.domain.model.product import ProductId, ProductStatus
from commerce.catalog.domain.repository.product_repository import ProductRepository
from commerce.shared.domain.exceptions import ProductNotFound, ValidationError

logger = structlog.get_logger(__name__)


class GetProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        dto = self.find(product_id)
        if dto is None:
            raise ProductNotFound(f"Product with ID '{product_id}' not found")
        return dto

    def find(self, product_id: str) -> ProductDTO | None:
        """Like ``handle`` but returns None for unknown products."""
        product = self._product_repo.get_by_id(ProductId.of(product_id))
        if product is None:
            return None
        return to_product_dto(product)


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, status: str | None = None) -> list[ProductDTO]:
        if status is None:
            products = self._product_repo.list_all()
        else:
            try:
                wanted = ProductStatus(status.upper())
            except ValueError as exc:
                raise ValidationError(f"Unknown product status: {status!r}") from exc
            products = self._product_repo.list_by_status(wanted)
        return [to_product_dto(p) for p in products]


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        pid = ProductId.of(product_id)
        if not self._product_repo.exists_by_id(pid):
            raise ProductNotFound(f"Product with ID '{product_id}' not found")
        self._product_repo.delete_by_id(pid)
        logger.info("product.deleted", product_id=product_id)
