"""ProductPort adapter backed by the Catalog context's query handler.

This is the only place where Ordering touches Catalog, and it only goes
through Catalog's application layer.
"""

from __future__ import annotations

from decimal import Decimal

from commerce.catalog.application.show_product import GetProductHandler
from commerce.ordering.application.ports import ProductInfo, ProductPort


class CatalogProductPort(ProductPort):

    def __init__(self, get_product: GetProductHandler) -> None:
        self._get_product = get_product

    def find_product(self, product_id: str) -> ProductInfo | None:
        dto = self._get_product.find(product_id)
        if dto is None:
            return None
        return ProductInfo(
            product_id=dto.id,
            name=dto.name,
            price=dto.price,
            currency=dto.currency,
            available_for_purchase=dto.available_for_purchase,
        )

    def is_product_available(self, product_id: str) -> bool:
        info = self.find_product(product_id)
        return info is not None and info.available_for_purchase

    def get_product_price(self, product_id: str) -> Decimal | None:
        info = self.find_product(product_id)
        return info.price if info is not None else None
