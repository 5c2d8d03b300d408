"""Data Transfer Objects for the Catalog context.

DTOs carry data between the CLI (or another context) and the application
layer without exposing the Product aggregate itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from commerce.catalog.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:

    id: str
    name: str
    description: str
    sku: str
    status: str
    price: Decimal
    currency: str
    display_price: str  # formatted, e.g. "$15.00"
    available_for_purchase: bool
    created_at: str
    updated_at: str


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id.value,
        name=product.name,
        description=product.description,
        sku=product.sku,
        status=product.status.value,
        price=product.price.amount,
        currency=product.price.currency,
        display_price=str(product.price),
        available_for_purchase=product.is_available_for_purchase(),
        created_at=product.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        updated_at=product.updated_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
