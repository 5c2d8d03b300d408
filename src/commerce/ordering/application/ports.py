"""Outbound port: what Ordering needs to know about catalog products.

Ordering never imports the Catalog domain.  An adapter in the
infrastructure layer answers these questions from the Catalog context.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProductInfo:
    product_id: str
    name: str
    price: Decimal
    currency: str
    available_for_purchase: bool


class ProductPort(ABC):

    @abstractmethod
    def find_product(self, product_id: str) -> ProductInfo | None:
        """Return a snapshot of the product, or None if it does not exist."""

    @abstractmethod
    def is_product_available(self, product_id: str) -> bool:
        """True only if the product exists and can be purchased right now."""

    @abstractmethod
    def get_product_price(self, product_id: str) -> Decimal | None:
        """Current catalog price, or None if the product does not exist."""
