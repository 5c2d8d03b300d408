"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from commerce.catalog.domain.model.product import Product, ProductId, ProductStatus


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: ProductId) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def list_by_status(self, status: ProductStatus) -> list[Product]:
        """Return the products currently in *status*."""

    @abstractmethod
    def exists_by_id(self, product_id: ProductId) -> bool:
        """True if a product with this ID is stored."""

    @abstractmethod
    def exists_by_sku(self, sku: str) -> bool:
        """True if any stored product already uses *sku* (case-insensitive)."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist a new or updated product.

        Raises ConcurrencyConflict if the stored version no longer matches
        ``product.version``; on success the version is incremented.
        """

    @abstractmethod
    def delete_by_id(self, product_id: ProductId) -> None:
        """Remove a product.  Deleting a missing product is a no-op."""
