"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

import structlog

from commerce.catalog.domain.model.product import Product, ProductId, ProductStatus
from commerce.catalog.domain.repository.product_repository import ProductRepository
from commerce.shared.domain.exceptions import ConcurrencyConflict, DuplicateSku
from commerce.shared.domain.value_objects import Money
from commerce.shared.infrastructure.json_store import JsonFileStore

logger = structlog.get_logger(__name__)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: ProductId) -> Product | None:
        for raw in self._store.load():
            if raw["id"] == product_id.value:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._store.load()]

    def list_by_status(self, status: ProductStatus) -> list[Product]:
        return [
            self._to_domain(raw)
            for raw in self._store.load()
            if raw["status"] == status.value
        ]

    def exists_by_id(self, product_id: ProductId) -> bool:
        return any(raw["id"] == product_id.value for raw in self._store.load())

    def exists_by_sku(self, sku: str) -> bool:
        wanted = sku.strip().upper()
        return any(raw["sku"].upper() == wanted for raw in self._store.load())

    def save(self, product: Product) -> Product:
        with self._store.lock():
            return self._save_locked(product)

    def _save_locked(self, product: Product) -> Product:
        records = self._store.load()

        index = None
        stored_version = 0
        for i, raw in enumerate(records):
            if raw["id"] == product.id.value:
                index = i
                stored_version = raw.get("version", 0)
            elif raw["sku"].upper() == product.sku.upper():
                raise DuplicateSku(f"SKU '{product.sku}' is already in use")

        if stored_version != product.version:
            logger.warning(
                "product.save_conflict",
                product_id=product.id.value,
                expected_version=product.version,
                stored_version=stored_version,
            )
            raise ConcurrencyConflict(
                f"Product '{product.id}' was modified concurrently "
                f"(expected version {product.version}, found {stored_version})"
            )

        new_version = product.version + 1
        raw = self._to_raw(product, new_version)
        if index is None:
            records.append(raw)
        else:
            records[index] = raw

        self._store.persist(records)
        product.version = new_version
        return product

    def delete_by_id(self, product_id: ProductId) -> None:
        with self._store.lock():
            records = self._store.load()
            remaining = [raw for raw in records if raw["id"] != product_id.value]
            if len(remaining) != len(records):
                self._store.persist(remaining)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product, version: int) -> dict:
        return {
            "id": product.id.value,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "sku": product.sku,
            "status": product.status.value,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
            "version": version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=ProductId.of(raw["id"]),
            name=raw["name"],
            description=raw.get("description", ""),
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            sku=raw["sku"],
            status=ProductStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            version=raw.get("version", 0),
        )
