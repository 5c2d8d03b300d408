"""JSON-file-backed implementation of OrderRepository.

Items are nested inside their order record, so one file replace writes an
order and all of its items together.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

import structlog

from commerce.ordering.domain.model.identifiers import (
    CustomerId,
    OrderId,
    OrderItemId,
    ProductId,
)
from commerce.ordering.domain.model.order import Order, OrderItem
from commerce.ordering.domain.model.order_status import OrderStatus
from commerce.ordering.domain.model.value_objects import (
    Address,
    CustomerInfo,
    OrderNumber,
)
from commerce.ordering.domain.repository.order_repository import OrderRepository
from commerce.shared.domain.exceptions import ConcurrencyConflict, DuplicateOrderNumber
from commerce.shared.domain.value_objects import Money, Quantity
from commerce.shared.infrastructure.json_store import JsonFileStore

logger = structlog.get_logger(__name__)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: OrderId) -> Order | None:
        for raw in self._store.load():
            if raw["id"] == order_id.value:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._store.load()]

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._store.load()
            if raw["status"] == status.value
        ]

    def list_by_customer_id(self, customer_id: CustomerId) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._store.load()
            if raw["customer_id"] == customer_id.value
        ]

    def exists_by_id(self, order_id: OrderId) -> bool:
        return any(raw["id"] == order_id.value for raw in self._store.load())

    def save(self, order: Order) -> Order:
        with self._store.lock():
            return self._save_locked(order)

    def _save_locked(self, order: Order) -> Order:
        records = self._store.load()
        order_number = order.order_number.value if order.order_number else None

        index = None
        stored_version = 0
        for i, raw in enumerate(records):
            if raw["id"] == order.id.value:
                index = i
                stored_version = raw.get("version", 0)
            elif order_number is not None and raw.get("order_number") == order_number:
                raise DuplicateOrderNumber(
                    f"Order number '{order_number}' is already in use"
                )

        if stored_version != order.version:
            logger.warning(
                "order.save_conflict",
                order_id=order.id.value,
                expected_version=order.version,
                stored_version=stored_version,
            )
            raise ConcurrencyConflict(
                f"Order '{order.id}' was modified concurrently "
                f"(expected version {order.version}, found {stored_version})"
            )

        new_version = order.version + 1
        raw = self._to_raw(order, new_version)
        if index is None:
            records.append(raw)
        else:
            records[index] = raw

        self._store.persist(records)
        order.version = new_version
        return order

    def delete_by_id(self, order_id: OrderId) -> None:
        with self._store.lock():
            records = self._store.load()
            remaining = [raw for raw in records if raw["id"] != order_id.value]
            if len(remaining) != len(records):
                self._store.persist(remaining)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order, version: int) -> dict:
        info = order.customer_info
        address = order.shipping_address
        subtotal = order.calculate_total_amount()
        return {
            "id": order.id.value,
            "customer_id": order.customer_id.value,
            "order_number": order.order_number.value if order.order_number else None,
            "customer_name": info.name if info else None,
            "customer_email": info.email if info else None,
            "customer_phone": info.phone if info else None,
            "status": order.status.value,
            "shipping_street": address.street,
            "shipping_city": address.city,
            "shipping_state": address.state,
            "shipping_zip_code": address.zip_code,
            "shipping_country": address.country,
            "subtotal": str(subtotal.amount),
            "currency": subtotal.currency,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "cancellation_reason": order.cancellation_reason,
            "version": version,
            "items": [
                {
                    "id": item.id.value,
                    "product_id": item.product_id.value,
                    "product_name": item.product_name,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "quantity": item.quantity.value,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        customer_info = None
        if raw.get("customer_name"):
            customer_info = CustomerInfo(
                name=raw["customer_name"],
                email=raw["customer_email"],
                phone=raw.get("customer_phone"),
            )
        return Order(
            id=OrderId.of(raw["id"]),
            customer_id=CustomerId.of(raw["customer_id"]),
            shipping_address=Address(
                street=raw["shipping_street"],
                city=raw["shipping_city"],
                state=raw["shipping_state"],
                zip_code=raw["shipping_zip_code"],
                country=raw["shipping_country"],
            ),
            items=[
                OrderItem(
                    id=OrderItemId.of(item["id"]),
                    product_id=ProductId.of(item["product_id"]),
                    product_name=item["product_name"],
                    unit_price=Money(Decimal(item["unit_price"]), item.get("currency", "USD")),
                    quantity=Quantity(item["quantity"]),
                )
                for item in raw.get("items", [])
            ],
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            cancellation_reason=raw.get("cancellation_reason"),
            order_number=OrderNumber(raw["order_number"]) if raw.get("order_number") else None,
            customer_info=customer_info,
            version=raw.get("version", 0),
        )
