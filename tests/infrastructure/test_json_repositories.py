"""Tests for the JSON-file repositories against a temporary directory."""

import json
import threading
import time
from decimal import Decimal

import pytest

from commerce.catalog.domain.model.product import Product, ProductId, ProductStatus
from commerce.catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from commerce.ordering.domain.model.identifiers import CustomerId, OrderId, ProductId as OrderProductId
from commerce.ordering.domain.model.order import Order, OrderItem
from commerce.ordering.domain.model.order_status import OrderStatus
from commerce.ordering.domain.model.value_objects import Address, CustomerInfo, OrderNumber
from commerce.ordering.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from commerce.shared.domain.exceptions import (
    ConcurrencyConflict,
    DuplicateOrderNumber,
    DuplicateSku,
)
from commerce.shared.domain.value_objects import Money, Quantity
from commerce.shared.infrastructure.json_store import JsonFileStore


def _product(sku: str = "WID-001", price: str = "15.00") -> Product:
    return Product.create("Widget", "A widget", Money.of(price), sku)


def _order(customer: str = "cust-1") -> Order:
    items = [
        OrderItem.create(OrderProductId.of("p-1"), "Widget", Money.of("10.00"), Quantity(2)),
        OrderItem.create(OrderProductId.of("p-2"), "Gadget", Money.of("7.50"), Quantity(1)),
    ]
    return Order.create(
        CustomerId.of(customer),
        Address("1 Main St", "Springfield", "IL", "62701", "USA"),
        items,
    )


def _save_in_parallel(monkeypatch, saves) -> list[str]:
    """Run each save on its own thread with a slow read, so the reads overlap."""
    original_load = JsonFileStore.load

    def slow_load(store):
        records = original_load(store)
        time.sleep(0.05)
        return records

    monkeypatch.setattr(JsonFileStore, "load", slow_load)

    outcomes = []

    def run(save):
        try:
            save()
            outcomes.append("saved")
        except ConcurrencyConflict:
            outcomes.append("conflict")

    threads = [threading.Thread(target=run, args=(save,)) for save in saves]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return sorted(outcomes)


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        JsonProductRepository(tmp_path / "nested" / "products.json")
        assert json.loads((tmp_path / "nested" / "products.json").read_text()) == []

    def test_round_trip(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        product.activate()
        repo.save(product)

        loaded = JsonProductRepository(tmp_path / "products.json").get_by_id(product.id)
        assert loaded == product
        assert loaded.status == ProductStatus.ACTIVE
        assert loaded.price == Money.of("15.00")
        assert loaded.version == 1
        assert loaded.events == ()

    def test_persisted_shape(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_product(price="9.5"))
        (raw,) = json.loads((tmp_path / "products.json").read_text())
        assert set(raw) == {
            "id", "name", "description", "price", "currency", "sku",
            "status", "created_at", "updated_at", "version",
        }
        assert raw["price"] == "9.50"
        assert raw["currency"] == "USD"

    def test_queries(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        a, b = _product("A-1"), _product("B-1")
        a.activate()
        repo.save(a)
        repo.save(b)
        assert len(repo.list_all()) == 2
        assert [p.sku for p in repo.list_by_status(ProductStatus.ACTIVE)] == ["A-1"]
        assert repo.exists_by_sku("b-1")
        assert not repo.exists_by_sku("C-1")
        assert repo.exists_by_id(a.id)
        assert repo.get_by_id(ProductId.of("missing")) is None

    def test_duplicate_sku_rejected(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_product("WID-001"))
        with pytest.raises(DuplicateSku):
            repo.save(_product("WID-001"))

    def test_stale_version_rejected(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        repo.save(product)

        first = repo.get_by_id(product.id)
        second = repo.get_by_id(product.id)
        first.activate()
        repo.save(first)

        second.update_price(Money.of("1.00"))
        with pytest.raises(ConcurrencyConflict):
            repo.save(second)
        assert repo.get_by_id(product.id).price == Money.of("15.00")

    def test_parallel_writers_of_same_version(self, tmp_path, monkeypatch):
        path = tmp_path / "products.json"
        product = _product()
        JsonProductRepository(path).save(product)

        first = JsonProductRepository(path).get_by_id(product.id)
        second = JsonProductRepository(path).get_by_id(product.id)
        first.update_price(Money.of("1.00"))
        second.update_price(Money.of("2.00"))

        outcomes = _save_in_parallel(monkeypatch, [
            lambda: JsonProductRepository(path).save(first),
            lambda: JsonProductRepository(path).save(second),
        ])

        assert outcomes == ["conflict", "saved"]
        assert JsonProductRepository(path).get_by_id(product.id).version == 2

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        repo.save(product)
        repo.delete_by_id(product.id)
        repo.delete_by_id(product.id)
        assert repo.list_all() == []


class TestJsonOrderRepository:

    def test_round_trip_with_items(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        order.set_customer_info(CustomerInfo("Alice", "alice@example.com", "555-123-4567"))
        order.submit()
        repo.save(order)

        loaded = JsonOrderRepository(tmp_path / "orders.json").get_by_id(order.id)
        assert loaded == order
        assert loaded.status == OrderStatus.PENDING
        assert loaded.order_number == order.order_number
        assert loaded.customer_info.phone == "555-123-4567"
        assert [i.product_name for i in loaded.items] == ["Widget", "Gadget"]
        assert loaded.calculate_total_amount() == Money.of("27.50")
        assert loaded.events == ()

    def test_persisted_shape(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(_order())
        (raw,) = json.loads((tmp_path / "orders.json").read_text())
        assert raw["subtotal"] == "27.50"
        assert raw["currency"] == "USD"
        assert raw["order_number"] is None
        assert raw["customer_name"] is None
        assert raw["shipping_city"] == "Springfield"
        assert raw["version"] == 1
        assert raw["items"][0] == {
            "id": raw["items"][0]["id"],
            "product_id": "p-1",
            "product_name": "Widget",
            "unit_price": "10.00",
            "currency": "USD",
            "quantity": 2,
        }

    def test_cancellation_reason_survives(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        order.cancel("abandoned cart")
        repo.save(order)
        assert repo.get_by_id(order.id).cancellation_reason == "abandoned cart"

    def test_queries(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = _order("cust-1"), _order("cust-2")
        second.cancel("nope")
        repo.save(first)
        repo.save(second)
        assert len(repo.list_all()) == 2
        assert [o.id for o in repo.list_by_customer_id(CustomerId.of("cust-2"))] == [second.id]
        assert [o.id for o in repo.list_by_status(OrderStatus.DRAFT)] == [first.id]
        assert repo.exists_by_id(first.id)
        assert not repo.exists_by_id(OrderId.of("missing"))

    def test_stale_version_rejected(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)

        first = repo.get_by_id(order.id)
        second = repo.get_by_id(order.id)
        first.update_item_quantity(OrderProductId.of("p-1"), Quantity(5))
        repo.save(first)

        second.cancel("racing")
        with pytest.raises(ConcurrencyConflict):
            repo.save(second)
        stored = repo.get_by_id(order.id)
        assert stored.status == OrderStatus.DRAFT
        assert stored.version == 2

    def test_parallel_writers_of_same_version(self, tmp_path, monkeypatch):
        path = tmp_path / "orders.json"
        order = _order()
        JsonOrderRepository(path).save(order)

        first = JsonOrderRepository(path).get_by_id(order.id)
        second = JsonOrderRepository(path).get_by_id(order.id)
        first.cancel("writer one")
        second.cancel("writer two")

        outcomes = _save_in_parallel(monkeypatch, [
            lambda: JsonOrderRepository(path).save(first),
            lambda: JsonOrderRepository(path).save(second),
        ])

        assert outcomes == ["conflict", "saved"]
        stored = JsonOrderRepository(path).get_by_id(order.id)
        assert stored.version == 2
        assert stored.cancellation_reason in ("writer one", "writer two")

    def test_duplicate_order_number_rejected(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = _order("cust-1"), _order("cust-2")
        first.order_number = OrderNumber("ORD-2026-00042")
        second.order_number = OrderNumber("ORD-2026-00042")
        repo.save(first)

        with pytest.raises(DuplicateOrderNumber):
            repo.save(second)
        assert [o.id for o in repo.list_all()] == [first.id]

    def test_resaving_keeps_own_order_number(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        order.order_number = OrderNumber("ORD-2026-00042")
        repo.save(order)
        order.cancel("changed mind")
        repo.save(order)
        assert repo.get_by_id(order.id).order_number.value == "ORD-2026-00042"

    def test_no_temp_files_left_behind(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(_order())
        leftovers = [p.name for p in tmp_path.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []
        assert (tmp_path / "orders.json").exists()

    def test_delete(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)
        repo.delete_by_id(order.id)
        assert repo.get_by_id(order.id) is None
