"""Integration tests for the CreateOrder use case.

Uses in-memory fakes, no file I/O.
"""

from decimal import Decimal

import pytest

from commerce.ordering.application.create_order import CreateOrderHandler
from commerce.ordering.application.dto import AddressSpec, OrderItemSpec
from commerce.ordering.application.ports import ProductInfo
from commerce.ordering.domain.model.identifiers import OrderId
from commerce.ordering.domain.service.order_domain_service import (
    FlatRateShippingPolicy,
    OrderDomainService,
)
from commerce.shared.domain.exceptions import (
    BelowMinimumOrderAmount,
    DuplicateItem,
    ProductNotAvailable,
    ProductNotFound,
    ValidationError,
)
from commerce.shared.domain.value_objects import Money
from tests.fakes import FakeEventPublisher, FakeOrderRepository, FakeProductPort

ADDRESS = AddressSpec("1 Main St", "Springfield", "IL", "62701", "USA")


def _catalog() -> FakeProductPort:
    return FakeProductPort([
        ProductInfo("widget", "Widget", Decimal("15.00"), "USD", True),
        ProductInfo("gadget", "Gadget", Decimal("25.00"), "USD", True),
        ProductInfo("cheap", "CheapItem", Decimal("5.00"), "USD", True),
        ProductInfo("retired", "Retired", Decimal("20.00"), "USD", False),
    ])


def _setup(
    port: FakeProductPort | None = None,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductPort, FakeEventPublisher]:
    """Build handler with fakes, optionally with a custom catalog."""
    port = port or _catalog()
    order_repo = FakeOrderRepository()
    publisher = FakeEventPublisher()
    service = OrderDomainService(
        minimum_order_amount=Money.of("10.00"),
        shipping_policy=FlatRateShippingPolicy(Money.of("100.00"), Money.of("9.99")),
    )
    handler = CreateOrderHandler(order_repo, port, service, publisher)
    return handler, order_repo, port, publisher


class TestCreateOrderHappyPath:

    def test_creates_order_with_correct_totals(self):
        handler, _, _, _ = _setup()
        dto = handler.handle("cust-1", ADDRESS, [
            OrderItemSpec("widget", 3),
            OrderItemSpec("gadget", 5),
        ])
        assert dto.subtotal == "$170.00"
        assert dto.shipping_cost == "$0.00"
        assert dto.total == "$170.00"
        assert dto.status == "DRAFT"
        assert dto.order_number is None
        assert dto.customer_id == "cust-1"
        assert dto.shipping_address == "1 Main St, Springfield, IL 62701, USA"
        assert len(dto.items) == 2
        assert dto.item_count == 2
        assert dto.total_quantity == 8

    def test_shipping_charged_below_threshold(self):
        handler, _, _, _ = _setup()
        dto = handler.handle("cust-1", ADDRESS, [OrderItemSpec("widget", 1)])
        assert dto.shipping_cost == "$9.99"
        assert dto.total == "$24.99"

    def test_empty_order_allowed(self):
        handler, _, _, _ = _setup()
        dto = handler.handle("cust-1", ADDRESS)
        assert dto.items == []
        assert dto.subtotal == "$0.00"

    def test_persists_and_publishes(self):
        handler, order_repo, _, publisher = _setup()
        dto = handler.handle("cust-1", ADDRESS, [OrderItemSpec("widget", 1)])
        saved = order_repo.get_by_id(OrderId.of(dto.id))
        assert saved is not None
        assert saved.version == 1
        assert publisher.types() == ["OrderCreated"]

    def test_distinct_ids(self):
        handler, _, _, _ = _setup()
        dto1 = handler.handle("cust-1", ADDRESS, [OrderItemSpec("widget", 1)])
        dto2 = handler.handle("cust-2", ADDRESS, [OrderItemSpec("gadget", 1)])
        assert dto1.id != dto2.id


class TestCreateOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        handler, order_repo, port, _ = _setup()
        dto = handler.handle("cust-1", ADDRESS, [OrderItemSpec("widget", 1)])
        assert dto.subtotal == "$15.00"

        # The catalog changes the price afterwards
        port.put(ProductInfo("widget", "Widget v2", Decimal("99.99"), "USD", True))

        saved = order_repo.get_by_id(OrderId.of(dto.id))
        assert str(saved.calculate_total_amount()) == "$15.00"
        assert saved.items[0].product_name == "Widget"


class TestCreateOrderValidation:

    def test_unknown_product(self):
        handler, order_repo, _, publisher = _setup()
        with pytest.raises(ProductNotFound, match="nope"):
            handler.handle("cust-1", ADDRESS, [OrderItemSpec("nope", 1)])
        assert order_repo.list_all() == []
        assert publisher.published == []

    def test_inactive_product(self):
        handler, order_repo, _, _ = _setup()
        with pytest.raises(ProductNotAvailable, match="Retired"):
            handler.handle("cust-1", ADDRESS, [OrderItemSpec("retired", 1)])
        assert order_repo.list_all() == []

    def test_below_minimum(self):
        handler, order_repo, _, _ = _setup()
        with pytest.raises(BelowMinimumOrderAmount):
            handler.handle("cust-1", ADDRESS, [OrderItemSpec("cheap", 1)])
        assert order_repo.list_all() == []

    def test_exactly_minimum(self):
        handler, _, _, _ = _setup()
        dto = handler.handle("cust-1", ADDRESS, [OrderItemSpec("cheap", 2)])
        assert dto.subtotal == "$10.00"

    def test_duplicate_products(self):
        handler, _, _, _ = _setup()
        with pytest.raises(DuplicateItem):
            handler.handle("cust-1", ADDRESS, [
                OrderItemSpec("widget", 1),
                OrderItemSpec("widget", 2),
            ])

    def test_zero_quantity(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError):
            handler.handle("cust-1", ADDRESS, [OrderItemSpec("widget", 0)])

    def test_blank_address_part(self):
        handler, _, _, _ = _setup()
        bad = AddressSpec("1 Main St", "", "IL", "62701", "USA")
        with pytest.raises(ValidationError, match="City"):
            handler.handle("cust-1", bad)
