"""Domain service: Order rules that need configuration or span orders.

The minimum order amount and the shipping policy are injected so the
composition root can configure them; the aggregate itself stays free of
settings.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from commerce.ordering.domain.model.order import Order
from commerce.shared.domain.exceptions import (
    BelowMinimumOrderAmount,
    CannotSubmitOrder,
    ProductNotAvailable,
)
from commerce.shared.domain.value_objects import DEFAULT_CURRENCY, Money


class ShippingPolicy(ABC):

    @abstractmethod
    def cost_for(self, order: Order) -> Money:
        """Shipping cost for *order*, in the order's currency."""


class FlatRateShippingPolicy(ShippingPolicy):
    """A flat fee, waived once the subtotal reaches ``free_threshold``.

    An order with no items costs nothing to ship.
    """

    def __init__(self, free_threshold: Money, standard_cost: Money) -> None:
        self._free_threshold = free_threshold
        self._standard_cost = standard_cost

    def cost_for(self, order: Order) -> Money:
        if not order.items:
            return Money.zero(self._standard_cost.currency)
        subtotal = order.calculate_total_amount()
        if subtotal >= self._free_threshold:
            return Money.zero(subtotal.currency)
        return self._standard_cost


@dataclass(frozen=True)
class OrderStatistics:
    order_count: int
    total_revenue: Money
    average_order_value: Money


class OrderDomainService:

    def __init__(
        self,
        minimum_order_amount: Money,
        shipping_policy: ShippingPolicy,
    ) -> None:
        self._minimum_order_amount = minimum_order_amount
        self._shipping_policy = shipping_policy

    @property
    def minimum_order_amount(self) -> Money:
        return self._minimum_order_amount

    def validate_minimum_order_amount(self, order: Order) -> None:
        total = order.calculate_total_amount()
        if total < self._minimum_order_amount:
            raise BelowMinimumOrderAmount(
                f"Order total {total} is below minimum {self._minimum_order_amount}"
            )

    def validate_order_for_submission(self, order: Order) -> None:
        if not order.items:
            raise CannotSubmitOrder("Order must have at least one item to submit")
        if order.customer_info is None:
            raise CannotSubmitOrder("Customer info must be set before submitting")
        self.validate_minimum_order_amount(order)

    def validate_product_availability(
        self, order: Order, available_product_ids: Iterable[str]
    ) -> None:
        """Fail if any item refers to a product outside *available_product_ids*."""
        available = set(available_product_ids)
        unavailable = [
            item for item in order.items if item.product_id.value not in available
        ]
        if unavailable:
            names = ", ".join(
                f"{item.product_name} ({item.product_id})" for item in unavailable
            )
            raise ProductNotAvailable(
                f"The following products are not available: {names}"
            )

    def calculate_shipping_cost(self, order: Order) -> Money:
        return self._shipping_policy.cost_for(order)

    def calculate_order_total(self, order: Order) -> Money:
        return order.calculate_total_amount() + self.calculate_shipping_cost(order)

    def calculate_statistics(
        self, orders: list[Order], currency: str = DEFAULT_CURRENCY
    ) -> OrderStatistics:
        if not orders:
            return OrderStatistics(0, Money.zero(currency), Money.zero(currency))

        total = Money.zero(currency)
        for order in orders:
            total = total + order.calculate_total_amount()

        average = (total.amount / Decimal(len(orders))).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        return OrderStatistics(len(orders), total, Money(average, currency))
