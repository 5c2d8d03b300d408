"""Order aggregate, the core of the Ordering context.

The Order is an aggregate root that owns its line items.  All lifecycle
rules and item-collection invariants are enforced here; rules that need
configuration (minimum order amount, shipping) live in OrderDomainService.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from commerce.ordering.domain.events import (
    OrderCancelled,
    OrderCreated,
    OrderEvent,
    OrderItemAdded,
    OrderItemQuantityChanged,
    OrderItemRemoved,
    OrderStatusChanged,
    OrderSubmitted,
)
from commerce.ordering.domain.model.identifiers import (
    CustomerId,
    OrderId,
    OrderItemId,
    ProductId,
)
from commerce.ordering.domain.model.order_status import OrderStatus
from commerce.ordering.domain.model.value_objects import (
    Address,
    CustomerInfo,
    OrderNumber,
)
from commerce.shared.domain.events import utcnow
from commerce.shared.domain.exceptions import (
    CannotSubmitOrder,
    CustomerInfoNotModifiable,
    DuplicateItem,
    InvalidQuantity,
    ItemNotFound,
    OrderNotModifiable,
    ValidationError,
)
from commerce.shared.domain.value_objects import DEFAULT_CURRENCY, Money, Quantity


@dataclass
class OrderItem:
    """A line of an order, owned exclusively by its Order.

    ``product_name`` and ``unit_price`` are a snapshot of the catalog at the
    time the item was added; later catalog changes never reach them.
    """

    id: OrderItemId
    product_id: ProductId
    product_name: str
    unit_price: Money  # locked when the item is added
    quantity: Quantity

    @staticmethod
    def create(
        product_id: ProductId,
        product_name: str,
        unit_price: Money,
        quantity: Quantity,
    ) -> OrderItem:
        if product_id is None:
            raise ValidationError("Product ID is required")
        if not product_name or not product_name.strip():
            raise ValidationError("Product name is required")
        if unit_price is None:
            raise ValidationError("Unit price is required")
        _require_positive(quantity)
        return OrderItem(
            id=OrderItemId.generate(),
            product_id=product_id,
            product_name=product_name.strip(),
            unit_price=unit_price,
            quantity=quantity,
        )

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value

    def update_quantity(self, new_quantity: Quantity) -> None:
        _require_positive(new_quantity)
        self.quantity = new_quantity


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders.  The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating or raising events.
    """

    id: OrderId
    customer_id: CustomerId
    shipping_address: Address
    items: list[OrderItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.DRAFT
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    cancellation_reason: str | None = None
    order_number: OrderNumber | None = None
    customer_info: CustomerInfo | None = None
    version: int = 0
    _events: list[OrderEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: CustomerId,
        shipping_address: Address,
        items: list[OrderItem] | None = None,
    ) -> Order:
        """Open a new DRAFT order.  An empty item list is allowed."""
        if customer_id is None:
            raise ValidationError("Customer ID is required")
        if shipping_address is None:
            raise ValidationError("Shipping address is required")

        order = Order(
            id=OrderId.generate(),
            customer_id=customer_id,
            shipping_address=shipping_address,
        )
        for item in items or []:
            if order.find_item(item.product_id) is not None:
                raise DuplicateItem(
                    f"Product '{item.product_id}' appears more than once"
                )
            order.items.append(item)

        order._record(
            OrderCreated(
                aggregate_id=order.id.value,
                customer_id=customer_id.value,
                total_amount=order.calculate_total_amount(),
            )
        )
        return order

    # --- Item collection (DRAFT only) -----------------------------------------

    def add_item(self, item: OrderItem) -> None:
        self._assert_modifiable()
        if item is None:
            raise ValidationError("Order item is required")
        if self.find_item(item.product_id) is not None:
            raise DuplicateItem(
                f"Product '{item.product_id}' is already in this order; "
                f"update its quantity instead"
            )

        self.items.append(item)
        self._touch()
        self._record(
            OrderItemAdded(
                aggregate_id=self.id.value,
                product_id=item.product_id.value,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
            )
        )

    def remove_item(self, product_id: ProductId) -> None:
        self._assert_modifiable()
        item = self._get_item(product_id)

        self.items.remove(item)
        self._touch()
        self._record(
            OrderItemRemoved(
                aggregate_id=self.id.value,
                product_id=product_id.value,
                quantity_removed=item.quantity.value,
                amount_removed=item.subtotal,
            )
        )

    def update_item_quantity(self, product_id: ProductId, new_quantity: Quantity) -> None:
        self._assert_modifiable()
        item = self._get_item(product_id)
        previous = item.quantity

        item.update_quantity(new_quantity)
        self._touch()
        self._record(
            OrderItemQuantityChanged(
                aggregate_id=self.id.value,
                product_id=product_id.value,
                previous_quantity=previous.value,
                new_quantity=new_quantity.value,
                subtotal=item.subtotal,
            )
        )

    def set_customer_info(self, customer_info: CustomerInfo) -> None:
        if not self.status.can_update_customer_info():
            raise CustomerInfoNotModifiable(
                f"Customer info cannot be modified in status {self.status.value}"
            )
        if customer_info is None:
            raise ValidationError("Customer info is required")
        self.customer_info = customer_info
        self._touch()

    # --- State transitions ----------------------------------------------------

    def submit(self) -> None:
        """Transition DRAFT -> PENDING and assign the order number.

        Product availability must be re-checked by the caller *before*
        calling this; the aggregate cannot see the catalog.
        """
        if not self.status.can_submit():
            raise CannotSubmitOrder(
                f"Order cannot be submitted in status {self.status.value}"
            )
        if not self.items:
            raise CannotSubmitOrder("Order must have at least one item to submit")
        if self.customer_info is None:
            raise CannotSubmitOrder("Customer info must be set before submitting")

        total = self.calculate_total_amount()
        self.status = self.status.transition_to(OrderStatus.PENDING)
        self.order_number = OrderNumber.generate()
        self._touch()
        self._record(
            OrderSubmitted(
                aggregate_id=self.id.value,
                order_number=self.order_number.value,
                customer_id=self.customer_id.value,
                customer_email=self.customer_info.email,
                total_amount=total,
                item_count=self.item_count,
            )
        )

    def confirm(self) -> None:
        self._change_status(OrderStatus.CONFIRMED)

    def start_processing(self) -> None:
        self._change_status(OrderStatus.PROCESSING)

    def ship(self) -> None:
        self._change_status(OrderStatus.SHIPPED)

    def deliver(self) -> None:
        self._change_status(OrderStatus.DELIVERED)

    def cancel(self, reason: str) -> None:
        """Cancel from any non-terminal state before shipping."""
        if not reason or not reason.strip():
            raise ValidationError("Cancellation reason is required")

        refund = self.calculate_total_amount()
        self.status = self.status.transition_to(OrderStatus.CANCELLED)
        self.cancellation_reason = reason.strip()
        self._touch()
        self._record(
            OrderCancelled(
                aggregate_id=self.id.value,
                reason=self.cancellation_reason,
                refund_amount=refund,
            )
        )

    # --- Computed properties --------------------------------------------------

    def calculate_total_amount(self) -> Money:
        """Sum of item subtotals.  Raises CurrencyMismatch on mixed currencies."""
        if not self.items:
            return Money.zero(DEFAULT_CURRENCY)
        total = Money.zero(self.items[0].unit_price.currency)
        for item in self.items:
            total = total + item.subtotal
        return total

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def is_submitted(self) -> bool:
        return self.order_number is not None

    def find_item(self, product_id: ProductId) -> OrderItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    # --- Pending events -------------------------------------------------------

    @property
    def events(self) -> tuple[OrderEvent, ...]:
        return tuple(self._events)

    def clear_events(self) -> None:
        self._events.clear()

    # --- Internal helpers -----------------------------------------------------

    def _change_status(self, target: OrderStatus) -> None:
        previous = self.status
        self.status = previous.transition_to(target)
        self._touch()
        self._record(
            OrderStatusChanged(
                aggregate_id=self.id.value,
                previous_status=previous,
                new_status=self.status,
            )
        )

    def _get_item(self, product_id: ProductId) -> OrderItem:
        item = self.find_item(product_id)
        if item is None:
            raise ItemNotFound(f"Product '{product_id}' not found in this order")
        return item

    def _assert_modifiable(self) -> None:
        if not self.status.is_modifiable():
            raise OrderNotModifiable(
                f"Order cannot be modified in status {self.status.value}"
            )

    def _record(self, event: OrderEvent) -> None:
        self._events.append(event)

    def _touch(self) -> None:
        self.updated_at = utcnow()


def _require_positive(quantity: Quantity) -> None:
    if quantity is None:
        raise ValidationError("Quantity is required")
    if quantity.is_zero():
        raise InvalidQuantity("Order item quantity must be positive")
