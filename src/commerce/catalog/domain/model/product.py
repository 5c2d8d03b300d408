"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
DRAFT -> ACTIVE <-> INACTIVE.  Prices and descriptive info may change in
any status; orders are unaffected because they snapshot name and price.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from commerce.catalog.domain.events import (
    ProductActivated,
    ProductCreated,
    ProductDeactivated,
    ProductEvent,
    ProductInfoUpdated,
    ProductPriceChanged,
)
from commerce.shared.domain.events import utcnow
from commerce.shared.domain.exceptions import InvalidStatusTransition, ValidationError
from commerce.shared.domain.identifiers import Identifier
from commerce.shared.domain.value_objects import Money

MAX_NAME_LENGTH = 255


@dataclass(frozen=True)
class ProductId(Identifier):
    """Identity of a catalog product."""


class ProductStatus(Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"

    def can_transition_to(self, target: ProductStatus) -> bool:
        return target in PRODUCT_TRANSITIONS[self]

    def is_available_for_purchase(self) -> bool:
        return self is ProductStatus.ACTIVE


PRODUCT_TRANSITIONS: dict[ProductStatus, frozenset[ProductStatus]] = {
    ProductStatus.DRAFT: frozenset({ProductStatus.ACTIVE}),
    ProductStatus.ACTIVE: frozenset({ProductStatus.INACTIVE}),
    ProductStatus.INACTIVE: frozenset({ProductStatus.ACTIVE}),
}


@dataclass
class Product:
    """Aggregate root for the catalog.

    Use ``Product.create()`` for new products.  The ``__init__`` is
    deliberately plain so the repository can reconstitute persisted
    products without re-validating or raising events.
    """

    id: ProductId
    name: str
    description: str
    price: Money
    sku: str
    status: ProductStatus = ProductStatus.DRAFT
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    version: int = 0
    _events: list[ProductEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(name: str, description: str | None, price: Money, sku: str) -> Product:
        name = _validate_name(name)
        if price is None:
            raise ValidationError("Product price is required")
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")

        product = Product(
            id=ProductId.generate(),
            name=name,
            description=(description or "").strip(),
            price=price,
            sku=sku.strip().upper(),
        )
        product._record(
            ProductCreated(
                aggregate_id=product.id.value,
                name=product.name,
                sku=product.sku,
                price=price,
            )
        )
        return product

    # --- State transitions ----------------------------------------------------

    def activate(self) -> None:
        """Make the product purchasable (DRAFT|INACTIVE -> ACTIVE)."""
        if not self.status.can_transition_to(ProductStatus.ACTIVE):
            raise InvalidStatusTransition(
                f"Cannot activate product from status {self.status.value}"
            )
        self.status = ProductStatus.ACTIVE
        self._touch()
        self._record(ProductActivated(aggregate_id=self.id.value, name=self.name))

    def deactivate(self) -> None:
        """Withdraw the product from sale (ACTIVE -> INACTIVE)."""
        if not self.status.can_transition_to(ProductStatus.INACTIVE):
            raise InvalidStatusTransition(
                f"Cannot deactivate product from status {self.status.value}"
            )
        self.status = ProductStatus.INACTIVE
        self._touch()
        self._record(ProductDeactivated(aggregate_id=self.id.value, name=self.name))

    # --- Mutations allowed in any status --------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot when the item is added.
        """
        if new_price is None:
            raise ValidationError("Product price is required")
        old_price = self.price
        self.price = new_price
        self._touch()
        self._record(
            ProductPriceChanged(
                aggregate_id=self.id.value, old_price=old_price, new_price=new_price
            )
        )

    def update_info(self, name: str, description: str | None) -> None:
        self.name = _validate_name(name)
        self.description = (description or "").strip()
        self._touch()
        self._record(
            ProductInfoUpdated(
                aggregate_id=self.id.value,
                name=self.name,
                description=self.description,
            )
        )

    def is_available_for_purchase(self) -> bool:
        return self.status.is_available_for_purchase()

    # --- Pending events -------------------------------------------------------

    @property
    def events(self) -> tuple[ProductEvent, ...]:
        return tuple(self._events)

    def clear_events(self) -> None:
        self._events.clear()

    # --- Internal helpers -----------------------------------------------------

    def _record(self, event: ProductEvent) -> None:
        self._events.append(event)

    def _touch(self) -> None:
        self.updated_at = utcnow()


def _validate_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Product name is required")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Product name cannot exceed {MAX_NAME_LENGTH} characters"
        )
    return name
