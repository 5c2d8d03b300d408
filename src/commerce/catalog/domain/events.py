"""Domain events raised by the Product aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Union

from commerce.shared.domain.events import new_event_id, utcnow
from commerce.shared.domain.value_objects import Money


@dataclass(frozen=True)
class ProductCreated:
    event_type: ClassVar[str] = "ProductCreated"

    aggregate_id: str
    name: str
    sku: str
    price: Money
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ProductActivated:
    event_type: ClassVar[str] = "ProductActivated"

    aggregate_id: str
    name: str
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ProductDeactivated:
    event_type: ClassVar[str] = "ProductDeactivated"

    aggregate_id: str
    name: str
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ProductPriceChanged:
    event_type: ClassVar[str] = "ProductPriceChanged"

    aggregate_id: str
    old_price: Money
    new_price: Money
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ProductInfoUpdated:
    event_type: ClassVar[str] = "ProductInfoUpdated"

    aggregate_id: str
    name: str
    description: str
    event_id: str = field(default_factory=new_event_id)
    occurred_on: datetime = field(default_factory=utcnow)


ProductEvent = Union[
    ProductCreated,
    ProductActivated,
    ProductDeactivated,
    ProductPriceChanged,
    ProductInfoUpdated,
]
