"""Identifier types used inside the Ordering context.

``ProductId`` here is Ordering's own reference to a catalog product; it is
deliberately not the Catalog context's class.
"""

from __future__ import annotations

from dataclasses import dataclass

from commerce.shared.domain.identifiers import Identifier


@dataclass(frozen=True)
class OrderId(Identifier):
    pass


@dataclass(frozen=True)
class OrderItemId(Identifier):
    pass


@dataclass(frozen=True)
class CustomerId(Identifier):
    pass


@dataclass(frozen=True)
class ProductId(Identifier):
    pass
