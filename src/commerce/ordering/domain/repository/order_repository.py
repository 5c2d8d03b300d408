"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from commerce.ordering.domain.model.identifiers import CustomerId, OrderId
from commerce.ordering.domain.model.order import Order
from commerce.ordering.domain.model.order_status import OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: OrderId) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""

    @abstractmethod
    def list_by_status(self, status: OrderStatus) -> list[Order]:
        """Return the orders currently in *status*."""

    @abstractmethod
    def list_by_customer_id(self, customer_id: CustomerId) -> list[Order]:
        """Return every order placed by *customer_id*."""

    @abstractmethod
    def exists_by_id(self, order_id: OrderId) -> bool:
        """True if an order with this ID is stored."""

    @abstractmethod
    def save(self, order: Order) -> Order:
        """Persist an order together with all of its items, atomically.

        Raises ConcurrencyConflict if the stored version no longer matches
        ``order.version``; on success the version is incremented.
        """

    @abstractmethod
    def delete_by_id(self, order_id: OrderId) -> None:
        """Remove an order and its items.  Deleting a missing order is a no-op."""
