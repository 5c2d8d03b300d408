"""Outbound port for publishing domain events after a successful save."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, events: Iterable[Any]) -> None:
        """Hand the events, in order, to whoever is listening."""
