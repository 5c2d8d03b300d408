"""In-process implementation of the EventPublisher port.

Listeners subscribe per event class.  Dispatch happens on an optional
``concurrent.futures.Executor`` so publishing never blocks the command that
raised the events; without an executor listeners run inline.  Either way a
failing listener is logged and never reaches the publisher's caller: the
triggering change is already persisted.

Delivery is at-least-once from a listener's point of view (a retried
command re-publishes its events), so listeners must be idempotent.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import Executor
from typing import Any

import structlog

from commerce.shared.application.event_publisher import EventPublisher

logger = structlog.get_logger(__name__)

Listener = Callable[[Any], None]


class InProcessEventPublisher(EventPublisher):

    def __init__(self, executor: Executor | None = None) -> None:
        self._executor = executor
        self._listeners: dict[type, list[Listener]] = {}

    def subscribe(self, event_class: type, listener: Listener) -> None:
        listeners = self._listeners.setdefault(event_class, [])
        if listener not in listeners:
            listeners.append(listener)

    def publish(self, events: Iterable[Any]) -> None:
        for event in events:
            for listener in self._listeners.get(type(event), []):
                if self._executor is None:
                    self._deliver(listener, event)
                else:
                    self._executor.submit(self._deliver, listener, event)

    @staticmethod
    def _deliver(listener: Listener, event: Any) -> None:
        try:
            listener(event)
        except Exception:
            logger.exception(
                "event.listener_failed",
                event_type=getattr(event, "event_type", type(event).__name__),
                event_id=getattr(event, "event_id", None),
                listener=getattr(listener, "__qualname__", repr(listener)),
            )
