"""Typed publish/subscribe for metric updates."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)


class BodyMetric(str, Enum):
    """Body metrics mirrored into the shared state."""

    HEIGHT = "height"
    WEIGHT = "weight"
    BODY_FAT = "bodyFat"


@dataclass(frozen=True)
class MetricUpdated:
    """A body metric received a new value."""

    metric: BodyMetric
    value: float


E = TypeVar("E")
Handler = Callable[[E], None]
Unsubscribe = Callable[[], None]


class EventBus:
    """Dispatches events to handlers subscribed to their exact type."""

    def __init__(self):
        self._handlers: dict[type, list[Callable]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Handler) -> Unsubscribe:
        """Register ``handler``; the returned callable removes it again."""
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, event: object) -> int:
        """Deliver ``event`` to its subscribers; returns how many were called.

        A handler that raises is logged and does not prevent delivery to the
        remaining handlers.
        """
        delivered = 0
        for handler in list(self._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler failed for %s", type(event).__name__)
            delivered += 1
        return delivered

    def subscriber_count(self, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))
