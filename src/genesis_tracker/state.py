"""Body metric state shared between trackers.

The state is an ordinary object passed to whoever needs it. It is only
persisted when ``persist`` is called.
"""

from dataclasses import dataclass

from .events import BodyMetric, EventBus, MetricUpdated, Unsubscribe
from .storage.local import LocalStore
from .storage.namespaces import Namespace


@dataclass
class BodyMetricsState:
    """Latest known height (cm), weight (kg) and body fat (%)."""

    height: float | None = None
    weight: float | None = None
    body_fat: float | None = None

    def initialize(
        self,
        height: float | None = None,
        weight: float | None = None,
        body_fat: float | None = None,
    ) -> None:
        """Replace all values; omitted ones become None."""
        self.height = height
        self.weight = weight
        self.body_fat = body_fat

    def set_height(self, height: float) -> None:
        self.height = height

    def set_weight(self, weight: float) -> None:
        self.weight = weight

    def set_body_fat(self, body_fat: float) -> None:
        self.body_fat = body_fat

    def apply(self, metric: BodyMetric, value: float) -> None:
        """Set one metric by name."""
        setters = {
            BodyMetric.HEIGHT: self.set_height,
            BodyMetric.WEIGHT: self.set_weight,
            BodyMetric.BODY_FAT: self.set_body_fat,
        }
        setters[BodyMetric(metric)](value)

    @property
    def is_complete(self) -> bool:
        return None not in (self.height, self.weight, self.body_fat)

    def bind(self, bus: EventBus) -> Unsubscribe:
        """Follow MetricUpdated events until the returned callable is invoked."""
        return bus.subscribe(MetricUpdated, lambda e: self.apply(e.metric, e.value))

    def to_dict(self) -> dict:
        return {"height": self.height, "weight": self.weight, "bodyFat": self.body_fat}

    def persist(self, store: LocalStore) -> None:
        store.write_object(Namespace.BODY_METRICS, self.to_dict())

    @classmethod
    def load(cls, store: LocalStore) -> "BodyMetricsState":
        data = store.read_object(Namespace.BODY_METRICS) or {}
        return cls(
            height=data.get("height"),
            weight=data.get("weight"),
            body_fat=data.get("bodyFat"),
        )
