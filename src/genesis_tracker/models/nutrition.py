"""Daily nutrition intake model."""

from dataclasses import dataclass
from datetime import datetime

from .common import parse_timestamp

DEFAULT_TARGET_CALORIES = 4864.0
DEFAULT_TARGET_PROTEIN = 280.0
DEFAULT_TARGET_WATER = 4000.0


def _value(data: dict, key: str, default: float) -> float:
    value = data.get(key)
    return default if value is None else value


@dataclass
class NutritionRecord:
    """Intake totals and targets for one date."""

    date: str
    calories: float = 0
    protein: float = 0
    water: float = 0
    target_calories: float = DEFAULT_TARGET_CALORIES
    target_protein: float = DEFAULT_TARGET_PROTEIN
    target_water: float = DEFAULT_TARGET_WATER
    id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    def add(self, calories: float = 0, protein: float = 0, water: float = 0) -> None:
        """Accumulate intake onto the day's totals."""
        self.calories += calories
        self.protein += protein
        self.water += water

    def progress(self) -> dict[str, float]:
        """Percent of each target reached, capped at 100."""

        def pct(value: float, target: float) -> float:
            if not target:
                return 0.0
            return min(value / target * 100, 100.0)

        return {
            "calories": pct(self.calories, self.target_calories),
            "protein": pct(self.protein, self.target_protein),
            "water": pct(self.water, self.target_water),
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "date": self.date,
            "calories": self.calories,
            "protein": self.protein,
            "water": self.water,
            "target_calories": self.target_calories,
            "target_protein": self.target_protein,
            "target_water": self.target_water,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NutritionRecord":
        """Create from dictionary.

        Missing or null values fall back to zero intake and default targets.
        """
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            date=data["date"],
            calories=_value(data, "calories", 0),
            protein=_value(data, "protein", 0),
            water=_value(data, "water", 0),
            target_calories=_value(data, "target_calories", DEFAULT_TARGET_CALORIES),
            target_protein=_value(data, "target_protein", DEFAULT_TARGET_PROTEIN),
            target_water=_value(data, "target_water", DEFAULT_TARGET_WATER),
            created_at=parse_timestamp(data.get("created_at")),
        )
