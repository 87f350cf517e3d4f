"""Personal profile model (singleton per user)."""

from dataclasses import dataclass
from datetime import datetime

from .common import parse_timestamp


@dataclass
class Profile:
    """Personal data and daily targets.

    The remote ``id`` of a profile is the owning user's id.
    """

    name: str | None = None
    age: int | None = None
    height: float | None = None  # cm
    weight: float | None = None  # kg
    body_fat: float | None = None  # percent
    calories: float | None = None
    protein: float | None = None
    sleep: float | None = None  # hours
    training_days: int | None = None
    id: str | None = None
    user_id: str | None = None
    updated_at: datetime | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "height": self.height,
            "weight": self.weight,
            "body_fat": self.body_fat,
            "calories": self.calories,
            "protein": self.protein,
            "sleep": self.sleep,
            "training_days": self.training_days,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            name=data.get("name"),
            age=data.get("age"),
            height=data.get("height"),
            weight=data.get("weight"),
            body_fat=data.get("body_fat"),
            calories=data.get("calories"),
            protein=data.get("protein"),
            sleep=data.get("sleep"),
            training_days=data.get("training_days"),
            updated_at=parse_timestamp(data.get("updated_at")),
            created_at=parse_timestamp(data.get("created_at")),
        )

    def get_summary(self) -> str:
        """Generate a short multi-line summary."""
        summary = f"Name: {self.name or '-'}\n"
        if self.age:
            summary += f"Age: {self.age}\n"
        if self.height:
            summary += f"Height: {self.height} cm\n"
        if self.weight:
            summary += f"Weight: {self.weight} kg\n"
        if self.body_fat is not None:
            summary += f"Body fat: {self.body_fat}%\n"
        if self.calories or self.protein:
            summary += f"Targets: {self.calories or 0} kcal, {self.protein or 0} g protein\n"
        if self.sleep:
            summary += f"Sleep: {self.sleep} h\n"
        if self.training_days:
            summary += f"Training days: {self.training_days}/week\n"
        return summary
