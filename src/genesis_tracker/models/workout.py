"""Workout plan model."""

from dataclasses import dataclass, field
from datetime import datetime

from .common import parse_timestamp


@dataclass
class WorkoutDay:
    """One day of a training split."""

    day: str
    focus: str = ""
    exercises: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"day": self.day, "focus": self.focus, "exercises": list(self.exercises)}

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutDay":
        return cls(
            day=data["day"],
            focus=data.get("focus", ""),
            exercises=list(data.get("exercises", [])),
        )


@dataclass
class WorkoutPlan:
    """A training split with its nutrition notes and supplement ids."""

    split_name: str
    days: list[WorkoutDay] = field(default_factory=list)
    nutrition: dict = field(default_factory=dict)
    supplements: list[str] = field(default_factory=list)
    id: str | None = None
    user_id: str | None = None
    updated_at: datetime | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "split_name": self.split_name,
            "days": [d.to_dict() for d in self.days],
            "nutrition": dict(self.nutrition),
            "supplements": list(self.supplements),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutPlan":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            split_name=data["split_name"],
            days=[WorkoutDay.from_dict(d) for d in data.get("days") or []],
            nutrition=dict(data.get("nutrition") or {}),
            supplements=list(data.get("supplements") or []),
            updated_at=parse_timestamp(data.get("updated_at")),
            created_at=parse_timestamp(data.get("created_at")),
        )
