"""Supplement definitions and daily intake flags."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .common import parse_timestamp


class SupplementTiming(str, Enum):
    """When a supplement is taken."""

    MORNING = "morning"
    PRE_WORKOUT = "pre_workout"
    POST_WORKOUT = "post_workout"
    EVENING = "evening"
    WITH_MEAL = "with_meal"


@dataclass
class Supplement:
    """A user-defined supplement."""

    name: str
    dosage: str = ""
    timing: str = SupplementTiming.MORNING.value
    category: str = ""
    icon: str = "Pill"
    color: str = ""
    id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "dosage": self.dosage,
            "timing": self.timing,
            "category": self.category,
            "icon": self.icon,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Supplement":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            name=data["name"],
            dosage=data.get("dosage") or "",
            timing=data.get("timing") or SupplementTiming.MORNING.value,
            category=data.get("category") or "",
            icon=data.get("icon") or "Pill",
            color=data.get("color") or "",
            created_at=parse_timestamp(data.get("created_at")),
        )


@dataclass
class SupplementCompletion:
    """Whether a supplement was taken on a date."""

    supplement_id: str
    date: str
    taken: bool = True
    id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "supplement_id": self.supplement_id,
            "date": self.date,
            "taken": self.taken,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SupplementCompletion":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            supplement_id=data["supplement_id"],
            date=data["date"],
            taken=bool(data.get("taken")),
            created_at=parse_timestamp(data.get("created_at")),
        )
