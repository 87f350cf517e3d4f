"""Strength training records."""

from dataclasses import dataclass
from datetime import datetime

from .common import parse_timestamp


@dataclass
class StrengthRecord:
    """One exercise attempt; many may exist per date."""

    date: str
    exercise: str
    sets: int
    reps: int
    weight: float  # in kg
    notes: str | None = None
    id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    @property
    def estimated_1rm(self) -> float:
        """Calculate estimated 1RM using Epley formula."""
        if self.reps <= 1:
            return self.weight
        return self.weight * (1 + self.reps / 30)

    @property
    def volume(self) -> float:
        return self.sets * self.reps * self.weight

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "date": self.date,
            "exercise": self.exercise,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StrengthRecord":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            date=data["date"],
            exercise=data["exercise"],
            sets=data["sets"],
            reps=data["reps"],
            weight=data["weight"],
            notes=data.get("notes"),
            created_at=parse_timestamp(data.get("created_at")),
        )


def best_lifts(records: list[StrengthRecord]) -> dict[str, StrengthRecord]:
    """Highest estimated 1RM record per exercise."""
    best: dict[str, StrengthRecord] = {}
    for record in records:
        current = best.get(record.exercise)
        if current is None or record.estimated_1rm > current.estimated_1rm:
            best[record.exercise] = record
    return best
