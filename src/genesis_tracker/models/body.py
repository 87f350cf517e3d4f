"""Body composition and circumference records."""

from dataclasses import dataclass
from datetime import datetime

from .common import parse_timestamp


@dataclass
class BodyMeasurement:
    """Weight and body composition for one date (one per date per user)."""

    date: str
    weight: float | None = None
    height: float | None = None
    body_fat: float | None = None
    muscle_mass: float | None = None
    chest: float | None = None
    waist: float | None = None
    arms: float | None = None
    thighs: float | None = None
    shoulders: float | None = None
    notes: str | None = None
    id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    @property
    def bmi(self) -> float | None:
        """Body mass index from weight (kg) and height (cm)."""
        if not self.weight or not self.height:
            return None
        meters = self.height / 100
        return self.weight / (meters * meters)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "date": self.date,
            "weight": self.weight,
            "height": self.height,
            "body_fat": self.body_fat,
            "muscle_mass": self.muscle_mass,
            "chest": self.chest,
            "waist": self.waist,
            "arms": self.arms,
            "thighs": self.thighs,
            "shoulders": self.shoulders,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BodyMeasurement":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            date=data["date"],
            weight=data.get("weight"),
            height=data.get("height"),
            body_fat=data.get("body_fat"),
            muscle_mass=data.get("muscle_mass"),
            chest=data.get("chest"),
            waist=data.get("waist"),
            arms=data.get("arms"),
            thighs=data.get("thighs"),
            shoulders=data.get("shoulders"),
            notes=data.get("notes"),
            created_at=parse_timestamp(data.get("created_at")),
        )


CIRCUMFERENCE_FIELDS = (
    "chest",
    "waist",
    "hips",
    "arm",
    "thigh",
    "neck",
    "shoulders",
    "forearm",
)


@dataclass
class Measurement:
    """Circumference measurements in cm for one date."""

    date: str
    chest: float | None = None
    waist: float | None = None
    hips: float | None = None
    arm: float | None = None
    thigh: float | None = None
    neck: float | None = None
    shoulders: float | None = None
    forearm: float | None = None
    id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        data = {"id": self.id, "date": self.date}
        for name in CIRCUMFERENCE_FIELDS:
            data[name] = getattr(self, name)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Measurement":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            date=data["date"],
            created_at=parse_timestamp(data.get("created_at")),
            **{name: data.get(name) for name in CIRCUMFERENCE_FIELDS},
        )
