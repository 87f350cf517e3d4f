"""Progress photo model."""

from dataclasses import dataclass, field
from datetime import datetime

from .common import parse_timestamp


@dataclass
class ProgressImage:
    """A progress photo.

    ``image_url`` holds either a URL or a ``data:`` URI with base64 content.
    """

    date: str
    time: str
    image_url: str
    notes: str | None = None
    is_favorite: bool = False
    tags: list[str] = field(default_factory=list)
    id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    @property
    def taken_at(self) -> str:
        return f"{self.date} {self.time}"

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "date": self.date,
            "time": self.time,
            "image_url": self.image_url,
            "notes": self.notes,
            "is_favorite": self.is_favorite,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProgressImage":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            date=data["date"],
            time=data.get("time") or "00:00",
            image_url=data["image_url"],
            notes=data.get("notes"),
            is_favorite=bool(data.get("is_favorite")),
            tags=list(data.get("tags") or []),
            created_at=parse_timestamp(data.get("created_at")),
        )
