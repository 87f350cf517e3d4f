"""Habit definitions and daily completions."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .common import parse_date, parse_timestamp


@dataclass
class Habit:
    """A user-defined habit with a daily goal."""

    name: str
    icon: str = "CircleCheck"
    target: int = 1  # completions per day
    description: str | None = None
    id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "target": self.target,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Habit":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            name=data["name"],
            description=data.get("description"),
            icon=data.get("icon") or "CircleCheck",
            target=data.get("target") or 1,
            created_at=parse_timestamp(data.get("created_at")),
        )


@dataclass
class HabitCompletion:
    """Completion count for one habit on one date."""

    habit_id: str
    date: str
    count: int = 1
    id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    def is_done_for(self, habit: Habit) -> bool:
        """A habit is done for the day once the count reaches its target."""
        return self.habit_id == habit.id and self.count >= habit.target

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "habit_id": self.habit_id,
            "date": self.date,
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HabitCompletion":
        """Create from dictionary."""
        count = data.get("count")
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            habit_id=data["habit_id"],
            date=data["date"],
            count=1 if count is None else count,
            created_at=parse_timestamp(data.get("created_at")),
        )


def default_habits() -> list[Habit]:
    """Habits a fresh local store starts with."""
    return [
        Habit(id="1", name="Protein Shake", icon="Utensils", target=2),
        Habit(id="2", name="Water (2L)", icon="Droplet", target=4),
        Habit(id="3", name="Creatine", icon="Pill", target=1),
        Habit(id="4", name="Multivitamin", icon="CircleCheck", target=1),
    ]


def completed_dates(habit: Habit, completions: list[HabitCompletion]) -> set[date]:
    """Dates on which ``habit`` reached its target."""
    return {
        parse_date(c.date) for c in completions if c.is_done_for(habit)
    }


def habit_streak(
    habit: Habit,
    completions: list[HabitCompletion],
    today: date | None = None,
) -> int:
    """Count consecutive done days ending today.

    If today is not done yet the streak is counted from yesterday, so an
    unfinished day does not reset it.
    """
    today = today or date.today()
    done = completed_dates(habit, completions)

    day = today if today in done else today - timedelta(days=1)
    streak = 0
    while day in done:
        streak += 1
        day -= timedelta(days=1)
    return streak
