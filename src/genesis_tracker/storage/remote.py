"""Authenticated, asynchronous CRUD against the multi-table backend.

Every operation resolves the current user first and fails with
NotAuthenticated when there is none. Database failures surface as
BackendError; nothing here falls back to local data.
"""

import logging
from functools import wraps
from pathlib import Path
from typing import Any

import aiosqlite

from ..db.repositories import TABLE_SPECS, TableRepository
from ..errors import BackendError, NotAuthenticated
from ..models import (
    BodyMeasurement,
    Habit,
    HabitCompletion,
    Measurement,
    NutritionRecord,
    Profile,
    ProgressImage,
    StrengthRecord,
    Supplement,
    SupplementCompletion,
    WorkoutPlan,
)
from ..services.auth import AuthProvider, User
from .namespaces import COLLECTIONS_BY_TABLE

logger = logging.getLogger(__name__)


def _backend_errors(func):
    """Re-raise database errors as BackendError."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except aiosqlite.Error as e:
            logger.debug("Backend failure in %s: %s", func.__name__, e)
            raise BackendError(str(e)) from e

    return wrapper


class RemoteStore:
    """User-scoped access to the eleven record tables."""

    def __init__(self, auth: AuthProvider, db_path: Path | None = None):
        self.auth = auth
        self._repos = {
            name: TableRepository(spec, db_path) for name, spec in TABLE_SPECS.items()
        }

    async def _require_user(self) -> User:
        user = await self.auth.get_current_user()
        if user is None:
            raise NotAuthenticated()
        return user

    def _repo(self, table: str) -> TableRepository:
        try:
            return self._repos[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}") from None

    # Generic operations

    @_backend_errors
    async def save(self, table: str, records: list) -> list[str]:
        """Attach the user id to every record and bulk upsert them."""
        repo = self._repo(table)
        user = await self._require_user()
        rows = [r.to_dict() if hasattr(r, "to_dict") else dict(r) for r in records]
        if table == "profiles":
            # A profile is keyed by its owner
            for row in rows:
                row["id"] = user.id
        return await repo.upsert_many(user.id, rows)

    @_backend_errors
    async def get(self, table: str) -> list:
        """All records of ``table`` owned by the user, as models."""
        repo = self._repo(table)
        user = await self._require_user()
        model = COLLECTIONS_BY_TABLE[table].model
        return [model.from_dict(row) for row in await repo.list_for_user(user.id)]

    @_backend_errors
    async def _find(self, table: str, **criteria: Any):
        repo = self._repo(table)
        user = await self._require_user()
        row = await repo.find(user.id, **criteria)
        if row is None:
            return None
        return COLLECTIONS_BY_TABLE[table].model.from_dict(row)

    @_backend_errors
    async def _delete(self, table: str, record_id: str) -> bool:
        repo = self._repo(table)
        user = await self._require_user()
        return await repo.delete(user.id, record_id) > 0

    @_backend_errors
    async def _update(self, table: str, record_id: str, **fields: Any) -> bool:
        repo = self._repo(table)
        user = await self._require_user()
        return await repo.update_fields(user.id, record_id, **fields) > 0

    # Profile

    async def get_profile(self) -> Profile | None:
        profiles = await self.get("profiles")
        return profiles[0] if profiles else None

    async def save_profile(self, profile: Profile) -> None:
        await self.save("profiles", [profile])

    # Body measurements

    async def get_body_measurements(self) -> list[BodyMeasurement]:
        return await self.get("body_measurements")

    async def save_body_measurements(self, records: list[BodyMeasurement]) -> None:
        await self.save("body_measurements", records)

    async def delete_body_measurement(self, record_id: str) -> bool:
        return await self._delete("body_measurements", record_id)

    # Circumference measurements

    async def get_measurements(self) -> list[Measurement]:
        return await self.get("measurements")

    async def save_measurements(self, records: list[Measurement]) -> None:
        await self.save("measurements", records)

    async def delete_measurement(self, record_id: str) -> bool:
        return await self._delete("measurements", record_id)

    # Strength records

    async def get_strength_records(self) -> list[StrengthRecord]:
        return await self.get("strength_records")

    async def save_strength_records(self, records: list[StrengthRecord]) -> None:
        await self.save("strength_records", records)

    async def delete_strength_record(self, record_id: str) -> bool:
        return await self._delete("strength_records", record_id)

    # Progress images

    async def get_progress_images(self) -> list[ProgressImage]:
        return await self.get("progress_images")

    async def save_progress_images(self, records: list[ProgressImage]) -> None:
        await self.save("progress_images", records)

    async def delete_progress_image(self, record_id: str) -> bool:
        return await self._delete("progress_images", record_id)

    async def toggle_image_favorite(self, record_id: str) -> bool | None:
        """Flip the favorite flag; returns the new value or None if missing."""
        image = await self._find("progress_images", id=record_id)
        if image is None:
            return None
        await self._update("progress_images", record_id, is_favorite=not image.is_favorite)
        return not image.is_favorite

    # Habits

    async def get_habits(self) -> list[Habit]:
        return await self.get("habits")

    async def save_habits(self, records: list[Habit]) -> None:
        await self.save("habits", records)

    async def delete_habit(self, record_id: str) -> bool:
        return await self._delete("habits", record_id)

    async def get_habit_completions(self) -> list[HabitCompletion]:
        return await self.get("habit_completions")

    async def save_habit_completions(self, records: list[HabitCompletion]) -> None:
        await self.save("habit_completions", records)

    async def toggle_habit_completion(self, habit_id: str, date: str, count: int = 1) -> bool:
        """Remove the day's completion if present, else record ``count``.

        Returns True when a completion now exists.
        """
        existing = await self._find("habit_completions", habit_id=habit_id, date=date)
        if existing is not None:
            await self._delete("habit_completions", existing.id)
            return False
        await self.save(
            "habit_completions", [HabitCompletion(habit_id=habit_id, date=date, count=count)]
        )
        return True

    # Nutrition

    async def get_nutrition_records(self) -> list[NutritionRecord]:
        return await self.get("nutrition_records")

    async def get_nutrition_record(self, date: str) -> NutritionRecord | None:
        return await self._find("nutrition_records", date=date)

    async def save_nutrition_records(self, records: list[NutritionRecord]) -> None:
        await self.save("nutrition_records", records)

    # Supplements

    async def get_supplements(self) -> list[Supplement]:
        return await self.get("supplements")

    async def save_supplements(self, records: list[Supplement]) -> None:
        await self.save("supplements", records)

    async def delete_supplement(self, record_id: str) -> bool:
        return await self._delete("supplements", record_id)

    async def get_supplement_completions(self) -> list[SupplementCompletion]:
        return await self.get("supplement_completions")

    async def save_supplement_completions(self, records: list[SupplementCompletion]) -> None:
        await self.save("supplement_completions", records)

    async def toggle_supplement_completion(self, supplement_id: str, date: str) -> bool:
        """Flip ``taken`` for the day, inserting ``taken=True`` if absent.

        Returns the resulting ``taken`` value.
        """
        existing = await self._find(
            "supplement_completions", supplement_id=supplement_id, date=date
        )
        if existing is None:
            await self.save(
                "supplement_completions",
                [SupplementCompletion(supplement_id=supplement_id, date=date, taken=True)],
            )
            return True
        await self._update("supplement_completions", existing.id, taken=not existing.taken)
        return not existing.taken

    # Workout plans

    async def get_workout_plans(self) -> list[WorkoutPlan]:
        return await self.get("workout_plans")

    async def save_workout_plans(self, records: list[WorkoutPlan]) -> None:
        await self.save("workout_plans", records)
