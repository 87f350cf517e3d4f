"""Tracking operations routed to the remote or local store.

While a user is signed in, records go to the remote store; otherwise they
are upserted into the local namespaces. A failed remote read falls back to
whatever is stored locally.
"""

import logging
from uuid import uuid4

from ..errors import BackendError
from ..events import BodyMetric, EventBus, MetricUpdated
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
    default_habits,
    habit_streak,
)
from ..models.common import parse_date, today_iso
from ..state import BodyMetricsState
from ..storage import namespaces as ns
from ..storage.local import LocalStore
from ..storage.mapping import model_from_local, model_to_local
from ..storage.namespaces import Collection
from ..storage.remote import RemoteStore
from .auth import AuthProvider

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = {
    BodyMetric.HEIGHT: "height",
    BodyMetric.WEIGHT: "weight",
    BodyMetric.BODY_FAT: "body_fat",
}


class TrackerService:
    """Reads and writes tracking data for the current auth state."""

    def __init__(
        self,
        local: LocalStore,
        remote: RemoteStore,
        auth: AuthProvider,
        bus: EventBus | None = None,
        state: BodyMetricsState | None = None,
        nutrition_targets: dict[str, float] | None = None,
    ):
        self.local = local
        self.remote = remote
        self.auth = auth
        self.bus = bus or EventBus()
        self.state = state or BodyMetricsState()
        self.unbind_state = self.state.bind(self.bus)
        self.nutrition_targets = nutrition_targets or {}

    async def is_signed_in(self) -> bool:
        return await self.auth.get_current_user() is not None

    # Generic routing

    def _local_sort_key(self, collection: Collection):
        if collection is ns.IMAGES:
            return lambda r: (r.get("date") or "", r.get("time") or "")
        if collection.sort_field:
            field = collection.sort_field
            return lambda r: r.get(field) or ""
        return None

    def _save_local(self, collection: Collection, record) -> None:
        if collection.singleton:
            self.local.write_object(
                collection.namespace, model_to_local(collection.namespace, record)
            )
            return
        if record.id is None:
            record.id = str(uuid4())
        local_record = model_to_local(collection.namespace, record)
        self.local.upsert_by_key(
            collection.namespace,
            local_record,
            key_fn=lambda r: tuple(r.get(k) for k in collection.local_key),
            sort_key=self._local_sort_key(collection),
        )

    def _list_local(self, collection: Collection) -> list:
        records = [
            model_from_local(collection.namespace, r, collection.model)
            for r in self.local.read(collection.namespace)
        ]
        if collection is ns.IMAGES:
            records.sort(key=lambda r: (r.date, r.time), reverse=True)
        elif collection.sort_field:
            records.sort(key=lambda r: getattr(r, collection.sort_field) or "", reverse=True)
        return records

    async def _save(self, collection: Collection, record) -> None:
        if await self.is_signed_in():
            await self.remote.save(collection.table, [record])
        else:
            self._save_local(collection, record)

    async def _list(self, collection: Collection) -> list:
        if await self.is_signed_in():
            try:
                return await self.remote.get(collection.table)
            except BackendError as e:
                logger.warning(
                    "Remote read of %s failed, using local data: %s", collection.table, e
                )
        return self._list_local(collection)

    def _delete_local(self, collection: Collection, record_id: str) -> bool:
        return self.local.remove(collection.namespace, lambda r: r.get("id") == record_id) > 0

    # Profile and body metrics

    async def get_profile(self) -> Profile:
        if await self.is_signed_in():
            try:
                return await self.remote.get_profile() or Profile()
            except BackendError as e:
                logger.warning("Remote profile read failed, using local data: %s", e)
        local = self.local.read_object(ns.Namespace.PROFILE)
        if not local:
            return Profile()
        return model_from_local(ns.Namespace.PROFILE, local, Profile)

    async def save_profile(self, profile: Profile) -> None:
        await self._save(ns.PROFILE, profile)
        self.state.initialize(
            height=profile.height, weight=profile.weight, body_fat=profile.body_fat
        )

    async def update_metric(
        self, metric: BodyMetric, value: float, on_date: str | None = None
    ) -> BodyMeasurement:
        """Record a new height, weight or body fat value.

        Updates the day's body measurement and the profile, then publishes
        MetricUpdated, which also updates the bound state.
        """
        metric = BodyMetric(metric)
        on_date = on_date or today_iso()
        field = _PROFILE_FIELDS[metric]

        measurement = next(
            (m for m in await self.list_body_measurements() if m.date == on_date), None
        ) or BodyMeasurement(date=on_date)
        setattr(measurement, field, value)
        await self.add_body_measurement(measurement)

        profile = await self.get_profile()
        setattr(profile, field, value)
        await self._save(ns.PROFILE, profile)

        self.bus.publish(MetricUpdated(metric=metric, value=value))
        return measurement

    # Body and circumference measurements

    async def add_body_measurement(self, measurement: BodyMeasurement) -> None:
        await self._save(ns.BODY_MEASUREMENTS, measurement)

    async def list_body_measurements(self) -> list[BodyMeasurement]:
        return await self._list(ns.BODY_MEASUREMENTS)

    async def add_measurement(self, measurement: Measurement) -> None:
        await self._save(ns.MEASUREMENTS, measurement)

    async def list_measurements(self) -> list[Measurement]:
        return await self._list(ns.MEASUREMENTS)

    # Strength

    async def add_strength_record(self, record: StrengthRecord) -> None:
        await self._save(ns.STRENGTH, record)

    async def list_strength_records(self) -> list[StrengthRecord]:
        return await self._list(ns.STRENGTH)

    # Nutrition

    async def get_nutrition(self, on_date: str | None = None) -> NutritionRecord:
        """The day's record, or an empty one with the default targets."""
        on_date = on_date or today_iso()
        for record in await self._list(ns.NUTRITION):
            if record.date == on_date:
                return record
        return NutritionRecord(date=on_date, **self.nutrition_targets)

    async def add_nutrition(
        self,
        calories: float = 0,
        protein: float = 0,
        water: float = 0,
        on_date: str | None = None,
    ) -> NutritionRecord:
        record = await self.get_nutrition(on_date)
        record.add(calories=calories, protein=protein, water=water)
        await self._save(ns.NUTRITION, record)
        return record

    # Habits

    async def save_habit(self, habit: Habit) -> None:
        await self._save(ns.HABITS, habit)

    async def list_habits(self) -> list[Habit]:
        return await self._list(ns.HABITS)

    async def delete_habit(self, habit_id: str) -> bool:
        if await self.is_signed_in():
            return await self.remote.delete_habit(habit_id)
        return self._delete_local(ns.HABITS, habit_id)

    async def seed_default_habits(self) -> int:
        """Store the default habits locally unless habits were stored before.

        Does nothing while signed in. Returns how many habits were added.
        """
        if await self.is_signed_in() or self.local.has(ns.Namespace.HABITS):
            return 0
        habits = default_habits()
        self.local.write(
            ns.Namespace.HABITS, [model_to_local(ns.Namespace.HABITS, h) for h in habits]
        )
        return len(habits)

    async def list_habit_completions(self) -> list[HabitCompletion]:
        return await self._list(ns.HABIT_COMPLETIONS)

    async def record_habit(
        self, habit_id: str, count: int = 1, on_date: str | None = None
    ) -> HabitCompletion:
        """Set the completion count of a habit for a day (upsert)."""
        completion = HabitCompletion(habit_id=habit_id, date=on_date or today_iso(), count=count)
        await self._save(ns.HABIT_COMPLETIONS, completion)
        return completion

    async def habit_status(
        self, on_date: str | None = None
    ) -> list[tuple[Habit, int, bool, int]]:
        """(habit, count, done, streak) for each habit on a day."""
        on_date = on_date or today_iso()
        habits = await self.list_habits()
        completions = await self.list_habit_completions()
        today = parse_date(on_date)

        status = []
        for habit in habits:
            day = next(
                (c for c in completions if c.habit_id == habit.id and c.date == on_date), None
            )
            count = day.count if day else 0
            done = day.is_done_for(habit) if day else False
            status.append((habit, count, done, habit_streak(habit, completions, today)))
        return status

    # Supplements

    async def save_supplement(self, supplement: Supplement) -> None:
        await self._save(ns.SUPPLEMENTS, supplement)

    async def list_supplements(self) -> list[Supplement]:
        return await self._list(ns.SUPPLEMENTS)

    async def list_supplement_completions(self) -> list[SupplementCompletion]:
        return await self._list(ns.SUPPLEMENT_COMPLETIONS)

    async def toggle_supplement(self, supplement_id: str, on_date: str | None = None) -> bool:
        """Flip whether a supplement was taken; returns the new value."""
        on_date = on_date or today_iso()
        if await self.is_signed_in():
            return await self.remote.toggle_supplement_completion(supplement_id, on_date)

        existing = next(
            (
                c
                for c in self._list_local(ns.SUPPLEMENT_COMPLETIONS)
                if c.supplement_id == supplement_id and c.date == on_date
            ),
            None,
        )
        completion = existing or SupplementCompletion(
            supplement_id=supplement_id, date=on_date, taken=False
        )
        completion.taken = not completion.taken
        self._save_local(ns.SUPPLEMENT_COMPLETIONS, completion)
        return completion.taken

    # Progress images

    async def add_image(self, image: ProgressImage) -> None:
        await self._save(ns.IMAGES, image)

    async def list_images(self, favorites_only: bool = False) -> list[ProgressImage]:
        images = await self._list(ns.IMAGES)
        if favorites_only:
            images = [i for i in images if i.is_favorite]
        return images

    async def toggle_image_favorite(self, image_id: str) -> bool | None:
        if await self.is_signed_in():
            return await self.remote.toggle_image_favorite(image_id)

        image = next((i for i in self._list_local(ns.IMAGES) if i.id == image_id), None)
        if image is None:
            return None
        image.is_favorite = not image.is_favorite
        self._save_local(ns.IMAGES, image)
        return image.is_favorite

    async def delete_image(self, image_id: str) -> bool:
        if await self.is_signed_in():
            return await self.remote.delete_progress_image(image_id)
        return self._delete_local(ns.IMAGES, image_id)

    # Workout plans

    async def save_workout_plan(self, plan: WorkoutPlan) -> None:
        await self._save(ns.WORKOUT_PLANS, plan)

    async def list_workout_plans(self) -> list[WorkoutPlan]:
        return await self._list(ns.WORKOUT_PLANS)
