"""Tests for RemoteStore."""

import pytest

from genesis_tracker.errors import BackendError, NotAuthenticated
from genesis_tracker.models import (
    BodyMeasurement,
    Habit,
    HabitCompletion,
    NutritionRecord,
    Profile,
    ProgressImage,
    StrengthRecord,
    WorkoutDay,
    WorkoutPlan,
)
from genesis_tracker.services.auth import User
from genesis_tracker.storage.remote import RemoteStore

class TestAuthentication:
    """Tests for user scoping."""

    @pytest.mark.asyncio
    async def test_requires_user(self, db_path, signed_out):
        store = RemoteStore(signed_out, db_path)

        with pytest.raises(NotAuthenticated, match="User not authenticated"):
            await store.get_habits()
        with pytest.raises(NotAuthenticated):
            await store.save_habits([Habit(name="Read")])

    @pytest.mark.asyncio
    async def test_records_are_scoped_per_user(self, db_path, remote_store, static_auth):
        """Test another user never sees the signed-in user's rows."""
        await remote_store.save_habits([Habit(name="Read", id="h1")])

        other = RemoteStore(static_auth(User(id="user-2", email="b@example.com")), db_path)
        await other.save_habits([Habit(name="Walk", id="h1")])

        assert [h.name for h in await remote_store.get_habits()] == ["Read"]
        assert [h.name for h in await other.get_habits()] == ["Walk"]

    @pytest.mark.asyncio
    async def test_user_id_attached(self, remote_store, user):
        await remote_store.save_strength_records(
            [StrengthRecord("2024-03-01", "Squat", 3, 5, 100)]
        )
        records = await remote_store.get_strength_records()

        assert records[0].user_id == user.id
        assert records[0].id is not None
        assert records[0].created_at is not None

    @pytest.mark.asyncio
    async def test_unknown_table(self, remote_store):
        with pytest.raises(ValueError, match="Unknown table"):
            await remote_store.get("workouts")


class TestUpsert:
    """Tests for upsert semantics."""

    @pytest.mark.asyncio
    async def test_same_date_replaces(self, remote_store):
        """Test saving the same date twice keeps one row with the latest value."""
        await remote_store.save_body_measurements([BodyMeasurement(date="2024-03-01", weight=80)])
        await remote_store.save_body_measurements([BodyMeasurement(date="2024-03-01", weight=81)])

        records = await remote_store.get_body_measurements()
        assert len(records) == 1
        assert records[0].weight == 81

    @pytest.mark.asyncio
    async def test_same_id_replaces(self, remote_store):
        await remote_store.save_habits([Habit(name="Read", id="h1")])
        await remote_store.save_habits([Habit(name="Read more", id="h1", target=2)])

        habits = await remote_store.get_habits()
        assert len(habits) == 1
        assert habits[0].name == "Read more"
        assert habits[0].target == 2

    @pytest.mark.asyncio
    async def test_completion_keyed_by_habit_and_date(self, remote_store):
        await remote_store.save_habit_completions(
            [HabitCompletion(habit_id="h1", date="2024-03-01", count=1)]
        )
        await remote_store.save_habit_completions(
            [
                HabitCompletion(habit_id="h1", date="2024-03-01", count=3),
                HabitCompletion(habit_id="h2", date="2024-03-01"),
            ]
        )

        completions = await remote_store.get_habit_completions()
        counts = {c.habit_id: c.count for c in completions}
        assert counts == {"h1": 3, "h2": 1}

    @pytest.mark.asyncio
    async def test_profile_is_singleton(self, remote_store, user):
        await remote_store.save_profile(Profile(name="Sam", weight=80))
        await remote_store.save_profile(Profile(name="Sam", weight=82))

        profile = await remote_store.get_profile()
        assert profile.id == user.id
        assert profile.weight == 82
        assert profile.updated_at is not None
        assert len(await remote_store.get("profiles")) == 1

    @pytest.mark.asyncio
    async def test_json_columns(self, remote_store):
        plan = WorkoutPlan(
            split_name="Upper/Lower",
            days=[WorkoutDay(day="Monday", focus="Upper", exercises=["Bench"])],
            nutrition={"calories": 3000},
            supplements=["s1"],
        )
        await remote_store.save_workout_plans([plan])

        stored = (await remote_store.get_workout_plans())[0]
        assert stored.days[0].exercises == ["Bench"]
        assert stored.nutrition == {"calories": 3000}
        assert stored.supplements == ["s1"]


class TestOrdering:
    """Tests for default ordering."""

    @pytest.mark.asyncio
    async def test_dated_records_newest_first(self, remote_store):
        await remote_store.save_nutrition_records(
            [NutritionRecord(date=d) for d in ("2024-03-02", "2024-03-03", "2024-03-01")]
        )

        dates = [r.date for r in await remote_store.get_nutrition_records()]
        assert dates == ["2024-03-03", "2024-03-02", "2024-03-01"]

    @pytest.mark.asyncio
    async def test_images_by_date_and_time(self, remote_store):
        await remote_store.save_progress_images(
            [
                ProgressImage(date="2024-03-01", time="08:00", image_url="a"),
                ProgressImage(date="2024-03-01", time="19:00", image_url="b"),
                ProgressImage(date="2024-02-28", time="23:00", image_url="c"),
            ]
        )

        urls = [i.image_url for i in await remote_store.get_progress_images()]
        assert urls == ["b", "a", "c"]

    @pytest.mark.asyncio
    async def test_habits_in_creation_order(self, remote_store):
        await remote_store.save_habits([Habit(name="First"), Habit(name="Second")])

        assert [h.name for h in await remote_store.get_habits()] == ["First", "Second"]


class TestToggles:
    """Tests for toggle and delete operations."""

    @pytest.mark.asyncio
    async def test_toggle_habit_completion(self, remote_store):
        assert await remote_store.toggle_habit_completion("h1", "2024-03-01") is True
        assert len(await remote_store.get_habit_completions()) == 1

        assert await remote_store.toggle_habit_completion("h1", "2024-03-01") is False
        assert await remote_store.get_habit_completions() == []

    @pytest.mark.asyncio
    async def test_toggle_supplement_completion(self, remote_store):
        assert await remote_store.toggle_supplement_completion("s1", "2024-03-01") is True
        assert await remote_store.toggle_supplement_completion("s1", "2024-03-01") is False

        completions = await remote_store.get_supplement_completions()
        assert len(completions) == 1
        assert completions[0].taken is False

    @pytest.mark.asyncio
    async def test_toggle_image_favorite(self, remote_store):
        await remote_store.save_progress_images(
            [ProgressImage(date="2024-03-01", time="08:00", image_url="a", id="i1")]
        )

        assert await remote_store.toggle_image_favorite("i1") is True
        assert (await remote_store.get_progress_images())[0].is_favorite
        assert await remote_store.toggle_image_favorite("missing") is None

    @pytest.mark.asyncio
    async def test_delete(self, remote_store):
        await remote_store.save_habits([Habit(name="Read", id="h1")])

        assert await remote_store.delete_habit("h1") is True
        assert await remote_store.delete_habit("h1") is False

    @pytest.mark.asyncio
    async def test_get_nutrition_record(self, remote_store):
        await remote_store.save_nutrition_records([NutritionRecord(date="2024-03-01", calories=500)])

        assert (await remote_store.get_nutrition_record("2024-03-01")).calories == 500
        assert await remote_store.get_nutrition_record("2024-03-02") is None


class TestBackendErrors:
    """Tests for database failures."""

    @pytest.mark.asyncio
    async def test_missing_schema_raises_backend_error(self, temp_db_path, signed_in):
        """Test an uninitialized database surfaces as BackendError."""
        store = RemoteStore(signed_in, temp_db_path)

        with pytest.raises(BackendError):
            await store.get_habits()
