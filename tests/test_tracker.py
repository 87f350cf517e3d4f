"""Tests for TrackerService routing between local and remote storage."""

import pytest

from genesis_tracker.events import BodyMetric, EventBus, MetricUpdated
from genesis_tracker.models import BodyMeasurement, Habit, Profile, ProgressImage, StrengthRecord, Supplement
from genesis_tracker.services.tracker import TrackerService
from genesis_tracker.state import BodyMetricsState
from genesis_tracker.storage.namespaces import Namespace
from genesis_tracker.storage.remote import RemoteStore


@pytest.fixture
def offline(local_store, db_path, signed_out):
    """Tracker for a user who is not signed in."""
    return TrackerService(local_store, RemoteStore(signed_out, db_path), signed_out)


@pytest.fixture
def online(local_store, remote_store, signed_in):
    """Tracker for a signed-in user."""
    return TrackerService(local_store, remote_store, signed_in)


class TestLocalRouting:
    """Tests for signed-out storage."""

    @pytest.mark.asyncio
    async def test_body_measurement_upserts_by_date(self, offline, local_store):
        await offline.add_body_measurement(BodyMeasurement(date="2024-03-01", weight=80, body_fat=15))
        await offline.add_body_measurement(BodyMeasurement(date="2024-03-01", weight=81))

        stored = local_store.read(Namespace.BODY_MEASUREMENTS)
        assert len(stored) == 1
        assert stored[0]["weight"] == 81
        assert "id" in stored[0]

    @pytest.mark.asyncio
    async def test_local_records_use_local_field_names(self, offline, local_store):
        await offline.add_image(
            ProgressImage(date="2024-03-01", time="07:00", image_url="a", is_favorite=True)
        )

        stored = local_store.read(Namespace.IMAGES)[0]
        assert stored["image"] == "a"
        assert stored["isFavorite"] is True

    @pytest.mark.asyncio
    async def test_list_newest_first(self, offline):
        for day in ("2024-03-02", "2024-03-03", "2024-03-01"):
            await offline.add_strength_record(StrengthRecord(day, "Squat", 3, 5, 100))

        dates = [r.date for r in await offline.list_strength_records()]
        assert dates == ["2024-03-03", "2024-03-02", "2024-03-01"]

    @pytest.mark.asyncio
    async def test_profile_is_single_object(self, offline, local_store):
        await offline.save_profile(Profile(name="Sam", height=180, weight=80, body_fat=14))

        assert local_store.read_object(Namespace.PROFILE)["bodyFat"] == 14
        assert (await offline.get_profile()).name == "Sam"
        assert offline.state.height == 180

    @pytest.mark.asyncio
    async def test_delete_habit(self, offline):
        await offline.save_habit(Habit(name="Read"))
        habit = (await offline.list_habits())[0]

        assert await offline.delete_habit(habit.id) is True
        assert await offline.list_habits() == []

    @pytest.mark.asyncio
    async def test_seed_default_habits(self, offline):
        """Test a fresh store gets the default habits exactly once."""
        assert await offline.seed_default_habits() == 4
        assert await offline.seed_default_habits() == 0

        habits = {h.name: h.target for h in await offline.list_habits()}
        assert habits["Protein Shake"] == 2
        assert habits["Water (2L)"] == 4

    @pytest.mark.asyncio
    async def test_no_seed_over_existing_habits(self, offline):
        await offline.save_habit(Habit(name="Read"))

        assert await offline.seed_default_habits() == 0
        assert [h.name for h in await offline.list_habits()] == ["Read"]

    @pytest.mark.asyncio
    async def test_toggle_supplement(self, offline):
        await offline.save_supplement(Supplement(name="Creatine"))
        supplement = (await offline.list_supplements())[0]

        assert await offline.toggle_supplement(supplement.id, "2024-03-01") is True
        assert await offline.toggle_supplement(supplement.id, "2024-03-01") is False
        completions = await offline.list_supplement_completions()
        assert len(completions) == 1

    @pytest.mark.asyncio
    async def test_image_favorites(self, offline):
        await offline.add_image(ProgressImage(date="2024-03-01", time="07:00", image_url="a"))
        await offline.add_image(ProgressImage(date="2024-03-02", time="07:00", image_url="b"))
        first = (await offline.list_images())[-1]

        assert await offline.toggle_image_favorite(first.id) is True
        assert [i.image_url for i in await offline.list_images(favorites_only=True)] == ["a"]
        assert await offline.toggle_image_favorite("missing") is None
        assert await offline.delete_image(first.id) is True


class TestRemoteRouting:
    """Tests for signed-in storage."""

    @pytest.mark.asyncio
    async def test_writes_go_remote(self, online, remote_store, local_store):
        await online.add_body_measurement(BodyMeasurement(date="2024-03-01", weight=80))

        assert len(await remote_store.get_body_measurements()) == 1
        assert local_store.read(Namespace.BODY_MEASUREMENTS) == []

    @pytest.mark.asyncio
    async def test_no_seed_while_signed_in(self, online, local_store):
        assert await online.seed_default_habits() == 0
        assert not local_store.has(Namespace.HABITS)

    @pytest.mark.asyncio
    async def test_read_falls_back_to_local(self, local_store, temp_db_path, signed_in):
        """Test a failing remote read returns the local records instead."""
        local_store.write(Namespace.HABITS, [{"id": "h1", "name": "Read"}])
        tracker = TrackerService(local_store, RemoteStore(signed_in, temp_db_path), signed_in)

        habits = await tracker.list_habits()
        assert [h.name for h in habits] == ["Read"]

    @pytest.mark.asyncio
    async def test_record_habit_and_status(self, online):
        await online.save_habit(Habit(name="Water", target=2))
        habit = (await online.list_habits())[0]

        await online.record_habit(habit.id, 1, "2024-03-01")
        await online.record_habit(habit.id, 2, "2024-03-01")
        await online.record_habit(habit.id, 2, "2024-03-02")

        [(status_habit, count, done, streak)] = await online.habit_status("2024-03-02")
        assert status_habit.id == habit.id
        assert count == 2
        assert done
        assert streak == 2
        assert len(await online.list_habit_completions()) == 2


class TestNutrition:
    """Tests for nutrition totals."""

    @pytest.mark.asyncio
    async def test_default_targets_from_settings(self, local_store, db_path, signed_out):
        tracker = TrackerService(
            local_store,
            RemoteStore(signed_out, db_path),
            signed_out,
            nutrition_targets={"target_calories": 3000, "target_protein": 180, "target_water": 3000},
        )
        record = await tracker.get_nutrition("2024-03-01")

        assert record.calories == 0
        assert record.target_calories == 3000

    @pytest.mark.asyncio
    async def test_add_accumulates_per_day(self, online):
        await online.add_nutrition(calories=600, protein=40, on_date="2024-03-01")
        record = await online.add_nutrition(calories=400, water=500, on_date="2024-03-01")

        assert record.calories == 1000
        assert record.protein == 40
        assert len(await online.remote.get_nutrition_records()) == 1


class TestUpdateMetric:
    """Tests for body metric updates."""

    @pytest.mark.asyncio
    async def test_updates_measurement_profile_state_and_publishes(self, local_store, db_path, signed_out):
        bus = EventBus()
        events = []
        bus.subscribe(MetricUpdated, events.append)
        tracker = TrackerService(local_store, RemoteStore(signed_out, db_path), signed_out, bus=bus)

        await tracker.update_metric(BodyMetric.WEIGHT, 81.2, "2024-03-01")
        await tracker.update_metric(BodyMetric.BODY_FAT, 14.5, "2024-03-01")

        [measurement] = await tracker.list_body_measurements()
        assert measurement.weight == 81.2
        assert measurement.body_fat == 14.5
        profile = await tracker.get_profile()
        assert profile.weight == 81.2
        assert tracker.state.body_fat == 14.5
        assert [e.metric for e in events] == [BodyMetric.WEIGHT, BodyMetric.BODY_FAT]

    @pytest.mark.asyncio
    async def test_other_bound_states_follow_updates(self, offline):
        """Test any state bound to the tracker's bus sees metric updates."""
        dashboard = BodyMetricsState()
        unbind = dashboard.bind(offline.bus)

        await offline.update_metric(BodyMetric.HEIGHT, 182, "2024-03-01")
        unbind()
        await offline.update_metric(BodyMetric.HEIGHT, 183, "2024-03-02")

        assert dashboard.height == 182
        assert offline.state.height == 183
