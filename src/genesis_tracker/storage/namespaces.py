"""Local namespaces and the remote tables they correspond to."""

from dataclasses import dataclass
from enum import Enum

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


class Namespace(str, Enum):
    """Fixed LocalStore keys."""

    PROFILE = "personalData"
    BODY_MEASUREMENTS = "bodyMeasurements"
    MEASUREMENTS = "measurements"
    STRENGTH = "strengthData"
    IMAGES = "progressImages"
    HABITS = "habits"
    HABIT_COMPLETIONS = "habitCompletions"
    NUTRITION = "nutritionData"
    SUPPLEMENTS = "supplements"
    SUPPLEMENT_COMPLETIONS = "supplementCompletions"
    WORKOUT_PLANS = "workoutData"

    # Not migrated
    SESSION = "session"
    BODY_METRICS = "body-metrics-storage"


@dataclass(frozen=True)
class Collection:
    """Binds a local namespace to its remote table and record model.

    ``local_key`` names the (camelCase) fields that identify a record inside
    the namespace; ``sort_field`` orders the stored list.
    """

    namespace: Namespace
    table: str
    model: type
    local_key: tuple[str, ...] = ("id",)
    sort_field: str | None = "date"
    singleton: bool = False


PROFILE = Collection(
    Namespace.PROFILE, "profiles", Profile, local_key=(), sort_field=None, singleton=True
)
BODY_MEASUREMENTS = Collection(
    Namespace.BODY_MEASUREMENTS, "body_measurements", BodyMeasurement, local_key=("date",)
)
MEASUREMENTS = Collection(
    Namespace.MEASUREMENTS, "measurements", Measurement, local_key=("date",)
)
STRENGTH = Collection(Namespace.STRENGTH, "strength_records", StrengthRecord)
IMAGES = Collection(Namespace.IMAGES, "progress_images", ProgressImage)
HABITS = Collection(Namespace.HABITS, "habits", Habit, sort_field=None)
HABIT_COMPLETIONS = Collection(
    Namespace.HABIT_COMPLETIONS,
    "habit_completions",
    HabitCompletion,
    local_key=("habitId", "date"),
)
NUTRITION = Collection(
    Namespace.NUTRITION, "nutrition_records", NutritionRecord, local_key=("date",)
)
SUPPLEMENTS = Collection(Namespace.SUPPLEMENTS, "supplements", Supplement, sort_field=None)
SUPPLEMENT_COMPLETIONS = Collection(
    Namespace.SUPPLEMENT_COMPLETIONS,
    "supplement_completions",
    SupplementCompletion,
    local_key=("supplementId", "date"),
)
WORKOUT_PLANS = Collection(
    Namespace.WORKOUT_PLANS, "workout_plans", WorkoutPlan, sort_field=None
)

# Migration order; definitions precede the completions that reference them
MIGRATED_COLLECTIONS: tuple[Collection, ...] = (
    PROFILE,
    BODY_MEASUREMENTS,
    MEASUREMENTS,
    STRENGTH,
    IMAGES,
    HABITS,
    HABIT_COMPLETIONS,
    NUTRITION,
    SUPPLEMENTS,
    SUPPLEMENT_COMPLETIONS,
    WORKOUT_PLANS,
)

MIGRATED_NAMESPACES: tuple[Namespace, ...] = tuple(c.namespace for c in MIGRATED_COLLECTIONS)

COLLECTIONS_BY_TABLE: dict[str, Collection] = {c.table: c for c in MIGRATED_COLLECTIONS}
COLLECTIONS_BY_NAMESPACE: dict[Namespace, Collection] = {
    c.namespace: c for c in MIGRATED_COLLECTIONS
}
