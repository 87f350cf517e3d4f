"""Record models for genesis-tracker."""

from .body import BodyMeasurement, Measurement
from .habits import Habit, HabitCompletion, default_habits, habit_streak
from .images import ProgressImage
from .nutrition import NutritionRecord
from .profile import Profile
from .strength import StrengthRecord
from .supplements import Supplement, SupplementCompletion
from .workout import WorkoutDay, WorkoutPlan

__all__ = [
    "BodyMeasurement",
    "Habit",
    "HabitCompletion",
    "default_habits",
    "habit_streak",
    "Measurement",
    "NutritionRecord",
    "Profile",
    "ProgressImage",
    "StrengthRecord",
    "Supplement",
    "SupplementCompletion",
    "WorkoutDay",
    "WorkoutPlan",
]
