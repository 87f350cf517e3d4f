"""Field mapping between local (camelCase) and remote (snake_case) records.

Local records are what LocalStore persists; remote records are the row
dictionaries produced by ``Model.to_dict()`` and consumed by RemoteStore.
Only mapped fields cross the boundary in either direction.
"""

from dataclasses import dataclass

from .namespaces import Namespace


@dataclass(frozen=True)
class FieldMapping:
    """Ordered (local_name, remote_name) pairs for one namespace."""

    pairs: tuple[tuple[str, str], ...]

    def to_remote(self, record: dict) -> dict:
        """Translate a local record into a remote row dictionary."""
        return {remote: record[local] for local, remote in self.pairs if local in record}

    def to_local(self, record: dict) -> dict:
        """Translate a remote row dictionary into a local record."""
        return {local: record[remote] for local, remote in self.pairs if remote in record}

    @property
    def local_fields(self) -> tuple[str, ...]:
        return tuple(local for local, _ in self.pairs)


def _same(*names: str) -> tuple[tuple[str, str], ...]:
    return tuple((name, name) for name in names)


FIELD_MAPPINGS: dict[Namespace, FieldMapping] = {
    Namespace.PROFILE: FieldMapping(
        _same("name", "age", "height", "weight")
        + (("bodyFat", "body_fat"),)
        + _same("calories", "protein", "sleep")
        + (("trainingDays", "training_days"),)
    ),
    Namespace.BODY_MEASUREMENTS: FieldMapping(
        _same("id", "date", "weight", "height")
        + (("bodyFat", "body_fat"), ("muscleMass", "muscle_mass"))
        + _same("chest", "waist", "arms", "thighs", "shoulders", "notes")
    ),
    Namespace.MEASUREMENTS: FieldMapping(
        _same(
            "id", "date", "chest", "waist", "hips", "arm", "thigh", "neck",
            "shoulders", "forearm",
        )
    ),
    Namespace.STRENGTH: FieldMapping(
        _same("id", "date", "exercise", "sets", "reps", "weight", "notes")
    ),
    Namespace.IMAGES: FieldMapping(
        _same("id", "date", "time")
        + (("image", "image_url"),)
        + _same("notes")
        + (("isFavorite", "is_favorite"),)
        + _same("tags")
    ),
    Namespace.HABITS: FieldMapping(_same("id", "name", "description", "icon", "target")),
    Namespace.HABIT_COMPLETIONS: FieldMapping(
        _same("id") + (("habitId", "habit_id"),) + _same("date", "count")
    ),
    Namespace.NUTRITION: FieldMapping(
        _same("id", "date", "calories", "protein", "water")
        + (
            ("targetCalories", "target_calories"),
            ("targetProtein", "target_protein"),
            ("targetWater", "target_water"),
        )
    ),
    Namespace.SUPPLEMENTS: FieldMapping(
        _same("id", "name", "dosage", "timing", "category", "icon", "color")
    ),
    Namespace.SUPPLEMENT_COMPLETIONS: FieldMapping(
        _same("id") + (("supplementId", "supplement_id"),) + _same("date", "taken")
    ),
    Namespace.WORKOUT_PLANS: FieldMapping(
        _same("id")
        + (("splitName", "split_name"),)
        + _same("days", "nutrition", "supplements")
    ),
}


def to_remote(namespace: Namespace | str, record: dict) -> dict:
    """Map a local record of ``namespace`` to its remote shape."""
    return FIELD_MAPPINGS[Namespace(namespace)].to_remote(record)


def to_local(namespace: Namespace | str, record: dict) -> dict:
    """Map a remote record of ``namespace`` to its local shape."""
    return FIELD_MAPPINGS[Namespace(namespace)].to_local(record)


def model_to_local(namespace: Namespace | str, model) -> dict:
    """Serialize a record model into a local record, dropping unset ids."""
    local = to_local(namespace, model.to_dict())
    if local.get("id") is None:
        local.pop("id", None)
    return local


def model_from_local(namespace: Namespace | str, record: dict, model_cls: type):
    """Build a record model from a local record."""
    return model_cls.from_dict(to_remote(namespace, record))
