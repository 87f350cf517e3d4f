"""Helpers shared by the record models."""

from datetime import date, datetime
from typing import Any


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a stored timestamp (ISO string or datetime)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def parse_date(value: str | date) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date, ignoring any time component."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def today_iso() -> str:
    return date.today().isoformat()


def latest_points(records: list, field: str, limit: int = 7) -> list[tuple[str, float]]:
    """Return the last ``limit`` (date, value) points in ascending date order.

    Records without a value for ``field`` are skipped.
    """
    points = [
        (record.date, getattr(record, field))
        for record in records
        if getattr(record, field, None) is not None
    ]
    points.sort(key=lambda p: p[0])
    return points[-limit:] if limit > 0 else []
