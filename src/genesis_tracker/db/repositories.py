"""Data access layer for genesis-tracker.

Repositories work on plain row dictionaries; RemoteStore converts them to
and from record models.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

import aiosqlite

from .engine import get_db_path


@dataclass(frozen=True)
class TableSpec:
    """Column layout of one user-owned table.

    ``columns`` excludes the shared ``id``, ``user_id`` and ``created_at``
    columns. ``natural_key`` columns identify a row per user in addition to
    its id, so an upsert without an id replaces the row with the same key.
    """

    name: str
    columns: tuple[str, ...]
    natural_key: tuple[str, ...] = ()
    json_columns: tuple[str, ...] = ()
    bool_columns: tuple[str, ...] = ()
    order_by: str = "created_at, rowid"
    has_updated_at: bool = False


TABLE_SPECS: dict[str, TableSpec] = {
    spec.name: spec
    for spec in (
        TableSpec(
            "profiles",
            ("name", "age", "height", "weight", "body_fat", "calories", "protein",
             "sleep", "training_days"),
            has_updated_at=True,
        ),
        TableSpec(
            "body_measurements",
            ("date", "weight", "height", "body_fat", "muscle_mass", "chest", "waist",
             "arms", "thighs", "shoulders", "notes"),
            natural_key=("date",),
            order_by="date DESC",
        ),
        TableSpec(
            "measurements",
            ("date", "chest", "waist", "hips", "arm", "thigh", "neck", "shoulders",
             "forearm"),
            natural_key=("date",),
            order_by="date DESC",
        ),
        TableSpec(
            "strength_records",
            ("date", "exercise", "sets", "reps", "weight", "notes"),
            order_by="date DESC, created_at DESC, rowid DESC",
        ),
        TableSpec(
            "progress_images",
            ("date", "time", "image_url", "notes", "is_favorite", "tags"),
            json_columns=("tags",),
            bool_columns=("is_favorite",),
            order_by="date DESC, time DESC",
        ),
        TableSpec("habits", ("name", "description", "icon", "target")),
        TableSpec(
            "habit_completions",
            ("habit_id", "date", "count"),
            natural_key=("habit_id", "date"),
            order_by="date DESC",
        ),
        TableSpec(
            "nutrition_records",
            ("date", "calories", "protein", "water", "target_calories",
             "target_protein", "target_water"),
            natural_key=("date",),
            order_by="date DESC",
        ),
        TableSpec(
            "supplements",
            ("name", "dosage", "timing", "category", "icon", "color"),
        ),
        TableSpec(
            "supplement_completions",
            ("supplement_id", "date", "taken"),
            natural_key=("supplement_id", "date"),
            bool_columns=("taken",),
            order_by="date DESC",
        ),
        TableSpec(
            "workout_plans",
            ("split_name", "days", "nutrition", "supplements"),
            json_columns=("days", "nutrition", "supplements"),
            has_updated_at=True,
        ),
    )
}


class TableRepository:
    """User-scoped CRUD for one table described by a TableSpec."""

    def __init__(self, spec: TableSpec, db_path: Path | None = None):
        self.spec = spec
        self.db_path = db_path or get_db_path()

    def _encode(self, row: dict) -> dict:
        """Keep known columns and convert them to SQLite values."""
        values = {}
        for col in self.spec.columns:
            if col not in row:
                continue
            value = row[col]
            if col in self.spec.json_columns and value is not None:
                value = json.dumps(value)
            elif col in self.spec.bool_columns and value is not None:
                value = int(bool(value))
            values[col] = value
        return values

    def _decode(self, row: aiosqlite.Row) -> dict:
        """Convert a database row back to a plain dictionary."""
        data = {key: row[key] for key in row.keys()}
        for col in self.spec.json_columns:
            if data.get(col) is not None:
                data[col] = json.loads(data[col])
        for col in self.spec.bool_columns:
            if data.get(col) is not None:
                data[col] = bool(data[col])
        return data

    async def _find(
        self, db: aiosqlite.Connection, user_id: str, criteria: dict[str, Any]
    ) -> aiosqlite.Row | None:
        where = " AND ".join(f"{col} = ?" for col in criteria)
        cursor = await db.execute(
            f"SELECT * FROM {self.spec.name} WHERE user_id = ? AND {where}",
            (user_id, *criteria.values()),
        )
        return await cursor.fetchone()

    async def upsert_many(self, user_id: str, rows: list[dict]) -> list[str]:
        """Insert or replace rows for a user in one transaction.

        A row replaces the existing row with the same natural key, or else
        the one with the same id. Returns the stored ids.
        """
        ids = []
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            for row in rows:
                values = self._encode(row)
                existing = None
                key = self.spec.natural_key
                if key and all(values.get(col) is not None for col in key):
                    existing = await self._find(db, user_id, {col: values[col] for col in key})
                if existing is None and row.get("id"):
                    existing = await self._find(db, user_id, {"id": row["id"]})

                record_id = existing["id"] if existing else (row.get("id") or str(uuid4()))
                values["id"] = record_id
                values["user_id"] = user_id
                if existing is not None:
                    values["created_at"] = existing["created_at"]
                if self.spec.has_updated_at:
                    values["updated_at"] = datetime.now().isoformat(timespec="seconds")

                columns = ", ".join(values)
                placeholders = ", ".join("?" for _ in values)
                await db.execute(
                    f"INSERT OR REPLACE INTO {self.spec.name} ({columns}) VALUES ({placeholders})",
                    tuple(values.values()),
                )
                ids.append(record_id)
            await db.commit()
        return ids

    async def list_for_user(self, user_id: str) -> list[dict]:
        """All rows owned by a user, in the table's default order."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"SELECT * FROM {self.spec.name} WHERE user_id = ? ORDER BY {self.spec.order_by}",
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._decode(row) for row in rows]

    async def find(self, user_id: str, **criteria: Any) -> dict | None:
        """First row owned by a user matching all column criteria."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            row = await self._find(db, user_id, criteria)
            return self._decode(row) if row is not None else None

    async def update_fields(self, user_id: str, record_id: str, **fields: Any) -> int:
        """Update some columns of one row; returns the affected row count."""
        values = self._encode(fields)
        if not values:
            return 0
        assignments = ", ".join(f"{col} = ?" for col in values)
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"UPDATE {self.spec.name} SET {assignments} WHERE user_id = ? AND id = ?",
                (*values.values(), user_id, record_id),
            )
            await db.commit()
            return cursor.rowcount

    async def delete(self, user_id: str, record_id: str) -> int:
        """Delete one row; returns the affected row count."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"DELETE FROM {self.spec.name} WHERE user_id = ? AND id = ?",
                (user_id, record_id),
            )
            await db.commit()
            return cursor.rowcount


class UserRepository:
    """Repository for registered users."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, email: str, password_hash: str) -> str:
        """Create a user and return its id."""
        user_id = str(uuid4())
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "INSERT INTO users (id, email, password_hash) VALUES (?, ?, ?)",
                (user_id, email, password_hash),
            )
            await db.commit()
        return user_id

    async def get(self, user_id: str) -> dict | None:
        """Get a user by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            return dict(row) if row is not None else None

    async def get_by_email(self, email: str) -> dict | None:
        """Get a user by email address."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM users WHERE email = ?", (email,))
            row = await cursor.fetchone()
            return dict(row) if row is not None else None
