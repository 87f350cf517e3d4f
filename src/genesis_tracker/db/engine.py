"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.database_name


# Every user-owned table shares the (user_id, id) primary key and a created_at
# column; natural keys are enforced with UNIQUE constraints.
_TABLES = {
    "users": """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """,
    "profiles": """
        CREATE TABLE IF NOT EXISTS profiles (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            name TEXT,
            age INTEGER,
            height REAL,
            weight REAL,
            body_fat REAL,
            calories REAL,
            protein REAL,
            sleep REAL,
            training_days INTEGER,
            updated_at TIMESTAMP,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id)
        )
    """,
    "body_measurements": """
        CREATE TABLE IF NOT EXISTS body_measurements (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            date TEXT NOT NULL,
            weight REAL,
            height REAL,
            body_fat REAL,
            muscle_mass REAL,
            chest REAL,
            waist REAL,
            arms REAL,
            thighs REAL,
            shoulders REAL,
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id),
            UNIQUE (user_id, date)
        )
    """,
    "measurements": """
        CREATE TABLE IF NOT EXISTS measurements (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            date TEXT NOT NULL,
            chest REAL,
            waist REAL,
            hips REAL,
            arm REAL,
            thigh REAL,
            neck REAL,
            shoulders REAL,
            forearm REAL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id),
            UNIQUE (user_id, date)
        )
    """,
    "strength_records": """
        CREATE TABLE IF NOT EXISTS strength_records (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            date TEXT NOT NULL,
            exercise TEXT NOT NULL,
            sets INTEGER NOT NULL,
            reps INTEGER NOT NULL,
            weight REAL NOT NULL,
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id)
        )
    """,
    "progress_images": """
        CREATE TABLE IF NOT EXISTS progress_images (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            date TEXT NOT NULL,
            time TEXT NOT NULL,
            image_url TEXT NOT NULL,
            notes TEXT,
            is_favorite INTEGER DEFAULT 0,
            tags TEXT DEFAULT '[]',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id)
        )
    """,
    "habits": """
        CREATE TABLE IF NOT EXISTS habits (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            name TEXT NOT NULL,
            description TEXT,
            icon TEXT NOT NULL,
            target INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id)
        )
    """,
    "habit_completions": """
        CREATE TABLE IF NOT EXISTS habit_completions (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            habit_id TEXT NOT NULL,
            date TEXT NOT NULL,
            count INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id),
            UNIQUE (user_id, habit_id, date)
        )
    """,
    "nutrition_records": """
        CREATE TABLE IF NOT EXISTS nutrition_records (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            date TEXT NOT NULL,
            calories REAL,
            protein REAL,
            water REAL,
            target_calories REAL,
            target_protein REAL,
            target_water REAL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id),
            UNIQUE (user_id, date)
        )
    """,
    "supplements": """
        CREATE TABLE IF NOT EXISTS supplements (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            name TEXT NOT NULL,
            dosage TEXT NOT NULL,
            timing TEXT NOT NULL,
            category TEXT NOT NULL,
            icon TEXT NOT NULL,
            color TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id)
        )
    """,
    "supplement_completions": """
        CREATE TABLE IF NOT EXISTS supplement_completions (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            supplement_id TEXT NOT NULL,
            date TEXT NOT NULL,
            taken INTEGER,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id),
            UNIQUE (user_id, supplement_id, date)
        )
    """,
    "workout_plans": """
        CREATE TABLE IF NOT EXISTS workout_plans (
            id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            split_name TEXT NOT NULL,
            days TEXT NOT NULL DEFAULT '[]',
            nutrition TEXT NOT NULL DEFAULT '{}',
            supplements TEXT DEFAULT '[]',
            updated_at TIMESTAMP,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, id)
        )
    """,
}

_INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_body_measurements_user_date ON body_measurements(user_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_strength_records_user_date ON strength_records(user_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_progress_images_user_date ON progress_images(user_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_nutrition_records_user_date ON nutrition_records(user_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_habit_completions_habit ON habit_completions(user_id, habit_id)",
    "CREATE INDEX IF NOT EXISTS idx_supplement_completions_supplement "
    "ON supplement_completions(user_id, supplement_id)",
)


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        for ddl in _TABLES.values():
            await db.execute(ddl)
        for ddl in _INDEXES:
            await db.execute(ddl)
        await db.commit()

    logger.info("Database schema ready at %s", db_path)
