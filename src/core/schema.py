"""SQLite schema for care records (code-first approach)."""

import logging

import aiosqlite

from src.core.config import settings
from src.core.db_client import get_connection


logger = logging.getLogger(__name__)


# Central list of all collections in the schema, in dependency order
COLLECTIONS = [
    "frequencies",
    "pets",
    "medications",
    "vaccines",
    "checks",
    "foods",
    "injuries",
    "medication_schedules",
    "vaccination_schedules",
    "checks_schedules",
    "pet_foods",
    "injury_reports",
]

_TABLES: dict[str, str] = {
    "frequencies": """
        CREATE TABLE IF NOT EXISTS frequencies (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL DEFAULT '',
            interval_days INTEGER NOT NULL CHECK (interval_days >= 1)
        )
    """,
    "pets": """
        CREATE TABLE IF NOT EXISTS pets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            nickname TEXT,
            pet_type TEXT NOT NULL,
            breed TEXT NOT NULL DEFAULT '',
            gender TEXT,
            birthday TEXT NOT NULL,
            date_admitted TEXT NOT NULL,
            picture TEXT,
            notes TEXT,
            adopted INTEGER NOT NULL DEFAULT 0
        )
    """,
    "medications": """
        CREATE TABLE IF NOT EXISTS medications (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            amount TEXT NOT NULL DEFAULT '',
            purpose TEXT,
            expiration_date TEXT
        )
    """,
    "vaccines": """
        CREATE TABLE IF NOT EXISTS vaccines (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            frequency_id INTEGER NOT NULL REFERENCES frequencies (id),
            mandatory INTEGER NOT NULL DEFAULT 0
        )
    """,
    "checks": """
        CREATE TABLE IF NOT EXISTS checks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            check_type TEXT NOT NULL,
            description TEXT,
            frequency_id INTEGER NOT NULL REFERENCES frequencies (id)
        )
    """,
    "foods": """
        CREATE TABLE IF NOT EXISTS foods (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            food_type TEXT NOT NULL DEFAULT '',
            amount TEXT NOT NULL DEFAULT '',
            notes TEXT
        )
    """,
    "injuries": """
        CREATE TABLE IF NOT EXISTS injuries (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            description TEXT NOT NULL,
            severity TEXT NOT NULL DEFAULT 'moderate'
        )
    """,
    "medication_schedules": """
        CREATE TABLE IF NOT EXISTS medication_schedules (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            pet_id INTEGER NOT NULL REFERENCES pets (id),
            medication_id INTEGER NOT NULL REFERENCES medications (id),
            frequency_id INTEGER NOT NULL REFERENCES frequencies (id),
            date_started TEXT NOT NULL,
            date_ended TEXT,
            notes TEXT,
            CHECK (date_ended IS NULL OR date_ended >= date_started)
        )
    """,
    "vaccination_schedules": """
        CREATE TABLE IF NOT EXISTS vaccination_schedules (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            pet_id INTEGER NOT NULL REFERENCES pets (id),
            vaccine_id INTEGER NOT NULL REFERENCES vaccines (id),
            frequency_id INTEGER NOT NULL REFERENCES frequencies (id),
            date_given TEXT NOT NULL,
            notes TEXT
        )
    """,
    "checks_schedules": """
        CREATE TABLE IF NOT EXISTS checks_schedules (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            pet_id INTEGER NOT NULL REFERENCES pets (id),
            check_id INTEGER NOT NULL REFERENCES checks (id),
            date_created TEXT NOT NULL,
            notes TEXT,
            performed INTEGER NOT NULL DEFAULT 0
        )
    """,
    "pet_foods": """
        CREATE TABLE IF NOT EXISTS pet_foods (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            pet_id INTEGER NOT NULL REFERENCES pets (id),
            food_id INTEGER NOT NULL REFERENCES foods (id),
            frequency_id INTEGER NOT NULL REFERENCES frequencies (id),
            date_started TEXT NOT NULL,
            date_ended TEXT,
            notes TEXT,
            CHECK (date_ended IS NULL OR date_ended >= date_started)
        )
    """,
    "injury_reports": """
        CREATE TABLE IF NOT EXISTS injury_reports (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            pet_id INTEGER NOT NULL REFERENCES pets (id),
            injury_id INTEGER NOT NULL REFERENCES injuries (id),
            body_part TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            date TEXT NOT NULL
        )
    """,
}

_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_medication_schedules_pet ON medication_schedules (pet_id)",
    "CREATE INDEX IF NOT EXISTS idx_vaccination_schedules_pet ON vaccination_schedules (pet_id)",
    "CREATE INDEX IF NOT EXISTS idx_checks_schedules_pet ON checks_schedules (pet_id)",
    "CREATE INDEX IF NOT EXISTS idx_pet_foods_pet ON pet_foods (pet_id)",
    "CREATE INDEX IF NOT EXISTS idx_injury_reports_pet ON injury_reports (pet_id)",
]


async def init_db(*, db_path: str | None = None) -> None:
    """Create all tables and indexes if they do not exist yet."""
    conn: aiosqlite.Connection = await get_connection(db_path=db_path)
    for collection in COLLECTIONS:
        await conn.execute(_TABLES[collection])
    for statement in _INDEXES:
        await conn.execute(statement)
    await conn.commit()

    logger.info(
        "Schema initialized",
        extra={"db_path": db_path or settings.sqlite_db_path, "tables": len(COLLECTIONS)},
    )
