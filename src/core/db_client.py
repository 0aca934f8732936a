"""SQLite data access layer for care records.

Reads return plain dict records. Every read failure surfaces as ``FetchError``
(or ``RecordNotFoundError`` for a missing id); callers never see driver errors.
"""

import asyncio
import json
import logging
import re
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from src.core.config import Constants, settings
from src.core.errors import FetchError


logger = logging.getLogger(__name__)

# Collections the care dashboard reads in full
CARE_RESOURCES = (
    "medication_schedules",
    "vaccination_schedules",
    "checks_schedules",
    "injury_reports",
    "pet_foods",
)

READABLE_RESOURCES = frozenset({*CARE_RESOURCES, "pets", "frequencies"})


class RecordNotFoundError(KeyError):
    """No record exists with the requested id."""


def _validate_collection_name(collection: str) -> None:
    """Validate that a collection name contains only alphanumeric characters and underscores."""
    if not re.match(r"^[a-zA-Z_][a-zA-Z0-9_]*$", collection):
        msg = f"Invalid collection name: {collection}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


def _serialize_value(val: Any) -> Any:
    """Convert a Python value into something SQLite can store."""
    if isinstance(val, date | datetime):
        return val.isoformat()
    if isinstance(val, dict | list):
        return json.dumps(val)
    return val


def get_db_path(db_path: str | None = None) -> Path:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    return Path(path_str).resolve()


_db_connections: dict[tuple[int, int, str], aiosqlite.Connection] = {}
_db_lock = asyncio.Lock()


async def get_connection(*, db_path: str | None = None) -> aiosqlite.Connection:
    """Get or create a cached connection for the current thread, loop, and db path."""
    thread_id = threading.get_ident()
    loop = asyncio.get_event_loop()
    loop_id = id(loop)
    path = get_db_path(db_path)
    cache_key = (thread_id, loop_id, str(path))

    # Check if we have a cached connection and verify the loop is still valid
    if cache_key in _db_connections:
        cached_conn = _db_connections[cache_key]
        if not loop.is_closed():
            return cached_conn
        async with _db_lock:
            _db_connections.pop(cache_key, None)

    async with _db_lock:
        # Double-check after acquiring lock
        if cache_key in _db_connections:
            return _db_connections[cache_key]

        path.parent.mkdir(parents=True, exist_ok=True)

        conn = await aiosqlite.connect(str(path))
        await conn.execute("PRAGMA foreign_keys = ON")
        await conn.execute("PRAGMA journal_mode = WAL")

        _db_connections[cache_key] = conn

        logger.info(
            "Created new SQLite connection",
            extra={"db_path": str(path), "thread_id": thread_id, "loop_id": loop_id},
        )
        return conn


async def close_connection(*, db_path: str | None = None) -> None:
    """Close the cached SQLite connection for the current thread, loop, and db path."""
    thread_id = threading.get_ident()
    loop = asyncio.get_event_loop()
    loop_id = id(loop)
    path = get_db_path(db_path)
    cache_key = (thread_id, loop_id, str(path))

    if cache_key not in _db_connections:
        return

    try:
        async with _db_lock:
            if cache_key in _db_connections:
                conn = _db_connections.pop(cache_key)
                await conn.close()
                logger.info(
                    "Closed SQLite connection",
                    extra={"thread_id": thread_id, "loop_id": loop_id, "db_path": str(path)},
                )
    except Exception as e:
        logger.warning(
            "Error closing SQLite connection",
            extra={"error": str(e), "thread_id": thread_id, "loop_id": loop_id},
        )


async def init_db(*, db_path: str | None = None) -> None:
    """Initialize the database schema by delegating to schema.init_db()."""
    schema = __import__("src.core.schema", fromlist=["init_db"])
    await schema.init_db(db_path=db_path)


async def create_record(*, collection: str, data: dict[str, Any]) -> dict[str, Any]:
    """Insert a new record and return it with its assigned id.

    Used for seeding; the dashboard itself never writes.
    """
    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        columns = list(data.keys())
        columns_str = ", ".join(columns)
        placeholders_str = ", ".join("?" for _ in columns)
        values = [_serialize_value(data[key]) for key in columns]

        query = f"INSERT INTO {collection} ({columns_str}) VALUES ({placeholders_str})"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, values)
        await conn.commit()

        record_id = cursor.lastrowid
        logger.info("Created record", extra={"collection": collection, "record_id": record_id})
        return await get_record(collection=collection, record_id=record_id)
    except Exception as e:
        if isinstance(e, aiosqlite.OperationalError) and "no such table" in str(e):
            msg = f"Table '{collection}' does not exist. Call init_db() first."
            logger.error("Table not found", extra={"collection": collection})
            raise RuntimeError(msg) from e
        logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to create record in {collection}: {e}"
        raise RuntimeError(msg) from e


async def get_record(*, collection: str, record_id: int) -> dict[str, Any]:
    """Fetch a single record by ID.

    Raises:
        RecordNotFoundError: If no record has this ID
        FetchError: If the read fails
    """
    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        query = f"SELECT * FROM {collection} WHERE id = ?"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, (int(record_id),))
        row = await cursor.fetchone()

        if row is None:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        columns = [description[0] for description in cursor.description]
        record = dict(zip(columns, row, strict=True))

        logger.debug("Retrieved record", extra={"collection": collection, "record_id": record_id})
        return record
    except RecordNotFoundError:
        raise
    except Exception as e:
        logger.error("get_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to get record from {collection}: {e}"
        raise FetchError(msg) from e


async def list_records(
    *,
    collection: str,
    page: int = 1,
    per_page: int = 50,
) -> list[dict[str, Any]]:
    """List one page of records, newest id first.

    Raises:
        FetchError: If the read fails
    """
    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        offset = (page - 1) * per_page

        query = f"SELECT * FROM {collection} ORDER BY id DESC LIMIT ? OFFSET ?"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, (per_page, offset))
        rows = await cursor.fetchall()

        columns = [description[0] for description in cursor.description]
        records = [dict(zip(columns, row, strict=True)) for row in rows]

        logger.debug("Listed records", extra={"collection": collection, "count": len(records)})
        return records
    except Exception as e:
        logger.error("list_records_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to list records from {collection}: {e}"
        raise FetchError(msg) from e


async def fetch_pet(pet_id: int) -> dict[str, Any] | None:
    """Fetch one pet, or None if it does not exist.

    Raises:
        FetchError: If the read fails
    """
    try:
        return await get_record(collection="pets", record_id=pet_id)
    except RecordNotFoundError:
        logger.info("Pet not found", extra={"pet_id": pet_id})
        return None


async def fetch_all(resource: str) -> list[dict[str, Any]]:
    """Fetch a full, unfiltered collection, newest id first.

    Filtering by pet is the caller's job.

    Raises:
        ValueError: If the resource is not a readable care collection
        FetchError: If any page read fails
    """
    if resource not in READABLE_RESOURCES:
        msg = f"Unknown resource: {resource}"
        raise ValueError(msg)

    per_page = Constants.FETCH_ALL_PAGE_SIZE
    records: list[dict[str, Any]] = []
    page = 1
    while True:
        batch = await list_records(collection=resource, page=page, per_page=per_page)
        records.extend(batch)
        if len(batch) < per_page:
            break
        page += 1

    logger.info("Fetched collection", extra={"collection": resource, "count": len(records)})
    return records
