#!/usr/bin/env python3
"""Seed a local database with a few pets and care records.

Usage:
    uv run python scripts/seed_demo_data.py
    uv run python scripts/seed_demo_data.py --as-of 2025-03-15
"""

import argparse
import asyncio
import logging
from datetime import date, timedelta

from src.core import db_client
from src.core.care_dates import parse_date
from src.services import dashboard_service


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


async def seed(as_of: date) -> int:
    """Create catalog rows, one pet and its schedules. Returns the pet ID."""
    await db_client.init_db()

    weekly = await db_client.create_record(collection="frequencies", data={"name": "weekly", "interval_days": 7})
    daily = await db_client.create_record(collection="frequencies", data={"name": "daily", "interval_days": 1})
    yearly = await db_client.create_record(collection="frequencies", data={"name": "yearly", "interval_days": 365})

    medication = await db_client.create_record(
        collection="medications", data={"name": "Carprofen", "amount": "25mg", "purpose": "Pain relief"}
    )
    vaccine = await db_client.create_record(
        collection="vaccines", data={"name": "Rabies", "frequency_id": yearly["id"], "mandatory": 1}
    )
    check = await db_client.create_record(
        collection="checks", data={"check_type": "Weight check", "frequency_id": weekly["id"]}
    )
    food = await db_client.create_record(
        collection="foods", data={"name": "Renal diet", "food_type": "dry", "amount": "200g"}
    )
    injury = await db_client.create_record(
        collection="injuries", data={"description": "Laceration", "severity": "minor"}
    )

    pet = await db_client.create_record(
        collection="pets",
        data={
            "name": "Biscuit",
            "pet_type": "dog",
            "breed": "Beagle",
            "gender": "female",
            "birthday": as_of - timedelta(days=3 * 365 + 40),
            "date_admitted": as_of - timedelta(days=90),
        },
    )

    schedules = [
        (
            "medication_schedules",
            {
                "pet_id": pet["id"],
                "medication_id": medication["id"],
                "frequency_id": daily["id"],
                "date_started": as_of - timedelta(days=60),
                "date_ended": as_of - timedelta(days=30),
            },
        ),
        (
            "medication_schedules",
            {
                "pet_id": pet["id"],
                "medication_id": medication["id"],
                "frequency_id": daily["id"],
                "date_started": as_of - timedelta(days=10),
            },
        ),
        (
            "vaccination_schedules",
            {
                "pet_id": pet["id"],
                "vaccine_id": vaccine["id"],
                "frequency_id": yearly["id"],
                "date_given": as_of - timedelta(days=200),
            },
        ),
        (
            "checks_schedules",
            {"pet_id": pet["id"], "check_id": check["id"], "date_created": as_of - timedelta(days=3), "performed": 0},
        ),
        (
            "pet_foods",
            {
                "pet_id": pet["id"],
                "food_id": food["id"],
                "frequency_id": daily["id"],
                "date_started": as_of - timedelta(days=20),
            },
        ),
        (
            "injury_reports",
            {
                "pet_id": pet["id"],
                "injury_id": injury["id"],
                "body_part": "left paw",
                "description": "Cut on gravel",
                "date": as_of - timedelta(days=5),
            },
        ),
    ]
    for collection, data in schedules:
        await db_client.create_record(collection=collection, data=data)

    logger.info(f"Seeded pet {pet['name']} (id={pet['id']})")
    return pet["id"]


async def main(as_of: date) -> None:
    """Seed the database and print the resulting dashboard totals."""
    try:
        pet_id = await seed(as_of)
        snapshot = await dashboard_service.build_pet_dashboard(pet_id=pet_id, as_of=as_of)
        logger.info(f"Dashboard totals as of {as_of.isoformat()}: {snapshot.totals.model_dump()}")
    finally:
        await db_client.close_connection()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo care records")
    parser.add_argument("--as-of", default=date.today().isoformat(), help="Reference date (YYYY-MM-DD)")
    args = parser.parse_args()
    asyncio.run(main(parse_date(args.as_of)))
