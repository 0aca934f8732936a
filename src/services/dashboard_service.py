"""Per-pet care dashboard aggregation.

This module provides functions for:
- Fetching a pet and every care collection concurrently (all-or-nothing join;
  the first failed fetch cancels the rest)
- Filtering each collection down to one pet
- Applying the care status rules and counting each section

Key Concepts:
- Windowing: medications and diet keep only active schedules, injuries keep only
  recent reports. Vaccinations and checkups are full history, never windowed.
- Totals: medications and injuries count the windowed lists; vaccinations,
  checkups and diet count the pet's full collections.
- Fail fast: a missing pet or any failed fetch aborts the whole snapshot.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from src.core import db_client
from src.core.care_dates import DateInput, age_from_birthday, format_age, parse_date
from src.core.errors import PetNotFoundError
from src.core.logging import log_with_pet_context, span
from src.domain.frequency import Frequency
from src.domain.pet import Pet
from src.domain.schedules import ChecksSchedule, InjuryReport, MedicationSchedule, PetFood, VaccinationSchedule
from src.models.service_models import DashboardTotals, PetDashboardSnapshot, SectionPreview
from src.services import care_status


logger = logging.getLogger(__name__)

_DASHBOARD_RESOURCES = (*db_client.CARE_RESOURCES, "frequencies")


def _rows_for_pet(rows: Sequence[dict[str, Any]], pet_id: int) -> list[dict[str, Any]]:
    """Keep the rows whose pet_id matches, in input order."""
    return [row for row in rows if str(row.get("pet_id")) == str(pet_id)]


def _referenced_frequencies(
    frequency_rows: Sequence[dict[str, Any]],
    frequency_ids: set[int],
) -> dict[int, Frequency]:
    """Parse only the frequencies that this pet's schedules point at."""
    frequencies: dict[int, Frequency] = {}
    for row in frequency_rows:
        frequency_id = int(row["id"])
        if frequency_id in frequency_ids:
            frequencies[frequency_id] = Frequency.model_validate(row)
    return frequencies


def assemble_dashboard(
    *,
    pet_id: int,
    pet_record: dict[str, Any] | None,
    medication_schedules: Sequence[dict[str, Any]],
    vaccination_schedules: Sequence[dict[str, Any]],
    checks_schedules: Sequence[dict[str, Any]],
    injury_reports: Sequence[dict[str, Any]],
    pet_foods: Sequence[dict[str, Any]],
    frequencies: Sequence[dict[str, Any]] = (),
    as_of: DateInput,
) -> PetDashboardSnapshot:
    """Build a snapshot from already-fetched, unfiltered collections.

    Pure and synchronous: equal inputs and ``as_of`` give an equal snapshot.

    Raises:
        PetNotFoundError: If pet_record is None
        InvalidDateError: If a date on this pet's records is malformed
    """
    if pet_record is None:
        raise PetNotFoundError(pet_id)

    today = parse_date(as_of)
    pet = Pet.model_validate(pet_record)
    age = age_from_birthday(pet.birthday, today)

    medications = [MedicationSchedule.model_validate(row) for row in _rows_for_pet(medication_schedules, pet_id)]
    vaccinations = [VaccinationSchedule.model_validate(row) for row in _rows_for_pet(vaccination_schedules, pet_id)]
    checkups = [ChecksSchedule.model_validate(row) for row in _rows_for_pet(checks_schedules, pet_id)]
    injuries = [InjuryReport.model_validate(row) for row in _rows_for_pet(injury_reports, pet_id)]
    foods = [PetFood.model_validate(row) for row in _rows_for_pet(pet_foods, pet_id)]

    active_medications = care_status.active_schedules(medications, today)
    active_diet = care_status.active_schedules(foods, today)
    recent_injuries = care_status.recent_injuries(injuries, today)

    referenced = {m.frequency_id for m in active_medications}
    referenced |= {v.frequency_id for v in vaccinations}
    referenced |= {f.frequency_id for f in active_diet}
    due = care_status.due_estimates(
        active_medications=active_medications,
        vaccinations=vaccinations,
        active_diet=active_diet,
        frequencies=_referenced_frequencies(frequencies, referenced),
        as_of=today,
    )

    return PetDashboardSnapshot(
        pet=pet,
        as_of=today,
        age=age,
        age_label=format_age(age),
        active_medications=active_medications,
        vaccinations=vaccinations,
        checkups=checkups,
        recent_injuries=recent_injuries,
        diet=active_diet,
        totals=DashboardTotals(
            medications=len(active_medications),
            vaccinations=len(vaccinations),
            checkups=len(checkups),
            injuries_recent=len(recent_injuries),
            diet=len(foods),
        ),
        due_estimates=due,
    )


async def _fetch_care_records(pet_id: int) -> tuple[dict[str, Any] | None, dict[str, list[dict[str, Any]]]]:
    """Fetch the pet and every care collection concurrently.

    The first failure cancels the fetches still in flight and is re-raised as is.
    """
    try:
        async with asyncio.TaskGroup() as group:
            pet_task = group.create_task(db_client.fetch_pet(pet_id))
            collection_tasks = {
                resource: group.create_task(db_client.fetch_all(resource)) for resource in _DASHBOARD_RESOURCES
            }
    except ExceptionGroup as errors:
        raise errors.exceptions[0]  # noqa: B904 - re-raise the original fetch error

    return pet_task.result(), {resource: task.result() for resource, task in collection_tasks.items()}


async def build_pet_dashboard(*, pet_id: int, as_of: DateInput) -> PetDashboardSnapshot:
    """Fetch everything for a pet and build its dashboard snapshot.

    The pet and the care collections are fetched concurrently; the snapshot is
    built only once every fetch has succeeded.

    Args:
        pet_id: ID of the pet
        as_of: Reference date for every derived status (production passes today)

    Returns:
        PetDashboardSnapshot for the pet

    Raises:
        PetNotFoundError: If the pet does not exist
        FetchError: If any fetch fails (propagated unchanged)
        InvalidDateError: If as_of or a date on this pet's records is malformed
    """
    today = parse_date(as_of)

    with span("dashboard_service.build_pet_dashboard"):
        pet_record, collections = await _fetch_care_records(pet_id)

        if pet_record is None:
            log_with_pet_context(logger, "info", "Dashboard requested for unknown pet", pet_id=pet_id)
            raise PetNotFoundError(pet_id)

        snapshot = assemble_dashboard(
            pet_id=pet_id,
            pet_record=pet_record,
            medication_schedules=collections["medication_schedules"],
            vaccination_schedules=collections["vaccination_schedules"],
            checks_schedules=collections["checks_schedules"],
            injury_reports=collections["injury_reports"],
            pet_foods=collections["pet_foods"],
            frequencies=collections["frequencies"],
            as_of=today,
        )

        log_with_pet_context(
            logger,
            "info",
            "Built pet dashboard",
            pet_id=pet_id,
            as_of=today.isoformat(),
            **snapshot.totals.model_dump(),
        )
        return snapshot


def dashboard_previews(
    snapshot: PetDashboardSnapshot,
    *,
    limit: int,
) -> dict[str, SectionPreview]:
    """Truncate every dashboard section to its first ``limit`` items."""
    sections = {
        "medications": snapshot.active_medications,
        "vaccinations": snapshot.vaccinations,
        "checkups": snapshot.checkups,
        "injuries": snapshot.recent_injuries,
        "diet": snapshot.diet,
    }
    return {name: care_status.preview_section(items, limit) for name, items in sections.items()}
