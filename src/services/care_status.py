"""Care status derivation rules.

Classifies individual care records against a reference date:
- Active medication/diet: the schedule has no end date, or ends on/after ``as_of``.
- Recent injury: dated within the trailing ``RECENT_INJURY_WINDOW_DAYS`` window.
- Due estimates: next expected occurrence of a recurring schedule.

Filters keep the input order (the data layer returns newest id first); nothing
here re-sorts, and previews truncate positionally.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta
from typing import TypeVar

from pydantic import BaseModel

from src.core.care_dates import DateInput, is_ongoing, is_within_trailing_window, next_occurrence, parse_date
from src.core.config import Constants
from src.domain.frequency import Frequency
from src.domain.schedules import InjuryReport, MedicationSchedule, PetFood, VaccinationSchedule
from src.models.service_models import DueEstimate, DueKind, SectionPreview


logger = logging.getLogger(__name__)

RECENT_INJURY_WINDOW_DAYS = Constants.RECENT_INJURY_WINDOW_DAYS

ScheduleT = TypeVar("ScheduleT", MedicationSchedule, PetFood)


def is_active_schedule(schedule: MedicationSchedule | PetFood, as_of: DateInput) -> bool:
    """Return True if a medication course or diet is still running on ``as_of``."""
    return is_ongoing(schedule.date_started, schedule.date_ended, as_of)


def is_recent_injury(report: InjuryReport, as_of: DateInput) -> bool:
    """Return True if the injury happened within the trailing recency window."""
    return is_within_trailing_window(report.date, RECENT_INJURY_WINDOW_DAYS, as_of)


def active_schedules(schedules: Iterable[ScheduleT], as_of: DateInput) -> list[ScheduleT]:
    """Keep the schedules active on ``as_of``, in input order."""
    return [schedule for schedule in schedules if is_active_schedule(schedule, as_of)]


def recent_injuries(reports: Iterable[InjuryReport], as_of: DateInput) -> list[InjuryReport]:
    """Keep the injury reports inside the recency window, in input order."""
    return [report for report in reports if is_recent_injury(report, as_of)]


def preview_section(items: Sequence[BaseModel], limit: int = Constants.DASHBOARD_PREVIEW_LIMIT) -> SectionPreview:
    """Take the first ``limit`` items and count the rest ("+N more")."""
    if limit < 0:
        msg = f"Preview limit must not be negative, got {limit}"
        raise ValueError(msg)

    shown = items[:limit]
    return SectionPreview(
        items=[item.model_dump(mode="json") for item in shown],
        remaining=len(items) - len(shown),
        total=len(items),
    )


def vaccination_due(
    vaccination: VaccinationSchedule,
    frequency: Frequency,
    as_of: DateInput,
) -> DueEstimate:
    """Estimate the booster date: one interval after the vaccine was given."""
    next_due = vaccination.date_given + timedelta(days=frequency.interval_days)
    return DueEstimate(
        kind=DueKind.VACCINATION,
        schedule_id=vaccination.id,
        frequency_id=frequency.id,
        interval_days=frequency.interval_days,
        next_due=next_due,
        overdue=next_due < parse_date(as_of),
    )


def recurring_due(
    schedule: MedicationSchedule | PetFood,
    kind: DueKind,
    frequency: Frequency,
    as_of: DateInput,
) -> DueEstimate:
    """Estimate the next dose or feeding of an active schedule, on or after ``as_of``."""
    return DueEstimate(
        kind=kind,
        schedule_id=schedule.id,
        frequency_id=frequency.id,
        interval_days=frequency.interval_days,
        next_due=next_occurrence(schedule.date_started, frequency.interval_days, as_of),
        overdue=False,
    )


def due_estimates(
    *,
    active_medications: Iterable[MedicationSchedule],
    vaccinations: Iterable[VaccinationSchedule],
    active_diet: Iterable[PetFood],
    frequencies: Mapping[int, Frequency],
    as_of: DateInput,
) -> list[DueEstimate]:
    """Build next-due estimates for every schedule with a known frequency.

    Order: medications, then vaccinations, then diet, each in input order.
    Schedules whose frequency is missing are skipped with a warning.
    """
    today: date = parse_date(as_of)
    estimates: list[DueEstimate] = []

    def lookup(frequency_id: int, kind: DueKind, schedule_id: int) -> Frequency | None:
        frequency = frequencies.get(frequency_id)
        if frequency is None:
            logger.warning(
                "Frequency not found for schedule, skipping due estimate",
                extra={"kind": str(kind), "schedule_id": schedule_id, "frequency_id": frequency_id},
            )
        return frequency

    for medication in active_medications:
        if frequency := lookup(medication.frequency_id, DueKind.MEDICATION, medication.id):
            estimates.append(recurring_due(medication, DueKind.MEDICATION, frequency, today))

    for vaccination in vaccinations:
        if frequency := lookup(vaccination.frequency_id, DueKind.VACCINATION, vaccination.id):
            estimates.append(vaccination_due(vaccination, frequency, today))

    for food in active_diet:
        if frequency := lookup(food.frequency_id, DueKind.DIET, food.id):
            estimates.append(recurring_due(food, DueKind.DIET, frequency, today))

    return estimates
