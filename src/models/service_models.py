"""Pydantic models for service layer return types.

These models provide type safety at service boundaries, converting database
dictionaries into typed objects with validation.
"""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel

from src.core.care_dates import PetAge
from src.domain.pet import Pet
from src.domain.schedules import (
    ChecksSchedule,
    InjuryReport,
    MedicationSchedule,
    PetFood,
    VaccinationSchedule,
)


class DueKind(StrEnum):
    """Kind of schedule a due estimate was derived from."""

    MEDICATION = "medication"
    VACCINATION = "vaccination"
    DIET = "diet"


class DashboardTotals(BaseModel):
    """Per-section counts shown under each dashboard column."""

    medications: int
    vaccinations: int
    checkups: int
    injuries_recent: int
    diet: int


class DueEstimate(BaseModel):
    """Next expected occurrence of a recurring schedule."""

    kind: DueKind
    schedule_id: int
    frequency_id: int
    interval_days: int
    next_due: date
    overdue: bool


class SectionPreview(BaseModel):
    """First K items of a section plus the count left out ("+N more")."""

    items: list[dict]
    remaining: int
    total: int


class PetDashboardSnapshot(BaseModel):
    """Point-in-time care overview of one pet."""

    pet: Pet
    as_of: date
    age: PetAge
    age_label: str
    active_medications: list[MedicationSchedule]
    vaccinations: list[VaccinationSchedule]
    checkups: list[ChecksSchedule]
    recent_injuries: list[InjuryReport]
    diet: list[PetFood]
    totals: DashboardTotals
    due_estimates: list[DueEstimate]


class AdoptablePet(BaseModel):
    """Pet listed for adoption with its current age."""

    pet: Pet
    age: PetAge
    age_label: str
