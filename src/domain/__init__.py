"""Domain models and DTOs."""

from src.domain.frequency import Frequency
from src.domain.pet import Pet, PetGender
from src.domain.schedules import (
    ChecksSchedule,
    InjuryReport,
    MedicationSchedule,
    PetFood,
    VaccinationSchedule,
)


__all__ = [
    "ChecksSchedule",
    "Frequency",
    "InjuryReport",
    "MedicationSchedule",
    "Pet",
    "PetFood",
    "PetGender",
    "VaccinationSchedule",
]
