"""Care schedule domain models.

Five parallel record shapes, each keyed to a pet by ``pet_id``. Derived status
("active", "recent", "next due") is computed by the care status rules and never
stored on these records.
"""

from pydantic import BaseModel, Field, field_validator

from src.domain.pet import CalendarDate


def _blank_to_none(v: object) -> object:
    """Treat an empty end date (as submitted by forms) as no end date."""
    if isinstance(v, str) and not v.strip():
        return None
    return v


class MedicationSchedule(BaseModel):
    """Medication course for a pet."""

    id: int = Field(..., description="Unique schedule ID from database")
    pet_id: int = Field(..., description="ID of the medicated pet")
    medication_id: int = Field(..., description="ID of the medication")
    frequency_id: int = Field(..., description="ID of the dosing frequency")
    date_started: CalendarDate = Field(..., description="First day of the course")
    date_ended: CalendarDate | None = Field(default=None, description="Last day of the course, open-ended if None")
    notes: str | None = Field(default=None, description="Dosing notes")

    @field_validator("date_ended", mode="before")
    @classmethod
    def blank_end_is_open(cls, v: object) -> object:
        """Treat an empty end date as no end date."""
        return _blank_to_none(v)


class VaccinationSchedule(BaseModel):
    """Vaccination given to a pet."""

    id: int = Field(..., description="Unique schedule ID from database")
    pet_id: int = Field(..., description="ID of the vaccinated pet")
    vaccine_id: int = Field(..., description="ID of the vaccine")
    frequency_id: int = Field(..., description="ID of the booster frequency")
    date_given: CalendarDate = Field(..., description="Day the vaccine was given")
    notes: str | None = Field(default=None, description="Notes")


class ChecksSchedule(BaseModel):
    """Health check scheduled for a pet."""

    id: int = Field(..., description="Unique schedule ID from database")
    pet_id: int = Field(..., description="ID of the checked pet")
    check_id: int = Field(..., description="ID of the check type")
    date_created: CalendarDate = Field(..., description="Day the check was scheduled")
    notes: str | None = Field(default=None, description="Notes")
    performed: bool = Field(default=False, description="Whether the check has been performed")

    @field_validator("performed", mode="before")
    @classmethod
    def null_performed_is_false(cls, v: object) -> object:
        """Treat a missing completion flag as not performed."""
        return False if v is None else v


class PetFood(BaseModel):
    """Diet assignment for a pet."""

    id: int = Field(..., description="Unique assignment ID from database")
    pet_id: int = Field(..., description="ID of the fed pet")
    food_id: int = Field(..., description="ID of the food")
    frequency_id: int = Field(..., description="ID of the feeding frequency")
    date_started: CalendarDate = Field(..., description="First day of the diet")
    date_ended: CalendarDate | None = Field(default=None, description="Last day of the diet, open-ended if None")
    notes: str | None = Field(default=None, description="Feeding notes")

    @field_validator("date_ended", mode="before")
    @classmethod
    def blank_end_is_open(cls, v: object) -> object:
        """Treat an empty end date as no end date."""
        return _blank_to_none(v)


class InjuryReport(BaseModel):
    """Injury recorded for a pet."""

    id: int = Field(..., description="Unique report ID from database")
    pet_id: int = Field(..., description="ID of the injured pet")
    injury_id: int = Field(..., description="ID of the injury type")
    body_part: str = Field(..., description="Affected body part")
    description: str = Field(default="", description="What happened")
    date: CalendarDate = Field(..., description="Day of the injury")
