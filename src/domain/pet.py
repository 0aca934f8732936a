"""Pet domain models and enums."""

from datetime import date
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from src.core.care_dates import parse_date


CalendarDate = Annotated[date, BeforeValidator(parse_date)]


class PetGender(StrEnum):
    """Recorded pet gender."""

    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


class Pet(BaseModel):
    """Pet data transfer object, the root key of every care record."""

    id: int = Field(..., description="Unique pet ID from database")
    name: str = Field(..., description="Pet name")
    nickname: str | None = Field(default=None, description="Optional nickname")
    pet_type: str = Field(..., description="Species (e.g., 'dog', 'cat')")
    breed: str = Field(default="", description="Breed")
    gender: PetGender | None = Field(default=None, description="Recorded gender")
    birthday: CalendarDate = Field(..., description="Date of birth")
    date_admitted: CalendarDate = Field(..., description="Date the pet was admitted to the shelter")
    picture: str | None = Field(default=None, description="Picture URL")
    notes: str | None = Field(default=None, description="Free-form staff notes")
    adopted: bool = Field(default=False, description="Whether the pet has been adopted")

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v: object) -> object:
        """Accept 'm'/'f' shorthands and fold anything unrecognised into unknown."""
        if v is None or v == "":
            return None
        value = str(v).strip().lower()
        if value in ("male", "m"):
            return PetGender.MALE
        if value in ("female", "f"):
            return PetGender.FEMALE
        return PetGender.UNKNOWN

    @field_validator("adopted", mode="before")
    @classmethod
    def null_adopted_is_false(cls, v: object) -> object:
        """Treat a missing adoption flag as not adopted."""
        return False if v is None else v
