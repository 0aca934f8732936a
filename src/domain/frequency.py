"""Frequency domain model: a named recurrence interval in days."""

from pydantic import BaseModel, Field, model_validator


def interval_label(interval_days: int) -> str:
    """Return the default name for an interval (e.g. "daily", "every 7 days")."""
    if interval_days == 1:
        return "daily"
    return f"every {interval_days} days"


class Frequency(BaseModel):
    """Frequency data transfer object."""

    id: int = Field(..., description="Unique frequency ID from database")
    name: str = Field(default="", description="Display name (e.g., 'weekly')")
    interval_days: int = Field(..., ge=1, description="Days between occurrences")

    @model_validator(mode="after")
    def default_name_from_interval(self) -> "Frequency":
        """Fill a blank name from the interval."""
        if not self.name.strip():
            self.name = interval_label(self.interval_days)
        return self
