"""Calendar-date utilities for pet ages, trailing windows and recurring schedules.

Every function takes the reference date (``as_of``) explicitly. Nothing here
reads the clock.
"""

from datetime import date, datetime, timedelta

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta
from pydantic import BaseModel

from src.core.errors import InvalidDateError


DateInput = date | datetime | str


class PetAge(BaseModel):
    """Calendar age split into whole years and remainder months."""

    years: int
    months: int


def parse_date(value: DateInput) -> date:
    """Reduce a date, datetime or ISO-8601 string to a calendar date.

    Raises:
        InvalidDateError: If the value is not a date or cannot be parsed
    """
    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Expected a date or ISO date string, got {type(value).__name__}")

    text = value.strip()
    if not text:
        raise InvalidDateError("Empty date string")

    try:
        return dateutil_parser.isoparse(text).date()
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(f"Unparsable date: {value!r}") from e


def age_from_birthday(birthday: DateInput, as_of: DateInput) -> PetAge:
    """Compute calendar age in years and remainder months.

    A day-of-month that does not exist in the target month is clamped to the
    month's last day, so a Feb 29 birthday is compared as Feb 28 in non-leap
    years.

    Raises:
        InvalidDateError: If either date is malformed or the birthday is after ``as_of``
    """
    born = parse_date(birthday)
    today = parse_date(as_of)
    if born > today:
        raise InvalidDateError(f"Birthday {born.isoformat()} is after {today.isoformat()}")

    delta = relativedelta(today, born)
    return PetAge(years=delta.years, months=delta.months)


def format_age(age: PetAge) -> str:
    """Render an age as a short human-readable label (e.g. "3 years, 11 months")."""
    years_label = f"{age.years} {'year' if age.years == 1 else 'years'}"
    months_label = f"{age.months} {'month' if age.months == 1 else 'months'}"

    if age.years > 0 and age.months > 0:
        return f"{years_label}, {months_label}"
    if age.years > 0:
        return years_label
    if age.months > 0:
        return months_label
    return "Just born!"


def is_within_trailing_window(value: DateInput, window_days: int, as_of: DateInput) -> bool:
    """Return True iff ``as_of - window_days <= value <= as_of``.

    Raises:
        ValueError: If window_days is not a positive integer
        InvalidDateError: If a date is malformed
    """
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days < 1:
        msg = f"window_days must be a positive integer, got {window_days!r}"
        raise ValueError(msg)

    day = parse_date(value)
    today = parse_date(as_of)
    return today - timedelta(days=window_days) <= day <= today


def is_ongoing(start: DateInput, end: DateInput | None, as_of: DateInput) -> bool:
    """Return True iff the window has no end or ends on/after ``as_of``.

    Raises:
        InvalidDateError: If a date is malformed or the window ends before it starts
    """
    started = parse_date(start)
    today = parse_date(as_of)
    if end is None:
        return True

    ended = parse_date(end)
    if ended < started:
        raise InvalidDateError(f"Window ends ({ended.isoformat()}) before it starts ({started.isoformat()})")
    return ended >= today


def next_occurrence(anchor: DateInput, interval_days: int, as_of: DateInput) -> date:
    """Return the first ``anchor + k * interval_days`` (k >= 0) on or after ``as_of``."""
    if interval_days < 1:
        msg = f"interval_days must be a positive integer, got {interval_days!r}"
        raise ValueError(msg)

    first = parse_date(anchor)
    today = parse_date(as_of)
    if first >= today:
        return first

    elapsed = (today - first).days
    periods = -(-elapsed // interval_days)
    return first + timedelta(days=periods * interval_days)
