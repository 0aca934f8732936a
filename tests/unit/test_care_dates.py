"""Unit tests for the age and recency date utilities."""

from datetime import UTC, date, datetime, timedelta

import pytest

from src.core.care_dates import (
    PetAge,
    age_from_birthday,
    format_age,
    is_ongoing,
    is_within_trailing_window,
    next_occurrence,
    parse_date,
)
from src.core.errors import InvalidDateError


@pytest.mark.unit
class TestParseDate:
    """Tests for parse_date function."""

    def test_date_passes_through(self):
        """Test a date object is returned unchanged."""
        assert parse_date(date(2025, 3, 15)) == date(2025, 3, 15)

    def test_datetime_reduced_to_calendar_date(self):
        """Test a datetime keeps only its date component."""
        assert parse_date(datetime(2025, 3, 15, 23, 59, tzinfo=UTC)) == date(2025, 3, 15)

    def test_iso_date_string(self):
        """Test parsing a plain ISO date string."""
        assert parse_date("2025-03-15") == date(2025, 3, 15)

    def test_iso_datetime_string(self):
        """Test parsing an ISO timestamp string as sent by the record store."""
        assert parse_date("2025-03-15T08:30:00Z") == date(2025, 3, 15)

    @pytest.mark.parametrize("value", ["not-a-date", "2025-02-30", "15/03/2025", "", "   "])
    def test_malformed_string_raises(self, value):
        """Test unparsable strings fail instead of defaulting."""
        with pytest.raises(InvalidDateError):
            parse_date(value)

    @pytest.mark.parametrize("value", [None, 20250315, 3.5])
    def test_non_date_types_raise(self, value):
        """Test values that are not dates or strings are rejected."""
        with pytest.raises(InvalidDateError):
            parse_date(value)


@pytest.mark.unit
class TestAgeFromBirthday:
    """Tests for age_from_birthday function."""

    def test_day_before_anniversary_borrows_a_year(self):
        """Test the day before the birthday still counts the previous year."""
        assert age_from_birthday("2020-06-15", "2024-06-14") == PetAge(years=3, months=11)

    def test_on_anniversary(self):
        """Test the birthday itself completes the year."""
        assert age_from_birthday("2020-06-15", "2024-06-15") == PetAge(years=4, months=0)

    def test_same_day_is_zero(self):
        """Test an animal born today is 0 years 0 months."""
        assert age_from_birthday(date(2025, 3, 15), date(2025, 3, 15)) == PetAge(years=0, months=0)

    def test_months_never_negative(self):
        """Test an earlier month in the reference year borrows twelve months."""
        age = age_from_birthday("2021-11-20", "2025-03-15")

        assert age == PetAge(years=3, months=3)

    def test_leap_day_birthday_in_non_leap_year(self):
        """Test a Feb 29 birthday is compared as Feb 28 in non-leap years."""
        assert age_from_birthday("2020-02-29", "2023-02-28") == PetAge(years=3, months=0)
        assert age_from_birthday("2020-02-29", "2023-02-27") == PetAge(years=2, months=11)

    def test_leap_day_birthday_in_leap_year(self):
        """Test a Feb 29 birthday in a leap year uses the real date."""
        assert age_from_birthday("2020-02-29", "2024-02-29") == PetAge(years=4, months=0)

    def test_birthday_after_reference_date_raises(self):
        """Test a future birthday is an impossible input."""
        with pytest.raises(InvalidDateError, match="after"):
            age_from_birthday("2026-01-01", "2025-03-15")

    def test_malformed_birthday_raises(self):
        """Test a malformed birthday fails with InvalidDateError."""
        with pytest.raises(InvalidDateError):
            age_from_birthday("yesterday", "2025-03-15")


@pytest.mark.unit
class TestFormatAge:
    """Tests for format_age function."""

    @pytest.mark.parametrize(
        ("years", "months", "expected"),
        [
            (3, 11, "3 years, 11 months"),
            (1, 1, "1 year, 1 month"),
            (4, 0, "4 years"),
            (0, 5, "5 months"),
            (0, 1, "1 month"),
            (0, 0, "Just born!"),
        ],
    )
    def test_labels(self, years, months, expected):
        """Test singular/plural labels for each age shape."""
        assert format_age(PetAge(years=years, months=months)) == expected


@pytest.mark.unit
class TestIsWithinTrailingWindow:
    """Tests for is_within_trailing_window function."""

    def test_start_of_window_is_inclusive(self, as_of):
        """Test a date exactly window_days ago is inside the window."""
        assert is_within_trailing_window(as_of - timedelta(days=30), 30, as_of) is True

    def test_one_day_past_window_is_outside(self, as_of):
        """Test a date one day older than the window is outside."""
        assert is_within_trailing_window(as_of - timedelta(days=31), 30, as_of) is False

    def test_reference_date_is_inclusive(self, as_of):
        """Test the reference date itself is inside the window."""
        assert is_within_trailing_window(as_of, 30, as_of) is True

    def test_future_date_is_outside(self, as_of):
        """Test a date after the reference date is outside the window."""
        assert is_within_trailing_window(as_of + timedelta(days=1), 30, as_of) is False

    @pytest.mark.parametrize("window_days", [0, -5, True, 2.5])
    def test_window_must_be_positive_integer(self, as_of, window_days):
        """Test invalid window sizes are rejected."""
        with pytest.raises(ValueError, match="positive integer"):
            is_within_trailing_window(as_of, window_days, as_of)


@pytest.mark.unit
class TestIsOngoing:
    """Tests for is_ongoing function."""

    def test_open_ended_window_is_ongoing(self, as_of):
        """Test a window without an end date is ongoing."""
        assert is_ongoing(as_of - timedelta(days=10), None, as_of) is True

    def test_ended_yesterday_is_not_ongoing(self, as_of):
        """Test a window that ended the day before is over."""
        assert is_ongoing(as_of - timedelta(days=10), as_of - timedelta(days=1), as_of) is False

    def test_ending_today_is_ongoing(self, as_of):
        """Test the end date boundary is inclusive."""
        assert is_ongoing(as_of - timedelta(days=10), as_of, as_of) is True

    def test_compares_calendar_dates_not_timestamps(self):
        """Test a late-evening reference time on the end date still counts."""
        assert is_ongoing("2025-03-01", "2025-03-15", datetime(2025, 3, 15, 23, 30, tzinfo=UTC)) is True

    def test_end_before_start_raises(self, as_of):
        """Test an inverted window is an impossible input."""
        with pytest.raises(InvalidDateError, match="before it starts"):
            is_ongoing("2025-03-10", "2025-03-01", as_of)


@pytest.mark.unit
class TestNextOccurrence:
    """Tests for next_occurrence function."""

    def test_anchor_in_future_is_next(self):
        """Test a schedule that has not started yet is due on its start date."""
        assert next_occurrence("2025-03-20", 7, "2025-03-15") == date(2025, 3, 20)

    def test_on_an_occurrence(self):
        """Test a reference date that lands on an occurrence returns it."""
        assert next_occurrence("2025-03-01", 7, "2025-03-15") == date(2025, 3, 15)

    def test_between_occurrences(self):
        """Test the next occurrence after the reference date is returned."""
        assert next_occurrence("2025-03-01", 7, "2025-03-16") == date(2025, 3, 22)

    def test_interval_must_be_positive(self):
        """Test a zero interval is rejected."""
        with pytest.raises(ValueError, match="positive integer"):
            next_occurrence("2025-03-01", 0, "2025-03-15")
