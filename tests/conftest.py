"""Pytest configuration and shared fixtures."""

import itertools
from collections.abc import Callable
from datetime import date
from typing import Any

import pytest


RecordFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def as_of() -> date:
    """Reference date used by most derivation tests."""
    return date(2025, 3, 15)


# Factory fixtures for flexible test data creation


@pytest.fixture
def record_ids() -> itertools.count:
    """Shared id sequence so records built in one test never collide."""
    return itertools.count(1)


@pytest.fixture
def pet_factory(record_ids: itertools.count) -> RecordFactory:
    """Factory for pet rows as the data layer returns them."""

    def _create(**overrides: Any) -> dict[str, Any]:
        return {
            "id": next(record_ids),
            "name": "Biscuit",
            "nickname": None,
            "pet_type": "dog",
            "breed": "Beagle",
            "gender": "female",
            "birthday": "2020-06-15",
            "date_admitted": "2024-11-02",
            "picture": None,
            "notes": None,
            "adopted": 0,
            **overrides,
        }

    return _create


@pytest.fixture
def frequency_factory(record_ids: itertools.count) -> RecordFactory:
    """Factory for frequency rows."""

    def _create(**overrides: Any) -> dict[str, Any]:
        return {"id": next(record_ids), "name": "weekly", "interval_days": 7, **overrides}

    return _create


@pytest.fixture
def medication_factory(record_ids: itertools.count) -> RecordFactory:
    """Factory for medication schedule rows."""

    def _create(*, pet_id: int, **overrides: Any) -> dict[str, Any]:
        return {
            "id": next(record_ids),
            "pet_id": pet_id,
            "medication_id": 1,
            "frequency_id": 1,
            "date_started": "2025-03-01",
            "date_ended": None,
            "notes": None,
            **overrides,
        }

    return _create


@pytest.fixture
def vaccination_factory(record_ids: itertools.count) -> RecordFactory:
    """Factory for vaccination schedule rows."""

    def _create(*, pet_id: int, **overrides: Any) -> dict[str, Any]:
        return {
            "id": next(record_ids),
            "pet_id": pet_id,
            "vaccine_id": 1,
            "frequency_id": 1,
            "date_given": "2024-09-01",
            "notes": None,
            **overrides,
        }

    return _create


@pytest.fixture
def check_factory(record_ids: itertools.count) -> RecordFactory:
    """Factory for check schedule rows."""

    def _create(*, pet_id: int, **overrides: Any) -> dict[str, Any]:
        return {
            "id": next(record_ids),
            "pet_id": pet_id,
            "check_id": 1,
            "date_created": "2025-01-10",
            "notes": None,
            "performed": 0,
            **overrides,
        }

    return _create


@pytest.fixture
def food_factory(record_ids: itertools.count) -> RecordFactory:
    """Factory for pet food rows."""

    def _create(*, pet_id: int, **overrides: Any) -> dict[str, Any]:
        return {
            "id": next(record_ids),
            "pet_id": pet_id,
            "food_id": 1,
            "frequency_id": 1,
            "date_started": "2025-02-01",
            "date_ended": None,
            "notes": None,
            **overrides,
        }

    return _create


@pytest.fixture
def injury_factory(record_ids: itertools.count) -> RecordFactory:
    """Factory for injury report rows."""

    def _create(*, pet_id: int, **overrides: Any) -> dict[str, Any]:
        return {
            "id": next(record_ids),
            "pet_id": pet_id,
            "injury_id": 1,
            "body_part": "left paw",
            "description": "Cut on gravel",
            "date": "2025-03-10",
            **overrides,
        }

    return _create
