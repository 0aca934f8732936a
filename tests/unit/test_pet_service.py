"""Unit tests for pet_service module."""

import pytest

from src.core.errors import FetchError, InvalidDateError
from src.services import pet_service


@pytest.mark.unit
class TestListAdoptablePets:
    """Tests for list_adoptable_pets function."""

    async def test_excludes_adopted_pets(self, patched_db, pet_factory):
        """Test adopted pets are filtered out and a null flag counts as available."""
        await patched_db.create_record(collection="pets", data=pet_factory(id=1, name="Biscuit", adopted=0))
        await patched_db.create_record(collection="pets", data=pet_factory(id=2, name="Rex", adopted=1))
        await patched_db.create_record(collection="pets", data=pet_factory(id=3, name="Mochi", adopted=None))

        result = await pet_service.list_adoptable_pets(as_of="2025-03-15")

        assert [entry.pet.name for entry in result] == ["Mochi", "Biscuit"]

    async def test_includes_age_and_label(self, patched_db, pet_factory):
        """Test each listing carries the age on as_of."""
        await patched_db.create_record(collection="pets", data=pet_factory(birthday="2024-10-01"))

        result = await pet_service.list_adoptable_pets(as_of="2025-03-15")

        assert (result[0].age.years, result[0].age.months) == (0, 5)
        assert result[0].age_label == "5 months"

    async def test_empty_shelter(self, patched_db):
        """Test no pets gives an empty listing."""
        assert await pet_service.list_adoptable_pets(as_of="2025-03-15") == []

    async def test_fetch_failure_propagates(self, patched_db):
        """Test a failed pets read is raised unchanged."""
        patched_db.failing.add("pets")

        with pytest.raises(FetchError):
            await pet_service.list_adoptable_pets(as_of="2025-03-15")

    async def test_future_birthday_skips_only_that_pet(self, patched_db, pet_factory, caplog):
        """Test a pet born after as_of is left out while the others are listed."""
        await patched_db.create_record(collection="pets", data=pet_factory(id=1, name="Biscuit", birthday="2020-06-15"))
        await patched_db.create_record(collection="pets", data=pet_factory(id=2, name="Pup", birthday="2025-04-01"))

        result = await pet_service.list_adoptable_pets(as_of="2025-03-15")

        assert [entry.pet.name for entry in result] == ["Biscuit"]
        assert "Skipping pet with invalid dates" in caplog.text

    async def test_malformed_date_skips_only_that_pet(self, patched_db, pet_factory):
        """Test an available pet with an unparsable date does not fail the listing."""
        await patched_db.create_record(collection="pets", data=pet_factory(id=1, name="Biscuit"))
        await patched_db.create_record(collection="pets", data=pet_factory(id=2, name="Mochi", date_admitted="n/a"))

        result = await pet_service.list_adoptable_pets(as_of="2025-03-15")

        assert [entry.pet.name for entry in result] == ["Biscuit"]

    async def test_adopted_pet_with_malformed_date_is_ignored(self, patched_db, pet_factory):
        """Test adopted pets are dropped before their dates are checked."""
        await patched_db.create_record(collection="pets", data=pet_factory(id=1, name="Biscuit"))
        await patched_db.create_record(
            collection="pets", data=pet_factory(id=2, name="Rex", adopted=1, date_admitted="n/a")
        )

        result = await pet_service.list_adoptable_pets(as_of="2025-03-15")

        assert [entry.pet.name for entry in result] == ["Biscuit"]

    async def test_malformed_as_of_raises(self, patched_db, pet_factory):
        """Test a bad reference date still fails the request."""
        await patched_db.create_record(collection="pets", data=pet_factory())

        with pytest.raises(InvalidDateError):
            await pet_service.list_adoptable_pets(as_of="someday")
