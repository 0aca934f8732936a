"""Pet listing service for the public adoption page."""

import logging

from src.core import db_client
from src.core.care_dates import DateInput, age_from_birthday, format_age, parse_date
from src.core.errors import InvalidDateError
from src.core.logging import span
from src.domain.pet import Pet
from src.models.service_models import AdoptablePet


logger = logging.getLogger(__name__)


async def list_adoptable_pets(*, as_of: DateInput) -> list[AdoptablePet]:
    """List pets that have not been adopted, with their age on ``as_of``.

    Adopted pets are dropped before their rows are validated. A pet whose
    dates are malformed, or whose birthday falls after ``as_of``, is left out
    of the listing with a warning.

    Args:
        as_of: Reference date for the ages

    Returns:
        Adoptable pets in data-layer order (newest first)

    Raises:
        FetchError: If the pets collection cannot be read
        InvalidDateError: If as_of is malformed
    """
    today = parse_date(as_of)

    with span("pet_service.list_adoptable_pets"):
        rows = await db_client.fetch_all("pets")

        adoptable = []
        for row in rows:
            if row.get("adopted"):
                continue
            try:
                pet = Pet.model_validate(row)
                age = age_from_birthday(pet.birthday, today)
            except InvalidDateError as e:
                logger.warning(
                    "Skipping pet with invalid dates",
                    extra={"pet_id": row.get("id"), "error": str(e)},
                )
                continue
            adoptable.append(AdoptablePet(pet=pet, age=age, age_label=format_age(age)))

        logger.info("Listed adoptable pets", extra={"count": len(adoptable), "total": len(rows)})
        return adoptable
