"""Pet dashboard and adoption listing endpoints."""

import logging
from datetime import UTC, date, datetime
from typing import Any, NoReturn

from fastapi import APIRouter, HTTPException, Query

from src.core.care_dates import parse_date
from src.core.config import Constants
from src.core.errors import classify_error_with_response
from src.services import dashboard_service, pet_service


router = APIRouter(prefix="/api/v1/pets", tags=["pets"])
logger = logging.getLogger(__name__)


def _resolve_as_of(as_of: str | None) -> date:
    """Use the requested reference date, or today (UTC) when none is given."""
    if as_of is None:
        return datetime.now(UTC).date()
    return parse_date(as_of)


def _raise_http_error(error: Exception, **context: object) -> NoReturn:
    """Translate a service error into an HTTPException with a structured body."""
    response = classify_error_with_response(error)
    level = logging.ERROR if response.status_code >= Constants.HTTP_SERVER_ERROR else logging.INFO
    logger.log(level, "request_failed", extra={"code": response.code, "error": str(error), **context})
    raise HTTPException(status_code=response.status_code, detail=response.model_dump(mode="json")) from error


@router.get("/adoptable")
async def adoptable_pets(as_of: str | None = Query(default=None)) -> list[dict[str, Any]]:
    """List pets available for adoption with their current ages."""
    try:
        pets = await pet_service.list_adoptable_pets(as_of=_resolve_as_of(as_of))
    except Exception as e:
        _raise_http_error(e)
    return [pet.model_dump(mode="json") for pet in pets]


@router.get("/{pet_id}/dashboard")
async def pet_dashboard(
    pet_id: int,
    as_of: str | None = Query(default=None, description="Reference date (YYYY-MM-DD), defaults to today"),
    preview: int | None = Query(default=None, ge=0, description="Items per section to preview"),
) -> dict[str, Any]:
    """Return the care dashboard snapshot for one pet.

    Args:
        pet_id: ID of the pet
        as_of: Reference date for derived status
        preview: When set, also return each section truncated to this many items

    Returns:
        Snapshot as JSON, with a "previews" key when preview is set

    Raises:
        HTTPException: 404 unknown pet, 422 bad date, 503 data layer failure
    """
    try:
        snapshot = await dashboard_service.build_pet_dashboard(pet_id=pet_id, as_of=_resolve_as_of(as_of))
    except Exception as e:
        _raise_http_error(e, pet_id=pet_id)

    body = snapshot.model_dump(mode="json")
    if preview is not None:
        previews = dashboard_service.dashboard_previews(snapshot, limit=preview)
        body["previews"] = {name: section.model_dump(mode="json") for name, section in previews.items()}
    return body
