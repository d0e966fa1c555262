"""
Location endpoints.

List, create and describe locations. All work is delegated to
LocationService; domain errors are turned into HTTP responses by the
exception handlers registered in lineage.api.main.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from lineage.services import LocationService

from ..dependencies import get_location_service
from ..schemas import (
    ErrorResponse,
    LocationCreate,
    LocationDescriptionResponse,
    LocationResponse,
)

router = APIRouter(prefix="/api", tags=["locations"])


@router.get("/locations", response_model=List[LocationResponse])
async def list_locations(
    service: LocationService = Depends(get_location_service),
):
    """
    List every location.

    Returns name, population and parent (null for roots) for each stored
    location, ordered by name.
    """
    records = await service.list_all()
    return [LocationResponse.from_record(record) for record in records]


@router.post(
    "/locations",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or malformed field"},
        409: {"model": ErrorResponse, "description": "Location already exists"},
    },
)
async def create_location(
    payload: LocationCreate,
    service: LocationService = Depends(get_location_service),
):
    """
    Create a location.

    `name` and `population` are required. `parent` may be omitted to create
    a root. The parent does not have to exist.
    """
    record = await service.create(payload.name, payload.population, payload.parent)
    return LocationResponse.from_record(record)


@router.get(
    "/locations/{name}",
    response_model=LocationDescriptionResponse,
    responses={404: {"model": ErrorResponse, "description": "Location not found"}},
)
async def get_location(
    name: str,
    service: LocationService = Depends(get_location_service),
):
    """
    Describe a location and its ancestors.

    Ancestors run from the immediate parent up to the root. The chain stops
    early, without error, at a parent that does not exist.
    """
    description = await service.describe(name)
    return LocationDescriptionResponse.from_description(description)


@router.get(
    "/location",
    response_model=LocationDescriptionResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing name parameter"},
        404: {"model": ErrorResponse, "description": "Location not found"},
    },
)
async def get_location_by_query(
    name: Optional[str] = Query(None, description="Location name"),
    service: LocationService = Depends(get_location_service),
):
    """Describe a location named by the `name` query parameter."""
    if not name:
        raise HTTPException(status_code=400, detail="Query parameter 'name' is required")
    description = await service.describe(name)
    return LocationDescriptionResponse.from_description(description)
