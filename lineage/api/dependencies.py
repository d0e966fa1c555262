"""Dependencies for the API routers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lineage.database import get_db
from lineage.services import LocationService


async def get_location_service(db: AsyncSession = Depends(get_db)) -> LocationService:
    """
    FastAPI dependency providing a LocationService bound to the request session.

    Usage:
        @router.get("/locations")
        async def list_locations(service: LocationService = Depends(get_location_service)):
            ...
    """
    return LocationService(db)


__all__ = ["get_db", "get_location_service"]
