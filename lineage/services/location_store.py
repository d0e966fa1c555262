"""
Location Store - Persistence and lookup of location records.

Provides:
- Insert with uniqueness enforced by the primary key
- Point lookup by name
- Full scan

Rows are converted to frozen LocationRecord values before they are returned,
so callers never hold live ORM objects.
"""

import logging
from typing import List, Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lineage.config import settings
from lineage.database import guarded
from lineage.domain import LocationRecord, parent_to_column
from lineage.errors import LocationConflictError
from lineage.models import Location

logger = logging.getLogger(__name__)


class LocationStore:
    """Service for location table operations."""

    def __init__(self, db: AsyncSession, timeout: Optional[float] = None):
        self.db = db
        self.timeout = timeout if timeout is not None else settings.DB_QUERY_TIMEOUT

    async def create(self, location: LocationRecord) -> None:
        """
        Insert a new location and commit.

        Raises:
            LocationConflictError: A location with this name already exists
            StorageUnavailableError: Database failure or timeout
        """
        stmt = insert(Location).values(
            name=location.name,
            population=location.population,
            parent=parent_to_column(location.parent),
        )
        try:
            await guarded("create", self._execute_and_commit(stmt), self.timeout)
        except IntegrityError:
            await self.db.rollback()
            logger.info(f"Location already exists: {location.name}")
            raise LocationConflictError(location.name) from None

        logger.info(
            "Created location",
            extra={
                "location": location.name,
                "population": location.population,
                "parent": location.parent_name,
            },
        )

    async def _execute_and_commit(self, stmt) -> None:
        await self.db.execute(stmt)
        await self.db.commit()

    async def get_all(self) -> List[LocationRecord]:
        """Return every stored location, ordered by name."""
        result = await guarded(
            "get_all",
            self.db.execute(select(Location).order_by(Location.name)),
            self.timeout,
        )
        return [LocationRecord.from_row(row) for row in result.scalars().all()]

    async def get_by_name(self, name: str) -> Optional[LocationRecord]:
        """Return the location with this name, or None if absent."""
        result = await guarded(
            "get_by_name",
            self.db.execute(
                select(Location.name, Location.population, Location.parent)
                .where(Location.name == name)
            ),
            self.timeout,
        )
        row = result.one_or_none()
        if row is None:
            return None
        return LocationRecord.from_row(row)
