"""
Location Service - The consumer-facing API of the location catalog.

Composes LocationStore and AncestorResolver. Callers such as the HTTP
routers only ever talk to this class.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lineage.config.constants import LocationLimits
from lineage.domain import ROOT, ChildOf, LocationDescription, LocationRecord, Parent
from lineage.errors import LocationNotFoundError, LocationValidationError

from .ancestor_resolver import AncestorResolver
from .location_store import LocationStore

logger = logging.getLogger(__name__)


class LocationService:
    """Create, list and describe locations."""

    def __init__(
        self,
        db: AsyncSession,
        max_depth: Optional[int] = None,
        strategy: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.store = LocationStore(db, timeout=timeout)
        self.resolver = AncestorResolver(
            db, max_depth=max_depth, strategy=strategy, timeout=timeout
        )

    # =========================================================================
    # Queries
    # =========================================================================

    async def describe(self, name: str) -> LocationDescription:
        """
        Describe a location and its lineage.

        Args:
            name: Location name (case-sensitive)

        Returns:
            LocationDescription with ancestors ordered nearest first

        Raises:
            LocationNotFoundError: No location with this name
            CycleGuardTrippedError: Ancestor chain exceeds the depth bound
            StorageUnavailableError: Database failure or timeout
        """
        record = await self.store.get_by_name(name)
        if record is None:
            raise LocationNotFoundError(name)

        ancestors = await self.resolver.resolve(name)
        return LocationDescription(
            name=record.name,
            population=record.population,
            ancestors=tuple(ancestors),
        )

    async def list_all(self) -> List[LocationRecord]:
        """Return every location."""
        return await self.store.get_all()

    # =========================================================================
    # Commands
    # =========================================================================

    async def create(
        self,
        name: Any,
        population: Any,
        parent: Any = None,
    ) -> LocationRecord:
        """
        Validate and store a new location.

        Fields arrive as the caller supplied them (possibly missing), so each
        one is checked here before the store is touched.

        Args:
            name: Non-empty string
            population: Integer within the signed 64-bit range; may be negative
            parent: Name of the parent location, or None/blank for a root

        Returns:
            The stored LocationRecord

        Raises:
            LocationValidationError: A field is missing or malformed
            LocationConflictError: The name is already taken
            StorageUnavailableError: Database failure or timeout
        """
        location = LocationRecord(
            name=_validate_name(name),
            population=_validate_population(population),
            parent=_validate_parent(parent),
        )
        await self.store.create(location)
        return location


def _validate_name(name: Any) -> str:
    if name is None:
        raise LocationValidationError("name", "field is required")
    if not isinstance(name, str):
        raise LocationValidationError("name", "must be a string")
    if not name.strip():
        raise LocationValidationError("name", "must not be empty")
    if len(name) > LocationLimits.NAME_MAX_LENGTH:
        raise LocationValidationError(
            "name", f"must be at most {LocationLimits.NAME_MAX_LENGTH} characters"
        )
    return name


def _validate_population(population: Any) -> int:
    if population is None:
        raise LocationValidationError("population", "field is required")
    # bool is an int subclass
    if isinstance(population, bool) or not isinstance(population, int):
        raise LocationValidationError("population", "must be an integer")
    if not LocationLimits.POPULATION_MIN <= population <= LocationLimits.POPULATION_MAX:
        raise LocationValidationError("population", "out of 64-bit integer range")
    return population


def _validate_parent(parent: Any) -> Parent:
    if parent is None:
        return ROOT
    if not isinstance(parent, str):
        raise LocationValidationError("parent", "must be a string")
    if not parent.strip():
        return ROOT
    if len(parent) > LocationLimits.NAME_MAX_LENGTH:
        raise LocationValidationError(
            "parent", f"must be at most {LocationLimits.NAME_MAX_LENGTH} characters"
        )
    return ChildOf(parent)
