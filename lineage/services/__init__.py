# Services package for location business logic

from .ancestor_resolver import AncestorResolver
from .location_service import LocationService
from .location_store import LocationStore

__all__ = ["AncestorResolver", "LocationService", "LocationStore"]
