"""
Error taxonomy for the location lineage service.

Every failure the core reports derives from LocationServiceError. The API
layer maps each class to an HTTP status; nothing here is retried internally.
"""


class LocationServiceError(Exception):
    """Base class for all location service failures."""


class LocationNotFoundError(LocationServiceError):
    """The requested location does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Location {name!r} not found")
        self.name = name


class LocationConflictError(LocationServiceError):
    """A location with the same name already exists."""

    def __init__(self, name: str):
        super().__init__(f"Location {name!r} already exists")
        self.name = name


class LocationValidationError(LocationServiceError):
    """A required field is missing or malformed on create."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid {field}: {reason}")
        self.field = field
        self.reason = reason


class StorageUnavailableError(LocationServiceError):
    """The backing store failed, was unreachable, or timed out."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Storage unavailable during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class CycleGuardTrippedError(StorageUnavailableError):
    """Ancestor traversal exceeded the maximum depth, most likely a parent cycle."""

    def __init__(self, name: str, max_depth: int):
        super().__init__(
            "resolve_ancestors",
            f"ancestor chain of {name!r} exceeds {max_depth} levels (parent cycle?)",
        )
        self.name = name
        self.max_depth = max_depth
