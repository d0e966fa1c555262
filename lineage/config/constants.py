"""
Shared configuration constants for the location lineage service.

Fixed limits of the location data model and default timeouts. Values that
operators tune per deployment live in settings.py instead.

Usage:
    from lineage.config.constants import LocationLimits

    if len(name) > LocationLimits.NAME_MAX_LENGTH:
        ...
"""

import os


class LocationLimits:
    """Bounds of the Location data model."""

    NAME_MAX_LENGTH = 255
    """Maximum length of a location name (primary key column width)."""

    POPULATION_MIN = -(2**63)
    """Smallest population storable in a BIGINT column."""

    POPULATION_MAX = 2**63 - 1
    """Largest population storable in a BIGINT column."""


class Timeouts:
    """Operation timeout defaults (in seconds)."""

    DB_QUERY = 10.0
    """Default for DB_QUERY_TIMEOUT: one store operation or ancestor resolution."""

    WEBSOCKET_SEND = float(os.getenv("WEBSOCKET_SEND_TIMEOUT", "5.0"))
    """Timeout for pushing a single WebSocket frame."""
