"""Configuration management module."""

from .settings import Settings, settings
from .constants import LocationLimits, Timeouts

__all__ = [
    "Settings",
    "settings",
    "LocationLimits",
    "Timeouts",
]
