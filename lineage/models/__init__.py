"""Database models module."""

from .base import Base, metadata
from .location import Location

__all__ = ["Base", "metadata", "Location"]
