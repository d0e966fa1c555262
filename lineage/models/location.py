"""
Location Model - Named place with population and optional parent

Self-referential by name. There is deliberately no foreign key on parent:
a parent may name a location that does not exist yet (or ever).
"""

from typing import Optional

from sqlalchemy import BigInteger, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from lineage.config.constants import LocationLimits

from .base import Base


class Location(Base):
    """A location row."""

    __tablename__ = "locations"

    name: Mapped[str] = mapped_column(
        String(LocationLimits.NAME_MAX_LENGTH), primary_key=True
    )
    population: Mapped[int] = mapped_column(BigInteger, nullable=False)
    parent: Mapped[Optional[str]] = mapped_column(
        String(LocationLimits.NAME_MAX_LENGTH), nullable=True
    )

    __table_args__ = (
        Index("ix_locations_parent", "parent"),
    )

    def __repr__(self) -> str:
        return f"<Location(name={self.name}, population={self.population}, parent={self.parent})>"
