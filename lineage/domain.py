"""
Location value types.

These are the immutable values handed to callers. ORM rows never leave the
store; they are converted with LocationRecord.from_row().

The parent reference is a sum type: ROOT for a location without a parent,
ChildOf(name) otherwise. The database keeps it as a nullable string column.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Root:
    """Marks a location without a parent."""

    def __repr__(self) -> str:
        return "ROOT"


ROOT = Root()


@dataclass(frozen=True)
class ChildOf:
    """Parent reference by name. The named location may not exist."""

    name: str


Parent = Union[Root, ChildOf]


def parent_from_column(value: Optional[str]) -> Parent:
    """Convert the nullable parent column to a Parent."""
    if value is None:
        return ROOT
    return ChildOf(value)


def parent_to_column(parent: Parent) -> Optional[str]:
    """Convert a Parent to the nullable parent column."""
    if isinstance(parent, ChildOf):
        return parent.name
    return None


@dataclass(frozen=True)
class LocationRecord:
    """A stored location."""

    name: str
    population: int
    parent: Parent = ROOT

    @property
    def is_root(self) -> bool:
        return isinstance(self.parent, Root)

    @property
    def parent_name(self) -> Optional[str]:
        return parent_to_column(self.parent)

    @classmethod
    def from_row(cls, row) -> "LocationRecord":
        """Build from any object with name, population and parent attributes."""
        return cls(
            name=row.name,
            population=row.population,
            parent=parent_from_column(row.parent),
        )


@dataclass(frozen=True)
class LocationDescription:
    """A location together with its ancestor chain, nearest ancestor first."""

    name: str
    population: int
    ancestors: tuple[str, ...] = ()
