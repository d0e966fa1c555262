"""
API Schemas (Pydantic Models)

Defines request/response schemas for the location endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from lineage.domain import LocationDescription, LocationRecord


# =============================================================================
# LOCATION SCHEMAS
# =============================================================================


class LocationCreate(BaseModel):
    """
    Create a new location.

    Fields are optional at the schema level; LocationService reports a
    missing name or population as a validation failure.
    """

    name: Optional[str] = Field(None, description="Unique, case-sensitive location name")
    # Strict: JSON booleans, numeric strings and floats are rejected, not coerced
    population: Optional[StrictInt] = Field(None, description="Population (may be zero or negative)")
    parent: Optional[str] = Field(None, description="Name of the parent location; omit for a root")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Paris", "population": 2000000, "parent": "France"}
        }
    )


class LocationResponse(BaseModel):
    """A stored location."""

    name: str
    population: int
    parent: Optional[str] = None

    @classmethod
    def from_record(cls, record: LocationRecord) -> "LocationResponse":
        return cls(name=record.name, population=record.population, parent=record.parent_name)


class LocationDescriptionResponse(BaseModel):
    """A location with its ancestor chain, nearest ancestor first."""

    name: str
    population: int
    ancestors: List[str] = Field(default_factory=list)

    @classmethod
    def from_description(cls, description: LocationDescription) -> "LocationDescriptionResponse":
        return cls(
            name=description.name,
            population=description.population,
            ancestors=list(description.ancestors),
        )


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    detail: str
