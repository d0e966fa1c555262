"""Tests for LocationService (the query facade)."""
import pytest

from lineage.config.constants import LocationLimits
from lineage.domain import ROOT, ChildOf, LocationDescription, LocationRecord
from lineage.errors import (
    CycleGuardTrippedError,
    LocationConflictError,
    LocationNotFoundError,
    LocationValidationError,
)
from lineage.services import LocationService


@pytest.fixture
def service(db_session):
    return LocationService(db_session)


@pytest.mark.asyncio
async def test_describe_paris_and_france(service):
    await service.create("France", 68000000)
    await service.create("Paris", 2000000, "France")

    assert await service.describe("Paris") == LocationDescription(
        name="Paris", population=2000000, ancestors=("France",)
    )
    assert (await service.describe("France")).ancestors == ()


@pytest.mark.asyncio
async def test_describe_unknown_location_is_not_found(service):
    await service.create("France", 68000000)

    with pytest.raises(LocationNotFoundError) as exc_info:
        await service.describe("Germany")

    assert exc_info.value.name == "Germany"


@pytest.mark.asyncio
async def test_describe_with_dangling_parent(service):
    await service.create("A", 1, "B")
    await service.create("B", 1, "C")

    description = await service.describe("A")

    assert description.ancestors == ("B",)


@pytest.mark.asyncio
async def test_describe_is_idempotent(service):
    await service.create("France", 68000000)
    await service.create("Paris", 2000000, "France")

    first = await service.describe("Paris")
    second = await service.describe("Paris")

    assert first == second


@pytest.mark.asyncio
async def test_describe_cycle_fails_instead_of_truncating(db_session, add_locations):
    await add_locations(("X", 1, "Y"), ("Y", 1, "X"))

    service = LocationService(db_session, max_depth=8)

    with pytest.raises(CycleGuardTrippedError):
        await service.describe("X")


@pytest.mark.asyncio
@pytest.mark.parametrize("strategy", ["recursive", "iterative"])
async def test_describe_with_either_strategy(db_session, strategy):
    service = LocationService(db_session, strategy=strategy)
    await service.create("Europe", 750000000)
    await service.create("France", 68000000, "Europe")
    await service.create("Paris", 2000000, "France")

    assert (await service.describe("Paris")).ancestors == ("France", "Europe")


@pytest.mark.asyncio
async def test_create_returns_record(service):
    record = await service.create("Paris", 2000000, "France")

    assert record == LocationRecord("Paris", 2000000, ChildOf("France"))


@pytest.mark.asyncio
async def test_create_duplicate_conflicts(service):
    await service.create("Paris", 2000000)

    with pytest.raises(LocationConflictError):
        await service.create("Paris", 3)

    assert (await service.describe("Paris")).population == 2000000


@pytest.mark.asyncio
@pytest.mark.parametrize("parent", [None, "", "   "])
async def test_blank_parent_creates_root(service, parent):
    record = await service.create("France", 68000000, parent)

    assert record.parent is ROOT


@pytest.mark.asyncio
@pytest.mark.parametrize("population", [0, -1, LocationLimits.POPULATION_MIN, LocationLimits.POPULATION_MAX])
async def test_population_bounds_accepted(service, population):
    record = await service.create("Somewhere", population)

    assert record.population == population


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name, population, parent, field",
    [
        (None, 1, None, "name"),
        ("", 1, None, "name"),
        ("   ", 1, None, "name"),
        (42, 1, None, "name"),
        ("x" * (LocationLimits.NAME_MAX_LENGTH + 1), 1, None, "name"),
        ("Paris", None, None, "population"),
        ("Paris", "2000000", None, "population"),
        ("Paris", 1.5, None, "population"),
        ("Paris", True, None, "population"),
        ("Paris", LocationLimits.POPULATION_MAX + 1, None, "population"),
        ("Paris", LocationLimits.POPULATION_MIN - 1, None, "population"),
        ("Paris", 1, 7, "parent"),
    ],
)
async def test_create_validation(service, name, population, parent, field):
    with pytest.raises(LocationValidationError) as exc_info:
        await service.create(name, population, parent)

    assert exc_info.value.field == field
    # Nothing was written
    assert await service.list_all() == []


@pytest.mark.asyncio
async def test_list_all(service):
    await service.create("France", 68000000)
    await service.create("Paris", 2000000, "France")

    records = await service.list_all()

    assert records == [
        LocationRecord("France", 68000000, ROOT),
        LocationRecord("Paris", 2000000, ChildOf("France")),
    ]
