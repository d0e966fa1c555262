"""Tests for JSON seeding."""
import json

import pytest

from lineage.seed import load_entries, seed_locations
from lineage.services import LocationService


def test_load_entries(tmp_path):
    path = tmp_path / "locations.json"
    path.write_text(json.dumps([{"name": "France", "population": 68000000}]), encoding="utf-8")

    assert load_entries(path) == [{"name": "France", "population": 68000000}]


@pytest.mark.parametrize("content", ['{"name": "France"}', '[1, 2]'])
def test_load_entries_rejects_wrong_shape(tmp_path, content):
    path = tmp_path / "locations.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        load_entries(path)


@pytest.mark.asyncio
async def test_seed_counts_outcomes(db_session):
    service = LocationService(db_session)
    await service.create("France", 1)

    report = await seed_locations(
        service,
        [
            {"name": "Paris", "population": 2000000, "parent": "France"},
            {"name": "France", "population": 68000000},
            {"name": "Nowhere"},
        ],
    )

    assert report.created == ["Paris"]
    assert report.conflicts == ["France"]
    assert report.invalid == ["Nowhere"]
    assert report.total == 3
    assert (await service.describe("Paris")).ancestors == ("France",)
