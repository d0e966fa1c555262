"""Tests for the location HTTP endpoints."""
import pytest
from httpx import ASGITransport, AsyncClient

from lineage.api.main import app
from lineage.database import get_db


@pytest.fixture
async def client(session_factory):
    """HTTP client against the app, with each request on the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_create_location(client):
    response = await client.post(
        "/api/locations", json={"name": "Paris", "population": 2000000, "parent": "France"}
    )

    assert response.status_code == 201
    assert response.json() == {"name": "Paris", "population": 2000000, "parent": "France"}


@pytest.mark.asyncio
async def test_create_root_location(client):
    response = await client.post("/api/locations", json={"name": "France", "population": 68000000})

    assert response.status_code == 201
    assert response.json()["parent"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"population": 1},
        {"name": "Paris"},
        {"name": "", "population": 1},
        {},
    ],
)
async def test_create_missing_fields_is_bad_request(client, payload):
    response = await client.post("/api/locations", json=payload)

    assert response.status_code == 400
    assert "detail" in response.json()


@pytest.mark.asyncio
async def test_create_malformed_population_is_bad_request(client):
    response = await client.post("/api/locations", json={"name": "Paris", "population": "many"})

    assert response.status_code == 400
    assert "population" in response.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.parametrize("population", [True, "42", 3.0])
async def test_create_population_is_not_coerced(client, population):
    response = await client.post("/api/locations", json={"name": "X", "population": population})

    assert response.status_code == 400
    assert "population" in response.json()["detail"]

    listing = await client.get("/api/locations")
    assert listing.json() == []


@pytest.mark.asyncio
async def test_create_duplicate_is_conflict(client):
    await client.post("/api/locations", json={"name": "Paris", "population": 2000000})

    response = await client.post("/api/locations", json={"name": "Paris", "population": 1})

    assert response.status_code == 409
    assert "Paris" in response.json()["detail"]


@pytest.mark.asyncio
async def test_list_locations(client, add_locations):
    await add_locations(("Paris", 2000000, "France"), ("France", 68000000, None))

    response = await client.get("/api/locations")

    assert response.status_code == 200
    assert response.json() == [
        {"name": "France", "population": 68000000, "parent": None},
        {"name": "Paris", "population": 2000000, "parent": "France"},
    ]


@pytest.mark.asyncio
async def test_describe_location(client, add_locations):
    await add_locations(("Paris", 2000000, "France"), ("France", 68000000, None))

    response = await client.get("/api/locations/Paris")

    assert response.status_code == 200
    assert response.json() == {"name": "Paris", "population": 2000000, "ancestors": ["France"]}


@pytest.mark.asyncio
async def test_describe_root(client, add_locations):
    await add_locations(("France", 68000000, None))

    response = await client.get("/api/locations/France")

    assert response.json()["ancestors"] == []


@pytest.mark.asyncio
async def test_describe_unknown_is_not_found(client, add_locations):
    await add_locations(("France", 68000000, None))

    response = await client.get("/api/locations/Germany")

    assert response.status_code == 404
    assert "Germany" in response.json()["detail"]


@pytest.mark.asyncio
async def test_describe_by_query_parameter(client, add_locations):
    await add_locations(("Paris", 2000000, "France"), ("France", 68000000, None))

    response = await client.get("/api/location", params={"name": "Paris"})

    assert response.status_code == 200
    assert response.json()["ancestors"] == ["France"]


@pytest.mark.asyncio
async def test_describe_by_query_without_name_is_bad_request(client):
    response = await client.get("/api/location")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_describe_cycle_is_internal_error(client, add_locations):
    await add_locations(("X", 1, "Y"), ("Y", 1, "X"))

    response = await client.get("/api/locations/X")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_trace_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Trace-ID": "trace-1234"})

    assert response.headers["X-Trace-ID"] == "trace-1234"


@pytest.mark.asyncio
async def test_trace_id_is_generated(client):
    response = await client.get("/")

    assert len(response.headers["X-Trace-ID"]) == 16


@pytest.mark.asyncio
async def test_metrics_exposes_request_counters(client):
    await client.get("/api/locations")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "lineage_api_requests_total" in response.text
    assert 'endpoint="/api/locations"' in response.text


@pytest.mark.asyncio
async def test_metrics_label_unmatched_paths_with_one_value(client):
    await client.get("/no/such/path-1")
    await client.get("/no/such/path-2")

    response = await client.get("/metrics")

    assert 'endpoint="unmatched"' in response.text
    assert "/no/such/path" not in response.text
