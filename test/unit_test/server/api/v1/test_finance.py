"""API tests for the financial dashboard."""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from test.unit_test.server.conftest import create

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def activity(client: AsyncClient, api_vehicle):
    vehicle_id = api_vehicle["id"]
    await create(client, "/api/v1/trips", {"date": "2025-03-15", "vehicle_id": vehicle_id, "amount": 250})
    await create(client, "/api/v1/trips", {"date": "2025-04-02", "vehicle_id": vehicle_id, "amount": 100})
    await create(
        client,
        "/api/v1/maintenance",
        {"vehicle_id": vehicle_id, "date": "2025-03-10", "description": "Service", "cost": 200, "status": "completed"},
    )
    await create(
        client,
        "/api/v1/maintenance",
        {"vehicle_id": vehicle_id, "date": "2025-03-20", "description": "Tyres", "cost": 900},
    )
    await create(client, "/api/v1/fuel-logs", {"vehicle_id": vehicle_id, "date": "2025-03-02", "volume": 60, "cost": 85})


async def test_summary_for_window(client: AsyncClient, activity):
    response = await client.get("/api/v1/finance/summary", params={"start_date": "2025-03-01", "end_date": "2025-03-31"})

    assert response.status_code == 200
    body = response.json()
    assert body["total_revenue"] == 250
    assert body["maintenance_costs"] == 200
    assert body["fuel_costs"] == 85
    assert body["total_expenses"] == 285
    assert body["profit"] == -35
    assert body["profit_margin"] == pytest.approx(-14.0)
    assert body["trip_count"] == 1
    assert [m["key"] for m in body["monthly"]] == ["2025-03"]
    assert body["monthly"][0]["month"] == "Mar 2025"


async def test_summary_without_window(client: AsyncClient, activity):
    body = (await client.get("/api/v1/finance/summary")).json()

    assert body["trip_revenue"] == 350
    assert body["average_trip_revenue"] == 175
    assert body["revenue_breakdown"] == {"trips": 350, "vehicle_leases": 0}
    assert [m["key"] for m in body["monthly"]] == ["2025-03", "2025-04"]


async def test_totals(client: AsyncClient, activity):
    body = (await client.get("/api/v1/finance/totals")).json()

    assert body["key"] == "total"
    assert body["revenue"] == 350
    assert body["expenses"] == 285
    assert body["profit"] == 65


async def test_empty_ledger(client: AsyncClient):
    body = (await client.get("/api/v1/finance/summary")).json()

    assert body["total_revenue"] == 0
    assert body["profit_margin"] == 0
    assert body["monthly"] == []


@pytest.mark.parametrize("path", ["/api/v1/finance/summary", "/api/v1/finance/totals"])
async def test_inverted_window(client: AsyncClient, path):
    response = await client.get(path, params={"start_date": "2025-03-31", "end_date": "2025-03-01"})

    assert response.status_code == 422
    assert response.json()["detail"] == "end_date must not be before start_date"
