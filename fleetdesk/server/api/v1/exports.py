"""
CSV export endpoints for maintenance records, trips and fuel logs.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Response

from fleetdesk.core.database.entities import MaintenanceStatus
from fleetdesk.documents import attachment_headers, fuel_logs_csv, maintenance_csv, trips_csv
from fleetdesk.server.services.deps import ReposDep

router = APIRouter(tags=["exports"])

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _csv_response(content: str, prefix: str) -> Response:
    filename = f"{prefix}-{date.today().isoformat()}.csv"
    return Response(content=content, media_type=CSV_MEDIA_TYPE, headers=attachment_headers(filename))


@router.get("/maintenance", response_class=Response, summary="Export Maintenance Records")
async def export_maintenance(
    repos: ReposDep,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    maintenance_status: Optional[MaintenanceStatus] = None,
) -> Response:
    records = await repos.maintenance.list_between(start_date, end_date, maintenance_status)
    vehicles = await repos.vehicles.get_many(r.vehicle_id for r in records)
    return _csv_response(maintenance_csv(records, vehicles), "maintenance-records")


@router.get("/trips", response_class=Response, summary="Export Trips")
async def export_trips(
    repos: ReposDep, start_date: Optional[date] = None, end_date: Optional[date] = None
) -> Response:
    trips = await repos.trips.list_between(start_date, end_date)
    vehicles = await repos.vehicles.get_many(t.vehicle_id for t in trips)
    return _csv_response(trips_csv(trips, vehicles), "trips")


@router.get("/fuel-logs", response_class=Response, summary="Export Fuel Logs")
async def export_fuel_logs(
    repos: ReposDep, start_date: Optional[date] = None, end_date: Optional[date] = None
) -> Response:
    logs = await repos.fuel_logs.list_between(start_date, end_date)
    vehicles = await repos.vehicles.get_many(log.vehicle_id for log in logs)
    return _csv_response(fuel_logs_csv(logs, vehicles), "fuel-logs")
