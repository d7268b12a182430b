"""
API endpoints for fuel logs.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, status

from fleetdesk.core.database.entities import FuelLog
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.models.io import FuelLogCreate, FuelLogRead, FuelLogUpdate
from fleetdesk.server.services.deps import ReposDep

router = APIRouter(tags=["fuel-logs"])


@router.post("", response_model=FuelLogRead, status_code=status.HTTP_201_CREATED, summary="Create Fuel Log")
async def create_fuel_log(payload: FuelLogCreate, repos: ReposDep) -> FuelLogRead:
    if await repos.vehicles.get_by_id(payload.vehicle_id) is None:
        raise EntityNotFoundError("Vehicle", payload.vehicle_id)
    log = FuelLog.model_validate(payload)
    if log.price_per_liter is None and log.volume:
        log.price_per_liter = round(log.cost / log.volume, 3)
    return FuelLogRead.model_validate(await repos.fuel_logs.create(log))


@router.get("", response_model=List[FuelLogRead], summary="List Fuel Logs")
async def list_fuel_logs(
    repos: ReposDep,
    vehicle_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[FuelLogRead]:
    logs = await repos.fuel_logs.list_between(start_date, end_date)
    if vehicle_id:
        logs = [log for log in logs if log.vehicle_id == vehicle_id]
    return [FuelLogRead.model_validate(log) for log in logs]


@router.get("/{log_id}", response_model=FuelLogRead, summary="Get Fuel Log")
async def get_fuel_log(log_id: str, repos: ReposDep) -> FuelLogRead:
    log = await repos.fuel_logs.get_by_id(log_id)
    if log is None:
        raise EntityNotFoundError("Fuel log", log_id)
    return FuelLogRead.model_validate(log)


@router.patch("/{log_id}", response_model=FuelLogRead, summary="Update Fuel Log")
async def update_fuel_log(log_id: str, payload: FuelLogUpdate, repos: ReposDep) -> FuelLogRead:
    log = await repos.fuel_logs.get_by_id(log_id)
    if log is None:
        raise EntityNotFoundError("Fuel log", log_id)
    log = await repos.fuel_logs.apply_changes(log, payload.model_dump(exclude_unset=True))
    return FuelLogRead.model_validate(log)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Fuel Log")
async def delete_fuel_log(log_id: str, repos: ReposDep) -> None:
    if not await repos.fuel_logs.delete(log_id):
        raise EntityNotFoundError("Fuel log", log_id)
