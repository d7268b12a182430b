"""
API endpoints for vehicle maintenance.

Creating or updating a record as ``completed`` consumes the spare parts it
lists and schedules a follow-up when ``next_scheduled`` is set. The
``/complete`` endpoint does the same for a record that was planned earlier.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, status

from fleetdesk.core.database.entities import MaintenanceStatus
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.models.io import (
    MaintenanceCompletion,
    MaintenanceCompletionResult,
    MaintenanceCreate,
    MaintenanceRead,
    MaintenanceUpdate,
)
from fleetdesk.server.services.deps import ReposDep
from fleetdesk.server.services.maintenance_workflow import MaintenanceWorkflow

router = APIRouter(tags=["maintenance"])


@router.post(
    "",
    response_model=MaintenanceCompletionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Maintenance Record",
    description="Create a maintenance record. Completed records consume the listed spare parts.",
    responses={
        201: {"description": "Maintenance record created"},
        404: {"description": "Vehicle or spare part not found"},
    },
)
async def create_maintenance(payload: MaintenanceCreate, repos: ReposDep) -> MaintenanceCompletionResult:
    return await MaintenanceWorkflow(repos).create(payload)


@router.get("", response_model=List[MaintenanceRead], summary="List Maintenance Records")
async def list_maintenance(
    repos: ReposDep,
    vehicle_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    maintenance_status: Optional[MaintenanceStatus] = None,
) -> List[MaintenanceRead]:
    """
    List maintenance records, newest service date first.

    - **vehicle_id**: Only records of this vehicle.
    - **start_date** / **end_date**: Inclusive service date window.
    - **maintenance_status**: Only records in this status.
    """
    if vehicle_id:
        records = [
            r
            for r in await repos.maintenance.list_for_vehicle(vehicle_id)
            if (start_date is None or r.date >= start_date)
            and (end_date is None or r.date <= end_date)
            and (maintenance_status is None or r.status == maintenance_status)
        ]
    else:
        records = await repos.maintenance.list_between(start_date, end_date, maintenance_status)
    return [MaintenanceRead.model_validate(r) for r in records]


@router.get("/{maintenance_id}", response_model=MaintenanceRead, summary="Get Maintenance Record")
async def get_maintenance(maintenance_id: str, repos: ReposDep) -> MaintenanceRead:
    record = await repos.maintenance.get_by_id(maintenance_id)
    if record is None:
        raise EntityNotFoundError("Maintenance record", maintenance_id)
    return MaintenanceRead.model_validate(record)


@router.patch("/{maintenance_id}", response_model=MaintenanceCompletionResult, summary="Update Maintenance Record")
async def update_maintenance(
    maintenance_id: str, payload: MaintenanceUpdate, repos: ReposDep
) -> MaintenanceCompletionResult:
    return await MaintenanceWorkflow(repos).update(maintenance_id, payload)


@router.post(
    "/{maintenance_id}/complete",
    response_model=MaintenanceCompletionResult,
    summary="Complete Maintenance",
    description="Mark a record completed, consume its spare parts and schedule any follow-up service.",
    responses={
        404: {"description": "Maintenance record or spare part not found"},
        422: {"description": "Record already completed"},
    },
)
async def complete_maintenance(
    maintenance_id: str, completion: MaintenanceCompletion, repos: ReposDep
) -> MaintenanceCompletionResult:
    return await MaintenanceWorkflow(repos).complete(maintenance_id, completion)


@router.delete("/{maintenance_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Maintenance Record")
async def delete_maintenance(maintenance_id: str, repos: ReposDep) -> None:
    if not await repos.maintenance.delete(maintenance_id):
        raise EntityNotFoundError("Maintenance record", maintenance_id)
