"""
API endpoints for managing fleet vehicles.

Provides CRUD operations for vehicles plus image upload to file storage.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, File, UploadFile, status

from fleetdesk.core.database.entities import Vehicle, VehicleStatus
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import VehicleCreate, VehicleRead, VehicleUpdate
from fleetdesk.dispatch import ResourceAvailability, ResourceType, resource_availability
from fleetdesk.server.services.deps import ReposDep, StorageDep

logger = get_logger(__name__)

router = APIRouter(tags=["vehicles"])


async def _require_vehicle(repos, vehicle_id: str) -> Vehicle:
    vehicle = await repos.vehicles.get_by_id(vehicle_id)
    if vehicle is None:
        raise EntityNotFoundError("Vehicle", vehicle_id)
    return vehicle


@router.post(
    "",
    response_model=VehicleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Vehicle",
    description="Register a new vehicle in the fleet.",
    responses={
        201: {"description": "Vehicle created successfully"},
        422: {"description": "Invalid vehicle data"},
    },
)
async def create_vehicle(payload: VehicleCreate, repos: ReposDep) -> VehicleRead:
    vehicle = await repos.vehicles.create(Vehicle.model_validate(payload))
    logger.info(f"Registered vehicle {vehicle.registration} ({vehicle.id})")
    return VehicleRead.model_validate(vehicle)


@router.get(
    "",
    response_model=List[VehicleRead],
    summary="List Vehicles",
    description="List vehicles, newest first, optionally filtered by status.",
)
async def list_vehicles(
    repos: ReposDep,
    vehicle_status: Optional[VehicleStatus] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[VehicleRead]:
    """
    List vehicles.

    - **vehicle_status**: Only return vehicles in this status.
    - **limit** / **offset**: Pagination window.
    """
    vehicles = await repos.vehicles.list(limit=limit, offset=offset, filters={"status": vehicle_status})
    return [VehicleRead.model_validate(v) for v in vehicles]


@router.get(
    "/{vehicle_id}",
    response_model=VehicleRead,
    summary="Get Vehicle",
    responses={404: {"description": "Vehicle not found"}},
)
async def get_vehicle(vehicle_id: str, repos: ReposDep) -> VehicleRead:
    return VehicleRead.model_validate(await _require_vehicle(repos, vehicle_id))


@router.get(
    "/{vehicle_id}/availability",
    response_model=ResourceAvailability,
    summary="Get Vehicle Availability",
    description="Whether the vehicle is free right now, and if not, when it becomes available.",
    responses={404: {"description": "Vehicle not found"}},
)
async def get_vehicle_availability(
    vehicle_id: str, repos: ReposDep, buffer_hours: float = 0.0
) -> ResourceAvailability:
    await _require_vehicle(repos, vehicle_id)
    trips = await repos.trips.list_for_vehicle(vehicle_id, active_only=True)
    return resource_availability(vehicle_id, ResourceType.VEHICLE, trips, buffer_hours=buffer_hours)


@router.patch(
    "/{vehicle_id}",
    response_model=VehicleRead,
    summary="Update Vehicle",
    description="Update vehicle fields. Only provided fields are changed.",
    responses={404: {"description": "Vehicle not found"}},
)
async def update_vehicle(vehicle_id: str, payload: VehicleUpdate, repos: ReposDep) -> VehicleRead:
    vehicle = await _require_vehicle(repos, vehicle_id)
    vehicle = await repos.vehicles.apply_changes(vehicle, payload.model_dump(exclude_unset=True))
    return VehicleRead.model_validate(vehicle)


@router.post(
    "/{vehicle_id}/image",
    response_model=VehicleRead,
    summary="Upload Vehicle Image",
    description="Store an image for the vehicle and replace any previous one.",
    responses={
        404: {"description": "Vehicle not found"},
        400: {"description": "Empty or oversized upload"},
    },
)
async def upload_vehicle_image(
    vehicle_id: str, repos: ReposDep, storage: StorageDep, file: UploadFile = File(...)
) -> VehicleRead:
    vehicle = await _require_vehicle(repos, vehicle_id)
    previous = vehicle.image_url
    url = await storage.save_upload("vehicles", file)
    vehicle = await repos.vehicles.apply_changes(vehicle, {"image_url": url})
    storage.delete_by_url(previous)
    return VehicleRead.model_validate(vehicle)


@router.delete(
    "/{vehicle_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Vehicle",
    responses={404: {"description": "Vehicle not found"}},
)
async def delete_vehicle(vehicle_id: str, repos: ReposDep, storage: StorageDep) -> None:
    vehicle = await _require_vehicle(repos, vehicle_id)
    image_url = vehicle.image_url
    await repos.vehicles.delete(vehicle_id)
    storage.delete_by_url(image_url)
