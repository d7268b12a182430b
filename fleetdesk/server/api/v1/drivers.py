"""
API endpoints for managing drivers.

Besides CRUD, drivers carry an avatar image and a scanned license document,
both stored through file storage.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, File, UploadFile, status

from fleetdesk.core.database.entities import Driver, DriverStatus
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.models.io import DriverCreate, DriverRead, DriverUpdate
from fleetdesk.dispatch import ResourceAvailability, ResourceType, resource_availability
from fleetdesk.server.services.deps import ReposDep, StorageDep

router = APIRouter(tags=["drivers"])


async def _require_driver(repos, driver_id: str) -> Driver:
    driver = await repos.drivers.get_by_id(driver_id)
    if driver is None:
        raise EntityNotFoundError("Driver", driver_id)
    return driver


@router.post(
    "",
    response_model=DriverRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Driver",
    responses={201: {"description": "Driver created successfully"}},
)
async def create_driver(payload: DriverCreate, repos: ReposDep) -> DriverRead:
    driver = await repos.drivers.create(Driver.model_validate(payload))
    return DriverRead.model_validate(driver)


@router.get("", response_model=List[DriverRead], summary="List Drivers")
async def list_drivers(
    repos: ReposDep,
    driver_status: Optional[DriverStatus] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[DriverRead]:
    drivers = await repos.drivers.list(limit=limit, offset=offset, filters={"status": driver_status})
    return [DriverRead.model_validate(d) for d in drivers]


@router.get(
    "/{driver_id}",
    response_model=DriverRead,
    summary="Get Driver",
    responses={404: {"description": "Driver not found"}},
)
async def get_driver(driver_id: str, repos: ReposDep) -> DriverRead:
    return DriverRead.model_validate(await _require_driver(repos, driver_id))


@router.get(
    "/{driver_id}/availability",
    response_model=ResourceAvailability,
    summary="Get Driver Availability",
    description="Whether the driver is free right now, and if not, when they become available.",
    responses={404: {"description": "Driver not found"}},
)
async def get_driver_availability(driver_id: str, repos: ReposDep, buffer_hours: float = 0.0) -> ResourceAvailability:
    """
    Check driver availability.

    Scheduled and in-progress trips of the driver are inspected; the first trip
    that keeps the driver busy decides the answer.

    - **buffer_hours**: Rest time added after the expected end of a trip.
    """
    await _require_driver(repos, driver_id)
    trips = await repos.trips.list_for_driver(driver_id, active_only=True)
    return resource_availability(driver_id, ResourceType.DRIVER, trips, buffer_hours=buffer_hours)


@router.patch(
    "/{driver_id}",
    response_model=DriverRead,
    summary="Update Driver",
    responses={404: {"description": "Driver not found"}},
)
async def update_driver(driver_id: str, payload: DriverUpdate, repos: ReposDep) -> DriverRead:
    driver = await _require_driver(repos, driver_id)
    driver = await repos.drivers.apply_changes(driver, payload.model_dump(exclude_unset=True))
    return DriverRead.model_validate(driver)


@router.post("/{driver_id}/avatar", response_model=DriverRead, summary="Upload Driver Avatar")
async def upload_driver_avatar(
    driver_id: str, repos: ReposDep, storage: StorageDep, file: UploadFile = File(...)
) -> DriverRead:
    driver = await _require_driver(repos, driver_id)
    previous = driver.avatar_url
    url = await storage.save_upload("avatars", file)
    driver = await repos.drivers.apply_changes(driver, {"avatar_url": url})
    storage.delete_by_url(previous)
    return DriverRead.model_validate(driver)


@router.post("/{driver_id}/document", response_model=DriverRead, summary="Upload Driver License Document")
async def upload_driver_document(
    driver_id: str, repos: ReposDep, storage: StorageDep, file: UploadFile = File(...)
) -> DriverRead:
    driver = await _require_driver(repos, driver_id)
    previous = driver.document_url
    url = await storage.save_upload("documents", file)
    driver = await repos.drivers.apply_changes(driver, {"document_url": url})
    storage.delete_by_url(previous)
    return DriverRead.model_validate(driver)


@router.delete(
    "/{driver_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Driver",
    responses={404: {"description": "Driver not found"}},
)
async def delete_driver(driver_id: str, repos: ReposDep, storage: StorageDep) -> None:
    driver = await _require_driver(repos, driver_id)
    urls = (driver.avatar_url, driver.document_url)
    await repos.drivers.delete(driver_id)
    for url in urls:
        storage.delete_by_url(url)
