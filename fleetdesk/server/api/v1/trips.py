"""
API endpoints for trips and dispatch checks.

Trips book a driver and a vehicle for a client. The time-slot endpoints
report whether a driver or vehicle is already booked for an overlapping
window on a given day.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from fastapi import APIRouter, status

from fleetdesk.core.database.entities import Trip, TripStatus
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import TimeSlotQuery, TripCreate, TripRead, TripStatusUpdate, TripUpdate
from fleetdesk.dispatch import ResourceType, SlotAvailability, slot_availability
from fleetdesk.server.services.deps import ReposDep

logger = get_logger(__name__)

router = APIRouter(tags=["trips"])


async def _require_trip(repos, trip_id: str) -> Trip:
    trip = await repos.trips.get_by_id(trip_id)
    if trip is None:
        raise EntityNotFoundError("Trip", trip_id)
    return trip


async def _check_references(
    repos,
    client_id: Optional[str],
    driver_id: Optional[str],
    vehicle_id: Optional[str],
    extra_driver_ids: Iterable[str] = (),
    extra_vehicle_ids: Iterable[str] = (),
):
    if client_id and await repos.clients.get_by_id(client_id) is None:
        raise EntityNotFoundError("Client", client_id)
    for candidate in [driver_id, *extra_driver_ids]:
        if candidate and await repos.drivers.get_by_id(candidate) is None:
            raise EntityNotFoundError("Driver", candidate)
    for candidate in [vehicle_id, *extra_vehicle_ids]:
        if candidate and await repos.vehicles.get_by_id(candidate) is None:
            raise EntityNotFoundError("Vehicle", candidate)


def _crew(values: dict) -> dict:
    """Carrier drivers plus carrier and escort vehicles named in ``values``."""
    return {
        "extra_driver_ids": values.get("assigned_driver_ids") or [],
        "extra_vehicle_ids": [*(values.get("assigned_vehicle_ids") or []), *(values.get("escort_vehicle_ids") or [])],
    }


@router.post(
    "",
    response_model=TripRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Trip",
    description="Book a trip. Referenced client, drivers and vehicles (including carrier and escort) must exist.",
    responses={
        201: {"description": "Trip created successfully"},
        404: {"description": "Referenced client, driver or vehicle not found"},
    },
)
async def create_trip(payload: TripCreate, repos: ReposDep) -> TripRead:
    await _check_references(
        repos, payload.client_id, payload.driver_id, payload.vehicle_id, **_crew(payload.model_dump())
    )
    trip = await repos.trips.create(Trip.model_validate(payload))
    logger.info(f"Booked trip {trip.id} on {trip.date} {trip.time or ''}".rstrip())
    return TripRead.model_validate(trip)


@router.get(
    "",
    response_model=List[TripRead],
    summary="List Trips",
    description="List trips. A date window returns trips ordered by date; otherwise newest first.",
)
async def list_trips(
    repos: ReposDep,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    driver_id: Optional[str] = None,
    vehicle_id: Optional[str] = None,
    trip_status: Optional[TripStatus] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[TripRead]:
    """
    List trips.

    - **start_date** / **end_date**: Inclusive service date window.
    - **driver_id** / **vehicle_id** / **trip_status**: Equality filters.
    """
    if start_date is not None or end_date is not None:
        trips = await repos.trips.list_between(start_date, end_date)
        trips = [
            t
            for t in trips
            if (driver_id is None or t.driver_id == driver_id)
            and (vehicle_id is None or t.vehicle_id == vehicle_id)
            and (trip_status is None or t.status == trip_status)
        ]
    else:
        filters = {"driver_id": driver_id, "vehicle_id": vehicle_id, "status": trip_status}
        trips = await repos.trips.list(limit=limit, offset=offset, filters=filters)
    return [TripRead.model_validate(t) for t in trips]


@router.get("/{trip_id}", response_model=TripRead, summary="Get Trip")
async def get_trip(trip_id: str, repos: ReposDep) -> TripRead:
    return TripRead.model_validate(await _require_trip(repos, trip_id))


@router.patch(
    "/{trip_id}",
    response_model=TripRead,
    summary="Update Trip",
    responses={404: {"description": "Trip or referenced record not found"}},
)
async def update_trip(trip_id: str, payload: TripUpdate, repos: ReposDep) -> TripRead:
    trip = await _require_trip(repos, trip_id)
    changes = payload.model_dump(exclude_unset=True)
    for field in ("assigned_driver_ids", "assigned_vehicle_ids", "escort_vehicle_ids"):
        if field in changes and changes[field] is None:
            changes[field] = []
    await _check_references(
        repos, changes.get("client_id"), changes.get("driver_id"), changes.get("vehicle_id"), **_crew(changes)
    )
    trip = await repos.trips.apply_changes(trip, changes)
    return TripRead.model_validate(trip)


@router.put("/{trip_id}/status", response_model=TripRead, summary="Update Trip Status")
async def update_trip_status(trip_id: str, payload: TripStatusUpdate, repos: ReposDep) -> TripRead:
    trip = await _require_trip(repos, trip_id)
    trip = await repos.trips.apply_changes(trip, {"status": payload.status})
    logger.info(f"Trip {trip_id} is now {payload.status.value}")
    return TripRead.model_validate(trip)


@router.post(
    "/availability/{resource_type}/{resource_id}",
    response_model=SlotAvailability,
    summary="Check Time Slot",
    description="Check whether a driver or vehicle is free for a booking window on a given day.",
    responses={404: {"description": "Driver or vehicle not found"}},
)
async def check_time_slot(
    resource_type: ResourceType, resource_id: str, query: TimeSlotQuery, repos: ReposDep
) -> SlotAvailability:
    """
    Check a time slot.

    Cancelled trips and the trip given in **exclude_trip_id** are ignored. Without a
    **return_time** the booking is assumed to last two hours.
    """
    if resource_type is ResourceType.DRIVER:
        await _check_references(repos, None, resource_id, None)
        trips = await repos.trips.list_on_date(query.date, driver_id=resource_id)
    else:
        await _check_references(repos, None, None, resource_id)
        trips = await repos.trips.list_on_date(query.date, vehicle_id=resource_id)
    return slot_availability(
        resource_id,
        resource_type,
        query.date,
        query.time,
        trips,
        target_return_time=query.return_time,
        exclude_trip_id=query.exclude_trip_id,
    )


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Trip")
async def delete_trip(trip_id: str, repos: ReposDep) -> None:
    if not await repos.trips.delete(trip_id):
        raise EntityNotFoundError("Trip", trip_id)
