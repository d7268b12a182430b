"""Driver and vehicle availability derived from trips.

A trip occupies its drivers and vehicles (primary, carrier and escort) from
pickup time until its expected end. The expected end is the return time when
one is recorded, otherwise pickup time plus a duration that depends on the
service type. Cancelled and completed trips free their resources immediately.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, Field

DEFAULT_DURATION_HOURS = 2.0
DEFAULT_SLOT_HOURS = 2.0

SERVICE_DURATION_HOURS = {
    "airport_pickup": 2.0,
    "airport_dropoff": 2.0,
    "one_way_transfer": 1.5,
    "round_trip": 4.0,
    "full_day": 8.0,
    "half_day": 4.0,
}

NON_BLOCKING_STATUSES = frozenset({"cancelled", "completed"})


class ResourceType(str, Enum):
    DRIVER = "driver"
    VEHICLE = "vehicle"


class ResourceAvailability(BaseModel):
    is_available: bool
    reason: Optional[str] = None
    available_at: Optional[datetime] = None
    conflicting_trip_id: Optional[str] = None


class SlotAvailability(BaseModel):
    is_available: bool
    reason: Optional[str] = None
    conflicts: List[str] = Field(default_factory=list, description="Ids of conflicting trips")


def _value(raw: Any) -> str:
    return str(getattr(raw, "value", raw) or "").strip().lower()


def parse_time(value: Optional[str]) -> time:
    """Parse "HH:MM" (seconds ignored); missing values mean midnight."""
    if not value:
        return time(0, 0)
    parts = value.split(":")
    return time(int(parts[0]), int(parts[1]) if len(parts) > 1 else 0)


def at(day: date, value: Optional[str]) -> datetime:
    return datetime.combine(day, parse_time(value))


def format_clock(moment: datetime) -> str:
    return moment.strftime("%I:%M %p")


def trip_start(trip: Any) -> datetime:
    return at(trip.date, trip.time)


def expected_trip_end(trip: Any, buffer_hours: float = 0.0) -> datetime:
    if trip.return_time:
        end = at(trip.date, trip.return_time)
    else:
        hours = SERVICE_DURATION_HOURS.get(_value(trip.service_type), DEFAULT_DURATION_HOURS)
        end = trip_start(trip) + timedelta(hours=hours)
    return end + timedelta(hours=buffer_hours or 0.0)


def trip_uses(trip: Any, resource_type: ResourceType, resource_id: str) -> bool:
    """Whether ``trip`` books the resource as primary, carrier or escort."""
    if resource_type is ResourceType.DRIVER:
        return trip.driver_id == resource_id or resource_id in (getattr(trip, "assigned_driver_ids", None) or [])
    return (
        trip.vehicle_id == resource_id
        or resource_id in (getattr(trip, "assigned_vehicle_ids", None) or [])
        or resource_id in (getattr(trip, "escort_vehicle_ids", None) or [])
    )


def check_trip_blocks(trip: Any, now: datetime, buffer_hours: float = 0.0) -> ResourceAvailability:
    """Whether ``trip`` keeps its resources busy at ``now``."""
    if _value(trip.status) in NON_BLOCKING_STATUSES:
        return ResourceAvailability(is_available=True)
    if trip.date > now.date():
        return ResourceAvailability(is_available=True)

    start = trip_start(trip)
    end = expected_trip_end(trip)
    available_at = end + timedelta(hours=buffer_hours or 0.0)
    if now >= available_at:
        return ResourceAvailability(is_available=True)

    if trip.date == now.date() and now < start:
        reason = f"Scheduled for trip from {format_clock(start)} to {format_clock(end)}"
    elif trip.date == now.date() and start <= now < end:
        reason = f"Currently on trip (until {format_clock(end)})"
    else:
        reason = f"Unavailable until {format_clock(available_at)}"
    return ResourceAvailability(
        is_available=False, reason=reason, available_at=available_at, conflicting_trip_id=trip.id
    )


def resource_availability(
    resource_id: str,
    resource_type: ResourceType,
    trips: Iterable[Any],
    now: Optional[datetime] = None,
    buffer_hours: float = 0.0,
) -> ResourceAvailability:
    """Availability of a driver or vehicle at ``now``.

    The first blocking trip decides the outcome.
    """
    now = now or datetime.now()
    for trip in trips:
        if not trip_uses(trip, resource_type, resource_id):
            continue
        result = check_trip_blocks(trip, now, buffer_hours)
        if not result.is_available:
            return result
    return ResourceAvailability(is_available=True)


def slot_availability(
    resource_id: str,
    resource_type: ResourceType,
    target_date: date,
    target_time: str,
    trips: Iterable[Any],
    target_return_time: Optional[str] = None,
    exclude_trip_id: Optional[str] = None,
) -> SlotAvailability:
    """Whether a resource is free for a new booking on ``target_date``.

    Without a return time the booking is assumed to last two hours.
    """
    target_start = at(target_date, target_time)
    if target_return_time:
        target_end = at(target_date, target_return_time)
    else:
        target_end = target_start + timedelta(hours=DEFAULT_SLOT_HOURS)

    conflicts: List[str] = []
    for trip in trips:
        if not trip_uses(trip, resource_type, resource_id):
            continue
        if _value(trip.status) == "cancelled" or trip.id == exclude_trip_id:
            continue
        if trip.date != target_date:
            continue
        start = trip_start(trip)
        end = expected_trip_end(trip)
        overlapping = (
            (start <= target_start < end)
            or (start < target_end <= end)
            or (target_start <= start and target_end >= end)
        )
        if overlapping:
            conflicts.append(trip.id)

    if conflicts:
        return SlotAvailability(
            is_available=False, reason=f"Conflicts with {len(conflicts)} existing trip(s)", conflicts=conflicts
        )
    return SlotAvailability(is_available=True)
