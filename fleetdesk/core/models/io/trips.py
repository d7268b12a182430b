"""
Trip I/O models for API requests and responses.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.core.database.entities.trips import ServiceType, TripBase, TripStatus
from fleetdesk.core.database.entities.vehicles import VehicleType

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


class TripCreate(TripBase):
    """Schema for creating a trip via API."""

    time: Optional[str] = Field(default=None, pattern=TIME_PATTERN, description="Pickup time, HH:MM")
    return_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN, description="Return time, HH:MM")


class TripRead(TripBase):
    """Schema for reading a trip from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class TripUpdate(BaseModel):
    """Schema for updating a trip via API."""

    client_id: Optional[str] = None
    driver_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    return_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    service_type: Optional[ServiceType] = None
    status: Optional[TripStatus] = None
    amount: Optional[float] = Field(default=None, ge=0)
    vehicle_type: Optional[VehicleType] = None
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None
    airline: Optional[str] = None
    flight_number: Optional[str] = None
    terminal: Optional[str] = None
    passengers: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    special_instructions: Optional[str] = None
    invoice_id: Optional[str] = None
    is_recurring: Optional[bool] = None
    has_security_escort: Optional[bool] = None
    escort_count: Optional[int] = Field(default=None, ge=0)
    escort_vehicle_ids: Optional[List[str]] = None
    assigned_vehicle_ids: Optional[List[str]] = None
    assigned_driver_ids: Optional[List[str]] = None


class TripStatusUpdate(BaseModel):
    """Schema for changing only a trip's status."""

    status: TripStatus


class TimeSlotQuery(BaseModel):
    """A prospective booking to check against existing trips."""

    date: dt.date
    time: str = Field(pattern=TIME_PATTERN, description="Pickup time, HH:MM")
    return_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    exclude_trip_id: Optional[str] = Field(default=None, description="Trip being edited, ignored in the check")
