"""
Trip entity models.

A trip is a scheduled transport job for a client with an assigned driver and
vehicle. Escort vehicles, extra carrier vehicles and carrier drivers are
booked by the trip just like the primary driver and vehicle. Its ``amount``
is trip revenue in the financial reports, and its date, pickup time and
return time drive driver and vehicle availability.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import List, Optional

from sqlalchemy import DateTime, String
from sqlmodel import JSON, Field

from ..base import Base, new_uuid, utc_now
from .vehicles import VehicleType


class TripStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ServiceType(str, Enum):
    """Kind of transport service, which also sets the default trip duration."""

    AIRPORT_PICKUP = "airport_pickup"
    AIRPORT_DROPOFF = "airport_dropoff"
    ONE_WAY_TRANSFER = "one_way_transfer"
    ROUND_TRIP = "round_trip"
    FULL_DAY = "full_day"
    HALF_DAY = "half_day"


class TripBase(Base):
    """Base fields for trip."""

    client_id: Optional[str] = Field(default=None, index=True, max_length=36)
    driver_id: Optional[str] = Field(default=None, index=True, max_length=36)
    vehicle_id: Optional[str] = Field(default=None, index=True, max_length=36)
    date: dt.date = Field(index=True, description="Service date")
    time: Optional[str] = Field(default=None, max_length=5, description="Pickup time, HH:MM")
    return_time: Optional[str] = Field(default=None, max_length=5, description="Return time, HH:MM")
    service_type: ServiceType = Field(default=ServiceType.ONE_WAY_TRANSFER, sa_type=String(32))
    status: TripStatus = Field(default=TripStatus.SCHEDULED, sa_type=String(32), index=True)
    amount: float = Field(default=0.0, ge=0, description="Price charged to the client")
    vehicle_type: Optional[VehicleType] = Field(default=None, sa_type=String(32))
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None
    airline: Optional[str] = None
    flight_number: Optional[str] = None
    terminal: Optional[str] = None
    passengers: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    special_instructions: Optional[str] = None
    invoice_id: Optional[str] = Field(default=None, max_length=36)
    is_recurring: bool = False
    has_security_escort: bool = False
    escort_count: int = Field(default=0, ge=0)
    escort_vehicle_ids: List[str] = Field(default_factory=list, sa_type=JSON, description="Escort vehicles on the trip")
    assigned_vehicle_ids: List[str] = Field(
        default_factory=list, sa_type=JSON, description="Carrier vehicles besides the primary vehicle"
    )
    assigned_driver_ids: List[str] = Field(
        default_factory=list, sa_type=JSON, description="Carrier drivers besides the primary driver"
    )


class Trip(TripBase, table=True):
    """Persistent trip record.

    Table: trips
    """

    __tablename__ = "trips"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"Trip(id={self.id}, date={self.date}, status={self.status})"
