"""
Vehicle entity models.

Vehicles are the fleet's core asset. Trips, maintenance, fuel logs, leases and
incident reports all reference a vehicle by id.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String
from sqlmodel import Field

from ..base import Base, new_uuid, utc_now


class VehicleType(str, Enum):
    """Protection class of a vehicle."""

    ARMOURED = "armoured"
    SOFT_SKIN = "soft_skin"


class VehicleStatus(str, Enum):
    """Operational status of a vehicle."""

    ACTIVE = "active"
    IN_SERVICE = "in_service"
    INACTIVE = "inactive"
    ASSIGNED = "assigned"
    AVAILABLE = "available"


class FuelType(str, Enum):
    """Fuel a vehicle (or a fuel log entry) uses."""

    PETROL = "petrol"
    DIESEL = "diesel"
    HYBRID = "hybrid"
    ELECTRIC = "electric"


class VehicleBase(Base):
    """Base fields for vehicle."""

    make: str = Field(description="Manufacturer, e.g. Toyota")
    model: str = Field(description="Model name, e.g. Land Cruiser")
    registration: str = Field(index=True, description="Registration plate")
    type: VehicleType = Field(sa_type=String(32), description="Armoured or soft skin")
    status: VehicleStatus = Field(default=VehicleStatus.ACTIVE, sa_type=String(32), index=True)
    fuel_type: FuelType = Field(default=FuelType.DIESEL, sa_type=String(32))
    year: Optional[int] = Field(default=None, description="Model year")
    color: Optional[str] = None
    vin: Optional[str] = Field(default=None, description="Vehicle identification number")
    insurance_expiry: Optional[date] = None
    notes: Optional[str] = None
    image_url: Optional[str] = Field(default=None, description="Public URL of the uploaded vehicle image")


class Vehicle(VehicleBase, table=True):
    """Persistent fleet vehicle.

    Table: vehicles
    """

    __tablename__ = "vehicles"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    @property
    def display_name(self) -> str:
        return f"{self.make} {self.model} - {self.registration}"

    def __repr__(self) -> str:
        return f"Vehicle(id={self.id}, registration={self.registration}, status={self.status})"
