"""
Vehicle, driver and client I/O models for API requests and responses.

Create schemas reuse the entity base fields so validation rules live in one
place; update schemas make every field optional for PATCH semantics.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from fleetdesk.core.database.entities.clients import ClientBase, ClientType
from fleetdesk.core.database.entities.drivers import DriverBase, DriverStatus
from fleetdesk.core.database.entities.vehicles import FuelType, VehicleBase, VehicleStatus, VehicleType


class VehicleCreate(VehicleBase):
    """Schema for creating a vehicle via API."""


class VehicleRead(VehicleBase):
    """Schema for reading a vehicle from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class VehicleUpdate(BaseModel):
    """Schema for updating a vehicle via API."""

    make: Optional[str] = None
    model: Optional[str] = None
    registration: Optional[str] = None
    type: Optional[VehicleType] = None
    status: Optional[VehicleStatus] = None
    fuel_type: Optional[FuelType] = None
    year: Optional[int] = None
    color: Optional[str] = None
    vin: Optional[str] = None
    insurance_expiry: Optional[date] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None


class DriverCreate(DriverBase):
    """Schema for creating a driver via API."""


class DriverRead(DriverBase):
    """Schema for reading a driver from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class DriverUpdate(BaseModel):
    """Schema for updating a driver via API."""

    name: Optional[str] = None
    license_number: Optional[str] = None
    license_type: Optional[str] = None
    license_expiry: Optional[date] = None
    contact: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[DriverStatus] = None
    avatar_url: Optional[str] = None
    document_url: Optional[str] = None


class ClientCreate(ClientBase):
    """Schema for creating a client via API."""


class ClientRead(ClientBase):
    """Schema for reading a client from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class ClientUpdate(BaseModel):
    """Schema for updating a client via API."""

    name: Optional[str] = None
    type: Optional[ClientType] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    contact: Optional[str] = None
    website: Optional[str] = None
    is_archived: Optional[bool] = None
