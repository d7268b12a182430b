"""
Maintenance, spare part and fuel log I/O models for API requests and responses.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.core.database.entities.fuel_logs import FuelLogBase
from fleetdesk.core.database.entities.maintenance import MaintenanceBase, MaintenanceStatus
from fleetdesk.core.database.entities.spare_parts import SparePartBase
from fleetdesk.core.database.entities.vehicles import FuelType


class PartUsage(BaseModel):
    """Units of one spare part consumed by a maintenance record."""

    part_id: str
    quantity: int = Field(gt=0)


class MaintenanceCreate(MaintenanceBase):
    """Schema for creating a maintenance record via API.

    ``parts_used`` is only applied when the record is created completed.
    """

    parts_used: List[PartUsage] = Field(default_factory=list)


class MaintenanceRead(MaintenanceBase):
    """Schema for reading a maintenance record from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class MaintenanceUpdate(BaseModel):
    """Schema for updating a maintenance record via API."""

    vehicle_id: Optional[str] = None
    date: Optional[dt.date] = None
    description: Optional[str] = None
    cost: Optional[float] = Field(default=None, ge=0)
    status: Optional[MaintenanceStatus] = None
    service_provider: Optional[str] = None
    notes: Optional[str] = None
    next_scheduled: Optional[dt.date] = None
    parts_used: Optional[List[PartUsage]] = None


class MaintenanceCompletion(BaseModel):
    """Request to complete a maintenance record."""

    parts_used: List[PartUsage] = Field(default_factory=list)
    cost: Optional[float] = Field(default=None, ge=0, description="Final cost, if it changed")
    next_scheduled: Optional[dt.date] = None
    notes: Optional[str] = None


class MaintenanceCompletionResult(BaseModel):
    maintenance: MaintenanceRead
    follow_up: Optional[MaintenanceRead] = None
    updated_part_ids: List[str] = Field(default_factory=list)


class SparePartCreate(SparePartBase):
    """Schema for creating a spare part via API. ``status`` is derived from stock."""


class SparePartRead(SparePartBase):
    """Schema for reading a spare part from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class SparePartUpdate(BaseModel):
    """Schema for updating a spare part via API."""

    name: Optional[str] = None
    part_number: Optional[str] = None
    category: Optional[str] = None
    manufacturer: Optional[str] = None
    location: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    quantity_used: Optional[int] = Field(default=None, ge=0)
    unit_price: Optional[float] = Field(default=None, ge=0)
    min_stock_level: Optional[int] = Field(default=None, ge=0)
    purchase_date: Optional[dt.date] = None
    last_used_date: Optional[dt.date] = None
    last_ordered: Optional[dt.date] = None
    maintenance_id: Optional[str] = None
    compatibility: Optional[List[str]] = None


class FuelLogCreate(FuelLogBase):
    """Schema for creating a fuel log via API."""


class FuelLogRead(FuelLogBase):
    """Schema for reading a fuel log from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class FuelLogUpdate(BaseModel):
    """Schema for updating a fuel log via API."""

    vehicle_id: Optional[str] = None
    date: Optional[dt.date] = None
    fuel_type: Optional[FuelType] = None
    volume: Optional[float] = Field(default=None, ge=0)
    cost: Optional[float] = Field(default=None, ge=0)
    price_per_liter: Optional[float] = Field(default=None, ge=0)
    mileage: Optional[float] = Field(default=None, ge=0)
    previous_mileage: Optional[float] = Field(default=None, ge=0)
    current_mileage: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
