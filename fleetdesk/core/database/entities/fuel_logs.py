"""
Fuel log entity models.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlalchemy import DateTime, String
from sqlmodel import Field

from ..base import Base, new_uuid, utc_now
from .vehicles import FuelType


class FuelLogBase(Base):
    """Base fields for fuel log."""

    vehicle_id: str = Field(index=True, max_length=36)
    date: dt.date = Field(index=True)
    fuel_type: FuelType = Field(default=FuelType.DIESEL, sa_type=String(32))
    volume: float = Field(ge=0, description="Litres dispensed")
    cost: float = Field(ge=0, description="Total cost of the fill-up")
    price_per_liter: Optional[float] = Field(default=None, ge=0)
    mileage: Optional[float] = Field(default=None, ge=0, description="Distance since the previous fill-up")
    previous_mileage: Optional[float] = Field(default=None, ge=0)
    current_mileage: Optional[float] = Field(default=None, ge=0, description="Odometer reading")
    notes: Optional[str] = None


class FuelLog(FuelLogBase, table=True):
    """Persistent fuel log entry.

    Table: fuel_logs
    """

    __tablename__ = "fuel_logs"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"FuelLog(id={self.id}, vehicle_id={self.vehicle_id}, cost={self.cost})"
