"""
Maintenance entity models.

A maintenance record is a service event against a vehicle. Only completed
records count as maintenance expense, and completing a record can consume
spare parts and schedule a follow-up.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String
from sqlmodel import Field

from ..base import Base, new_uuid, utc_now


class MaintenanceStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MaintenanceBase(Base):
    """Base fields for maintenance."""

    vehicle_id: str = Field(index=True, max_length=36)
    date: dt.date = Field(index=True, description="Service date")
    description: str = Field(description="Work performed or planned")
    cost: float = Field(default=0.0, ge=0)
    status: MaintenanceStatus = Field(default=MaintenanceStatus.SCHEDULED, sa_type=String(32), index=True)
    service_provider: Optional[str] = None
    notes: Optional[str] = None
    next_scheduled: Optional[dt.date] = Field(default=None, description="Date of the next service, if planned")


class Maintenance(MaintenanceBase, table=True):
    """Persistent maintenance record.

    Table: maintenance
    """

    __tablename__ = "maintenance"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"Maintenance(id={self.id}, vehicle_id={self.vehicle_id}, status={self.status})"
