"""
Driver entity models.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String
from sqlmodel import Field

from ..base import Base, new_uuid, utc_now


class DriverStatus(str, Enum):
    """Employment status of a driver."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


class DriverBase(Base):
    """Base fields for driver."""

    name: str = Field(description="Full name")
    license_number: Optional[str] = Field(default=None, index=True)
    license_type: Optional[str] = Field(default=None, description="License class")
    license_expiry: Optional[date] = None
    contact: Optional[str] = Field(default=None, description="Email or other contact handle")
    phone: Optional[str] = None
    status: DriverStatus = Field(default=DriverStatus.ACTIVE, sa_type=String(32), index=True)
    avatar_url: Optional[str] = None
    document_url: Optional[str] = Field(default=None, description="Public URL of the license scan")


class Driver(DriverBase, table=True):
    """Persistent driver record.

    Table: drivers
    """

    __tablename__ = "drivers"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"Driver(id={self.id}, name={self.name}, status={self.status})"
