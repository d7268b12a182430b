"""
Vehicle lease entity models.

This module contains two tables:
- vehicle_leases: the lease contract (lessee, dates, rates, included services)
- lease_invoices: the link between a lease and the invoice generated for one
  billing period, which also guards against billing a period twice
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String, UniqueConstraint
from sqlmodel import Field

from ..base import Base, new_uuid, utc_now


class LeaseStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    EXPIRED = "expired"
    TERMINATED = "terminated"
    UPCOMING = "upcoming"


class LeasePaymentStatus(str, Enum):
    CURRENT = "current"
    OVERDUE = "overdue"
    PARTIAL = "partial"
    PAID_AHEAD = "paid_ahead"


class LeaseInvoiceStatus(str, Enum):
    GENERATED = "generated"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"


class VehicleLeaseBase(Base):
    """Base fields for vehicle lease."""

    vehicle_id: str = Field(index=True, max_length=36)
    contract_number: str = Field(index=True, description="Human-readable contract reference")
    lessee_name: str
    lessee_email: Optional[str] = None
    lessee_phone: Optional[str] = None
    lessee_address: Optional[str] = None
    lease_start_date: date
    lease_end_date: date
    monthly_rate: float = Field(default=0.0, ge=0)
    daily_rate: float = Field(default=0.0, ge=0)
    mileage_limit: Optional[int] = Field(default=None, ge=0)
    lease_status: LeaseStatus = Field(default=LeaseStatus.PENDING, sa_type=String(32), index=True)
    payment_status: LeasePaymentStatus = Field(default=LeasePaymentStatus.CURRENT, sa_type=String(32))
    security_deposit: float = Field(default=0.0, ge=0)
    early_termination_fee: float = Field(default=0.0, ge=0)
    insurance_required: bool = True
    maintenance_included: bool = False
    driver_included: bool = False
    fuel_included: bool = False
    assigned_driver_id: Optional[str] = Field(default=None, max_length=36)
    notes: Optional[str] = None


class VehicleLease(VehicleLeaseBase, table=True):
    """Persistent vehicle lease contract.

    Table: vehicle_leases
    """

    __tablename__ = "vehicle_leases"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"VehicleLease(id={self.id}, contract_number={self.contract_number}, status={self.lease_status})"


class LeaseInvoice(Base, table=True):
    """Invoice generated for one billing period of a lease.

    Table: lease_invoices
    """

    __tablename__ = "lease_invoices"
    __table_args__ = (UniqueConstraint("lease_id", "billing_period_start", "billing_period_end"),)

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    lease_id: str = Field(index=True, max_length=36)
    invoice_id: str = Field(index=True, max_length=36)
    billing_period_start: date = Field(index=True)
    billing_period_end: date
    amount: float = Field(default=0.0, ge=0)
    status: LeaseInvoiceStatus = Field(default=LeaseInvoiceStatus.GENERATED, sa_type=String(32))
    auto_generated: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"LeaseInvoice(id={self.id}, lease_id={self.lease_id}, period={self.billing_period_start})"
