"""
Vehicle lease I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fleetdesk.core.database.entities.leases import (
    LeaseInvoiceStatus,
    LeasePaymentStatus,
    LeaseStatus,
    VehicleLeaseBase,
)


class VehicleLeaseCreate(VehicleLeaseBase):
    """Schema for creating a vehicle lease via API."""

    @model_validator(mode="after")
    def _check_dates(self) -> "VehicleLeaseCreate":
        if self.lease_end_date < self.lease_start_date:
            raise ValueError("lease_end_date must not be before lease_start_date")
        return self


class VehicleLeaseRead(VehicleLeaseBase):
    """Schema for reading a vehicle lease from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class VehicleLeaseUpdate(BaseModel):
    """Schema for updating a vehicle lease via API."""

    vehicle_id: Optional[str] = None
    contract_number: Optional[str] = None
    lessee_name: Optional[str] = None
    lessee_email: Optional[str] = None
    lessee_phone: Optional[str] = None
    lessee_address: Optional[str] = None
    lease_start_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    monthly_rate: Optional[float] = Field(default=None, ge=0)
    daily_rate: Optional[float] = Field(default=None, ge=0)
    mileage_limit: Optional[int] = Field(default=None, ge=0)
    lease_status: Optional[LeaseStatus] = None
    payment_status: Optional[LeasePaymentStatus] = None
    security_deposit: Optional[float] = Field(default=None, ge=0)
    early_termination_fee: Optional[float] = Field(default=None, ge=0)
    insurance_required: Optional[bool] = None
    maintenance_included: Optional[bool] = None
    driver_included: Optional[bool] = None
    fuel_included: Optional[bool] = None
    assigned_driver_id: Optional[str] = None
    notes: Optional[str] = None


class LeaseInvoiceRead(BaseModel):
    """Schema for reading a lease invoice from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    lease_id: str
    invoice_id: str
    billing_period_start: date
    billing_period_end: date
    amount: float
    status: LeaseInvoiceStatus
    auto_generated: bool
    created_at: datetime
    updated_at: datetime


class LeaseInvoiceStatusUpdate(BaseModel):
    status: LeaseInvoiceStatus


class LeaseBillingRequest(BaseModel):
    """Billing month to generate invoices for; defaults to the current month.

    With ``dry_run`` the amounts are calculated but nothing is written.
    """

    year: Optional[int] = Field(default=None, ge=2000, le=2100)
    month: Optional[int] = Field(default=None, ge=1, le=12)
    dry_run: bool = False


class SimulatedLeaseInvoice(BaseModel):
    lease_id: str
    contract_number: str
    lessee_name: str
    amount: float


class LeaseBillingResult(BaseModel):
    success: bool = True
    generated_count: int = 0
    errors: List[str] = Field(default_factory=list)
    generated_invoices: List[LeaseInvoiceRead] = Field(default_factory=list)
    billing_period_start: date
    billing_period_end: date
    dry_run: bool = False
    simulated_invoices: List[SimulatedLeaseInvoice] = Field(default_factory=list)


class LeasePeriodCheck(BaseModel):
    lease_id: str
    billing_period_start: date
    billing_period_end: date
    has_invoice: bool
