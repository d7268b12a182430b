"""
Payroll I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.core.database.entities.payroll import (
    EmployeeRole,
    PayrollEmployeeBase,
    PayrollRecordBase,
    PayrollStatus,
)


class PayrollEmployeeCreate(PayrollEmployeeBase):
    """Schema for creating a payroll employee via API."""


class PayrollEmployeeRead(PayrollEmployeeBase):
    """Schema for reading a payroll employee from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class PayrollEmployeeUpdate(BaseModel):
    """Schema for updating a payroll employee via API."""

    name: Optional[str] = None
    employee_id: Optional[str] = None
    role: Optional[EmployeeRole] = None
    driver_id: Optional[str] = None
    base_salary: Optional[float] = Field(default=None, ge=0)
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    bank_account: Optional[str] = None
    bank_name: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class PayrollRecordCreate(PayrollRecordBase):
    """Schema for creating a payroll record via API. Gross and net pay are computed."""


class PayrollRecordRead(PayrollRecordBase):
    """Schema for reading a payroll record from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    gross_pay: float
    net_pay: float
    created_at: datetime
    updated_at: datetime


class PayrollRecordUpdate(BaseModel):
    """Schema for updating a payroll record via API."""

    pay_period_start: Optional[date] = None
    pay_period_end: Optional[date] = None
    base_salary: Optional[float] = Field(default=None, ge=0)
    hours_worked: Optional[float] = Field(default=None, ge=0)
    overtime_hours: Optional[float] = Field(default=None, ge=0)
    overtime_rate: Optional[float] = Field(default=None, ge=0)
    bonuses: Optional[float] = Field(default=None, ge=0)
    deductions: Optional[float] = Field(default=None, ge=0)
    allowances: Optional[float] = Field(default=None, ge=0)
    status: Optional[PayrollStatus] = None
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
