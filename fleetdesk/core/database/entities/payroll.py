"""
Payroll entity models.

This module contains the database entities for payroll:
- payroll_employees: people on the payroll, optionally linked to a driver
- payroll_records: one pay period for one employee with computed gross/net pay
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String
from sqlmodel import Field

from ..base import Base, new_uuid, utc_now


class EmployeeRole(str, Enum):
    DRIVER = "driver"
    MECHANIC = "mechanic"
    ADMIN = "admin"
    MANAGER = "manager"
    OTHER = "other"


class PayrollStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"
    CANCELLED = "cancelled"


class PayrollEmployeeBase(Base):
    """Base fields for payroll employee."""

    name: str = Field(index=True)
    employee_id: Optional[str] = Field(default=None, index=True, description="Internal staff number")
    role: EmployeeRole = Field(default=EmployeeRole.OTHER, sa_type=String(32))
    driver_id: Optional[str] = Field(default=None, max_length=36, description="Linked driver, if any")
    base_salary: float = Field(default=0.0, ge=0)
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    bank_account: Optional[str] = None
    bank_name: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = Field(default=True, index=True)


class PayrollEmployee(PayrollEmployeeBase, table=True):
    """Persistent payroll employee.

    Table: payroll_employees
    """

    __tablename__ = "payroll_employees"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"PayrollEmployee(id={self.id}, name={self.name}, role={self.role})"


class PayrollRecordBase(Base):
    """Base fields for payroll record."""

    employee_id: str = Field(index=True, max_length=36)
    pay_period_start: date
    pay_period_end: date
    base_salary: float = Field(default=0.0, ge=0)
    hours_worked: float = Field(default=0.0, ge=0)
    overtime_hours: float = Field(default=0.0, ge=0)
    overtime_rate: float = Field(default=0.0, ge=0)
    bonuses: float = Field(default=0.0, ge=0)
    deductions: float = Field(default=0.0, ge=0)
    allowances: float = Field(default=0.0, ge=0)
    status: PayrollStatus = Field(default=PayrollStatus.PENDING, sa_type=String(32), index=True)
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class PayrollRecord(PayrollRecordBase, table=True):
    """Persistent payroll record.

    ``gross_pay`` and ``net_pay`` are derived by the payroll rules whenever the
    record is written.

    Table: payroll_records
    """

    __tablename__ = "payroll_records"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    gross_pay: float = Field(default=0.0)
    net_pay: float = Field(default=0.0)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"PayrollRecord(id={self.id}, employee_id={self.employee_id}, net_pay={self.net_pay})"
