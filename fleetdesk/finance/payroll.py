"""Payroll pay calculation."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

OVERTIME_MULTIPLIER = 1.5


class PayBreakdown(BaseModel):
    regular_pay: float
    overtime_pay: float
    gross_pay: float
    net_pay: float


def default_overtime_rate(hourly_rate: Optional[float]) -> float:
    return (hourly_rate or 0.0) * OVERTIME_MULTIPLIER


def calculate_pay(record: Any, hourly_rate: Optional[float] = None) -> PayBreakdown:
    """Compute pay for a payroll record.

    Hourly employees who logged hours are paid ``hours_worked * hourly_rate``;
    everyone else gets ``base_salary``. Overtime, bonuses and allowances are
    added, then deductions subtracted.
    """
    hourly_rate = hourly_rate or 0.0
    hours_worked = record.hours_worked or 0.0
    if hourly_rate > 0 and hours_worked > 0:
        regular_pay = hours_worked * hourly_rate
    else:
        regular_pay = record.base_salary or 0.0

    overtime_pay = (record.overtime_hours or 0.0) * (record.overtime_rate or 0.0)
    gross_pay = regular_pay + overtime_pay + (record.bonuses or 0.0) + (record.allowances or 0.0)
    net_pay = gross_pay - (record.deductions or 0.0)
    return PayBreakdown(regular_pay=regular_pay, overtime_pay=overtime_pay, gross_pay=gross_pay, net_pay=net_pay)


def apply_pay(record: Any, hourly_rate: Optional[float] = None) -> Any:
    breakdown = calculate_pay(record, hourly_rate)
    record.gross_pay = breakdown.gross_pay
    record.net_pay = breakdown.net_pay
    return record
