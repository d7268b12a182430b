"""Lease billing rules.

A lease is billed once per calendar month. The billed amount is prorated over
the part of the month the lease covers; both ends are counted as whole days.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

from fleetdesk.core.database.entities import Invoice, InvoiceStatus, VehicleLease
from fleetdesk.core.errors import LeaseRateError

from .invoicing import PAYMENT_TERM_DAYS


def billing_period(year: Optional[int] = None, month: Optional[int] = None, today: Optional[date] = None) -> Tuple[date, date]:
    """First and last day of the billing month (the current month by default)."""
    today = today or date.today()
    year = year or today.year
    month = month or today.month
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def inclusive_days(start: date, end: date) -> int:
    return (end - start).days + 1


def round_half_up(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def effective_period(lease: VehicleLease, period_start: date, period_end: date) -> Tuple[date, date]:
    return max(lease.lease_start_date, period_start), min(lease.lease_end_date, period_end)


def calculate_lease_amount(lease: VehicleLease, period_start: date, period_end: date) -> float:
    """Amount to bill ``lease`` for the period.

    The monthly rate takes precedence over the daily rate.

    Raises:
        LeaseRateError: when neither rate is positive
    """
    start, end = effective_period(lease, period_start, period_end)
    days = inclusive_days(start, end)
    days_in_month = inclusive_days(period_start, period_end)

    if lease.monthly_rate and lease.monthly_rate > 0:
        return round_half_up(lease.monthly_rate * days / days_in_month)
    if lease.daily_rate and lease.daily_rate > 0:
        return round_half_up(lease.daily_rate * days)
    raise LeaseRateError(lease.contract_number)


def lease_item_description(contract_number: str, period_start: date, period_end: date) -> str:
    return (
        f"Vehicle Lease - {contract_number} "
        f"({period_start.strftime('%d/%m/%Y')} - {period_end.strftime('%d/%m/%Y')})"
    )


def build_lease_invoice(
    lease: VehicleLease, period_start: date, period_end: date, today: Optional[date] = None
) -> Invoice:
    """Draft invoice billing ``lease`` for one period, not yet persisted."""
    today = today or date.today()
    amount = calculate_lease_amount(lease, period_start, period_end)
    return Invoice(
        client_id=None,
        date=today,
        due_date=today + timedelta(days=PAYMENT_TERM_DAYS),
        status=InvoiceStatus.DRAFT,
        items=[
            {
                "description": lease_item_description(lease.contract_number, period_start, period_end),
                "quantity": 1,
                "unit_price": amount,
                "amount": amount,
            }
        ],
        total_amount=amount,
        paid_amount=0.0,
        notes="",
    )
