"""Financial aggregation for the dashboard and finance report.

``calculate_financial_data`` is a pure function over already-loaded records.
It sums revenue and expenses, derives profit and margin, and groups both into
calendar-month buckets.

Revenue:
- every trip's ``amount``;
- lease invoices that are paid, either on the lease invoice itself or on
  the invoice it points to.

Expenses:
- completed maintenance;
- every fuel log;
- spare parts that were actually consumed (``quantity_used * unit_price``).

Records are read by attribute, so entities and lightweight dataclasses both work.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

PAID = "paid"
COMPLETED = "completed"


@dataclass(frozen=True)
class LeaseRevenueEntry:
    """A lease invoice joined with the status of its invoice."""

    amount: float
    status: Optional[str] = None
    invoice_status: Optional[str] = None
    billing_period_start: Optional[date] = None


class ExpenseBreakdown(BaseModel):
    maintenance: float = 0.0
    fuel: float = 0.0
    spare_parts: float = 0.0


class RevenueBreakdown(BaseModel):
    trips: float = 0.0
    vehicle_leases: float = 0.0


class MonthlyFinancials(BaseModel):
    """Totals for one calendar month."""

    key: str = Field(description="YYYY-MM")
    month: str = Field(description="Display label, e.g. 'Jan 2025'")
    revenue: float = 0.0
    expenses: float = 0.0
    profit: float = 0.0
    maintenance: float = 0.0
    fuel: float = 0.0
    spare_parts: float = 0.0
    trip_revenue: float = 0.0
    lease_revenue: float = 0.0


class FinancialData(BaseModel):
    total_revenue: float = 0.0
    trip_revenue: float = 0.0
    lease_revenue: float = 0.0
    total_expenses: float = 0.0
    maintenance_costs: float = 0.0
    fuel_costs: float = 0.0
    spare_parts_costs: float = 0.0
    profit: float = 0.0
    profit_margin: float = 0.0
    trip_count: int = 0
    average_trip_revenue: float = 0.0
    expense_breakdown: ExpenseBreakdown = Field(default_factory=ExpenseBreakdown)
    revenue_breakdown: RevenueBreakdown = Field(default_factory=RevenueBreakdown)
    monthly: List[MonthlyFinancials] = Field(default_factory=list)


def _number(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _status(record: Any, attr: str = "status") -> str:
    value = getattr(record, attr, None)
    if value is None:
        return ""
    return str(getattr(value, "value", value))


def _as_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or ISO string to a date; anything else is None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def is_paid_lease_entry(entry: Any) -> bool:
    return _status(entry) == PAID or _status(entry, "invoice_status") == PAID


def spare_part_cost(part: Any) -> float:
    used = _number(getattr(part, "quantity_used", 0))
    if used <= 0:
        return 0.0
    return used * _number(getattr(part, "unit_price", 0))


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def month_label(day: date) -> str:
    return day.strftime("%b %Y")


class _MonthlyAccumulator:
    def __init__(self) -> None:
        self._buckets: Dict[str, MonthlyFinancials] = {}

    def _bucket(self, day: date) -> MonthlyFinancials:
        key = month_key(day)
        if key not in self._buckets:
            self._buckets[key] = MonthlyFinancials(key=key, month=month_label(day))
        return self._buckets[key]

    def add(self, raw_date: Any, field: str, amount: float) -> None:
        day = _as_date(raw_date)
        if day is None:
            return
        bucket = self._bucket(day)
        setattr(bucket, field, getattr(bucket, field) + amount)

    def results(self) -> List[MonthlyFinancials]:
        months = []
        for key in sorted(self._buckets):
            bucket = self._buckets[key]
            bucket.revenue = bucket.trip_revenue + bucket.lease_revenue
            bucket.expenses = bucket.maintenance + bucket.fuel + bucket.spare_parts
            bucket.profit = bucket.revenue - bucket.expenses
            months.append(bucket)
        return months


def calculate_financial_data(
    trips: Iterable[Any] = (),
    maintenance: Iterable[Any] = (),
    fuel_logs: Iterable[Any] = (),
    spare_parts: Iterable[Any] = (),
    lease_invoices: Iterable[Any] = (),
) -> FinancialData:
    """Aggregate revenue, expenses and profit, in total and per month.

    Monthly buckets take their date from:
    - trips, completed maintenance and fuel logs: ``date``;
    - paid lease invoices: ``billing_period_start``;
    - used spare parts: ``last_used_date``, falling back to ``purchase_date``.

    A record without a usable date still counts in the totals but lands in no bucket.

    Args:
        trips: Trip records (``amount``, ``date``)
        maintenance: Maintenance records (``cost``, ``status``, ``date``)
        fuel_logs: Fuel log records (``cost``, ``date``)
        spare_parts: Spare part records (``quantity_used``, ``unit_price`` and dates)
        lease_invoices: Lease revenue entries (``amount``, ``status``/``invoice_status``,
            ``billing_period_start``)

    Returns:
        FinancialData with totals, breakdowns and the sorted monthly series
    """
    trips = list(trips)
    completed_maintenance = [m for m in maintenance if _status(m) == COMPLETED]
    fuel_logs = list(fuel_logs)
    used_parts = [p for p in spare_parts if _number(getattr(p, "quantity_used", 0)) > 0]
    paid_leases = [entry for entry in lease_invoices if is_paid_lease_entry(entry)]

    trip_revenue = sum(_number(t.amount) for t in trips)
    lease_revenue = sum(_number(entry.amount) for entry in paid_leases)
    total_revenue = trip_revenue + lease_revenue

    maintenance_costs = sum(_number(m.cost) for m in completed_maintenance)
    fuel_costs = sum(_number(f.cost) for f in fuel_logs)
    spare_parts_costs = sum(spare_part_cost(p) for p in used_parts)
    total_expenses = maintenance_costs + fuel_costs + spare_parts_costs

    profit = total_revenue - total_expenses
    profit_margin = (profit / total_revenue) * 100 if total_revenue > 0 else 0.0
    trip_count = len(trips)
    average_trip_revenue = total_revenue / trip_count if trip_count > 0 else 0.0

    monthly = _MonthlyAccumulator()
    for trip in trips:
        monthly.add(trip.date, "trip_revenue", _number(trip.amount))
    for entry in paid_leases:
        monthly.add(getattr(entry, "billing_period_start", None), "lease_revenue", _number(entry.amount))
    for record in completed_maintenance:
        monthly.add(record.date, "maintenance", _number(record.cost))
    for log in fuel_logs:
        monthly.add(log.date, "fuel", _number(log.cost))
    for part in used_parts:
        used_on = getattr(part, "last_used_date", None) or getattr(part, "purchase_date", None)
        monthly.add(used_on, "spare_parts", spare_part_cost(part))

    return FinancialData(
        total_revenue=total_revenue,
        trip_revenue=trip_revenue,
        lease_revenue=lease_revenue,
        total_expenses=total_expenses,
        maintenance_costs=maintenance_costs,
        fuel_costs=fuel_costs,
        spare_parts_costs=spare_parts_costs,
        profit=profit,
        profit_margin=profit_margin,
        trip_count=trip_count,
        average_trip_revenue=average_trip_revenue,
        # Parts are reported under maintenance on the expense chart
        expense_breakdown=ExpenseBreakdown(
            maintenance=maintenance_costs + spare_parts_costs,
            fuel=fuel_costs,
            spare_parts=0.0,
        ),
        revenue_breakdown=RevenueBreakdown(trips=trip_revenue, vehicle_leases=lease_revenue),
        monthly=monthly.results(),
    )


def summarize_months(months: Sequence[MonthlyFinancials]) -> MonthlyFinancials:
    """Sum a monthly series into a single bucket (key ``total``)."""
    total = MonthlyFinancials(key="total", month="Total")
    for month in months:
        for field in (
            "revenue",
            "expenses",
            "profit",
            "maintenance",
            "fuel",
            "spare_parts",
            "trip_revenue",
            "lease_revenue",
        ):
            setattr(total, field, getattr(total, field) + getattr(month, field))
    return total
