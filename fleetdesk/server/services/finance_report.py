"""
Finance report service.

Loads the rows behind the financial dashboard for an optional date window
and hands them to ``calculate_financial_data``.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fleetdesk.core.database.entities import SparePart
from fleetdesk.core.database.repositories import SqlRepoBundle
from fleetdesk.core.logging_config import get_logger
from fleetdesk.finance.calculations import FinancialData, LeaseRevenueEntry, calculate_financial_data

logger = get_logger(__name__)


def _part_in_window(part: SparePart, start: Optional[date], end: Optional[date]) -> bool:
    used_on = part.last_used_date or part.purchase_date
    if used_on is None:
        return start is None and end is None
    if start is not None and used_on < start:
        return False
    if end is not None and used_on > end:
        return False
    return True


async def load_lease_revenue(
    repos: SqlRepoBundle, start: Optional[date] = None, end: Optional[date] = None
) -> List[LeaseRevenueEntry]:
    """Lease invoices in the window, each joined with its invoice's status."""
    lease_invoices = await repos.lease_invoices.list_between(start, end)
    invoices = await repos.invoices.list_by_ids(li.invoice_id for li in lease_invoices)
    invoice_status = {invoice.id: invoice.status for invoice in invoices}
    return [
        LeaseRevenueEntry(
            amount=li.amount,
            status=li.status,
            invoice_status=invoice_status.get(li.invoice_id),
            billing_period_start=li.billing_period_start,
        )
        for li in lease_invoices
    ]


async def build_financial_report(
    repos: SqlRepoBundle, start_date: Optional[date] = None, end_date: Optional[date] = None
) -> FinancialData:
    trips = await repos.trips.list_between(start_date, end_date)
    maintenance = await repos.maintenance.list_between(start_date, end_date)
    fuel_logs = await repos.fuel_logs.list_between(start_date, end_date)
    spare_parts = [p for p in await repos.spare_parts.list_used() if _part_in_window(p, start_date, end_date)]
    lease_revenue = await load_lease_revenue(repos, start_date, end_date)

    logger.debug(
        f"Financial report {start_date}..{end_date}: {len(trips)} trips, {len(maintenance)} maintenance, "
        f"{len(fuel_logs)} fuel logs, {len(spare_parts)} parts, {len(lease_revenue)} lease invoices"
    )
    return calculate_financial_data(
        trips=trips,
        maintenance=maintenance,
        fuel_logs=fuel_logs,
        spare_parts=spare_parts,
        lease_invoices=lease_revenue,
    )
