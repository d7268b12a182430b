"""
API endpoints for the financial dashboard.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter

from fleetdesk.core.errors import BusinessRuleError
from fleetdesk.finance.calculations import FinancialData, MonthlyFinancials, summarize_months
from fleetdesk.server.services.deps import ReposDep
from fleetdesk.server.services.finance_report import build_financial_report

router = APIRouter(tags=["finance"])


def _check_window(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date and end_date and end_date < start_date:
        raise BusinessRuleError("end_date must not be before start_date")


@router.get(
    "/summary",
    response_model=FinancialData,
    summary="Financial Summary",
    description="Revenue, expenses and profit for the date window, with a monthly breakdown.",
)
async def financial_summary(
    repos: ReposDep, start_date: Optional[date] = None, end_date: Optional[date] = None
) -> FinancialData:
    """
    Financial summary.

    Revenue counts every trip in the window and paid lease invoices. Expenses count
    completed maintenance, fuel purchases and spare parts used.

    - **start_date** / **end_date**: Inclusive window; all records when omitted.
    """
    _check_window(start_date, end_date)
    return await build_financial_report(repos, start_date, end_date)


@router.get("/totals", response_model=MonthlyFinancials, summary="Financial Totals")
async def financial_totals(
    repos: ReposDep, start_date: Optional[date] = None, end_date: Optional[date] = None
) -> MonthlyFinancials:
    _check_window(start_date, end_date)
    report = await build_financial_report(repos, start_date, end_date)
    return summarize_months(report.monthly)
