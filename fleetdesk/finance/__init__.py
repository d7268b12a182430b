"""
Finance rules: reporting aggregates, invoicing, lease billing and payroll.

Everything here is pure and works on loaded records; persistence happens in
``fleetdesk.server.services``.
"""

from .calculations import FinancialData, LeaseRevenueEntry, MonthlyFinancials, calculate_financial_data
from .invoicing import (
    DocumentTotals,
    InvoiceItem,
    apply_payment,
    calculate_totals,
    format_currency,
    format_date,
    format_document_number,
    invoice_from_quotation,
    is_overdue,
    normalize_items,
    totals_for,
)
from .leasing import billing_period, build_lease_invoice, calculate_lease_amount
from .payroll import PayBreakdown, apply_pay, calculate_pay

__all__ = [
    "DocumentTotals",
    "FinancialData",
    "InvoiceItem",
    "LeaseRevenueEntry",
    "MonthlyFinancials",
    "PayBreakdown",
    "apply_pay",
    "apply_payment",
    "billing_period",
    "build_lease_invoice",
    "calculate_financial_data",
    "calculate_lease_amount",
    "calculate_pay",
    "calculate_totals",
    "format_currency",
    "format_date",
    "format_document_number",
    "invoice_from_quotation",
    "is_overdue",
    "normalize_items",
    "totals_for",
]
