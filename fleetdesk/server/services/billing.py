"""
Invoice and quotation service.

Writes go through ``normalize_items`` and ``calculate_totals`` so the stored
``total_amount`` always matches the line items, VAT and discount.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from fleetdesk.core.database.entities import Invoice, InvoiceStatus, Quotation
from fleetdesk.core.database.repositories import SqlRepoBundle
from fleetdesk.core.errors import BusinessRuleError, EntityNotFoundError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import (
    InvoiceCreate,
    InvoiceRead,
    InvoiceUpdate,
    MarkOverdueResult,
    PaymentCreate,
    QuotationConversion,
    QuotationCreate,
    QuotationRead,
    QuotationUpdate,
)
from fleetdesk.finance.invoicing import (
    apply_payment,
    calculate_totals,
    invoice_from_quotation,
    is_overdue,
    mark_quotation_approved,
    normalize_items,
)

logger = get_logger(__name__)


def _with_totals(values: Dict[str, Any]) -> Dict[str, Any]:
    values["items"] = normalize_items(values.get("items"))
    totals = calculate_totals(values["items"], values.get("vat_percentage"), values.get("discount_percentage"))
    values["total_amount"] = totals.total
    return values


def _recalculate(document: Any) -> None:
    document.total_amount = calculate_totals(
        document.items or [], document.vat_percentage, document.discount_percentage
    ).total


class BillingService:
    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def _check_client(self, client_id: Optional[str]) -> None:
        if client_id and await self.repos.clients.get_by_id(client_id) is None:
            raise EntityNotFoundError("Client", client_id)

    async def get_invoice(self, invoice_id: str) -> Invoice:
        invoice = await self.repos.invoices.get_by_id(invoice_id)
        if invoice is None:
            raise EntityNotFoundError("Invoice", invoice_id)
        return invoice

    async def get_quotation(self, quotation_id: str) -> Quotation:
        quotation = await self.repos.quotations.get_by_id(quotation_id)
        if quotation is None:
            raise EntityNotFoundError("Quotation", quotation_id)
        return quotation

    # Invoices

    async def create_invoice(self, payload: InvoiceCreate) -> Invoice:
        await self._check_client(payload.client_id)
        invoice = Invoice.model_validate(_with_totals(payload.model_dump()))
        return await self.repos.invoices.create(invoice)

    async def update_invoice(self, invoice_id: str, payload: InvoiceUpdate) -> Invoice:
        invoice = await self.get_invoice(invoice_id)
        changes = payload.model_dump(exclude_unset=True)
        if "client_id" in changes:
            await self._check_client(changes["client_id"])
        if "items" in changes:
            changes["items"] = normalize_items(changes["items"])
        for key, value in changes.items():
            setattr(invoice, key, value)
        _recalculate(invoice)
        return await self.repos.invoices.update(invoice)

    async def record_payment(self, invoice_id: str, payment: PaymentCreate) -> Invoice:
        invoice = await self.get_invoice(invoice_id)
        if invoice.status == InvoiceStatus.CANCELLED:
            raise BusinessRuleError(f"Invoice {invoice_id} is cancelled")
        apply_payment(invoice, payment.amount, payment.payment_date, payment.payment_method)
        logger.info(f"Recorded payment of {payment.amount} on invoice {invoice_id}")
        return await self.repos.invoices.update(invoice)

    async def mark_overdue(self, today: Optional[date] = None) -> MarkOverdueResult:
        """Move every sent invoice past its due date to overdue."""
        today = today or date.today()
        updated: List[str] = []
        for invoice in await self.repos.invoices.list_overdue_candidates(today):
            if not is_overdue(invoice, today):
                continue
            await self.repos.invoices.apply_changes(invoice, {"status": InvoiceStatus.OVERDUE})
            updated.append(invoice.id)
        if updated:
            logger.info(f"Marked {len(updated)} invoices overdue")
        return MarkOverdueResult(updated_count=len(updated), invoice_ids=updated)

    # Quotations

    async def create_quotation(self, payload: QuotationCreate) -> Quotation:
        await self._check_client(payload.client_id)
        quotation = Quotation.model_validate(_with_totals(payload.model_dump()))
        return await self.repos.quotations.create(quotation)

    async def update_quotation(self, quotation_id: str, payload: QuotationUpdate) -> Quotation:
        quotation = await self.get_quotation(quotation_id)
        changes = payload.model_dump(exclude_unset=True)
        if "client_id" in changes:
            await self._check_client(changes["client_id"])
        if "items" in changes:
            changes["items"] = normalize_items(changes["items"])
        for key, value in changes.items():
            setattr(quotation, key, value)
        _recalculate(quotation)
        return await self.repos.quotations.update(quotation)

    async def convert_quotation(self, quotation_id: str, today: Optional[date] = None) -> QuotationConversion:
        quotation = await self.get_quotation(quotation_id)
        existing = await self.repos.invoices.find_by_quotation(quotation_id)
        if existing is not None:
            raise BusinessRuleError(f"Quotation {quotation_id} was already converted to invoice {existing.id}")

        invoice = await self.repos.invoices.create(invoice_from_quotation(quotation, today))
        quotation = await self.repos.quotations.update(mark_quotation_approved(quotation))
        logger.info(f"Converted quotation {quotation_id} to invoice {invoice.id}")
        return QuotationConversion(
            quotation=QuotationRead.model_validate(quotation),
            invoice=InvoiceRead.model_validate(invoice),
        )
