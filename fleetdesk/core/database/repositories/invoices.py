"""
Invoice and quotation repositories.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from sqlmodel import select

from ..entities.invoices import Invoice, InvoiceStatus, Quotation
from .base import SQLModelRepository


class InvoiceRepository(SQLModelRepository[Invoice]):
    """Repository for invoices."""

    model = Invoice
    default_order = "date"

    async def list_by_status(self, status: InvoiceStatus) -> List[Invoice]:
        stmt = select(Invoice).where(Invoice.status == status).order_by(Invoice.date.desc())
        return await self._fetch_all(stmt)

    async def list_overdue_candidates(self, today: date) -> List[Invoice]:
        """Sent invoices whose due date has passed."""
        stmt = select(Invoice).where((Invoice.status == InvoiceStatus.SENT) & (Invoice.due_date < today))
        return await self._fetch_all(stmt)

    async def list_by_ids(self, invoice_ids: Iterable[str]) -> List[Invoice]:
        ids = {iid for iid in invoice_ids if iid}
        if not ids:
            return []
        return await self._fetch_all(select(Invoice).where(Invoice.id.in_(ids)))

    async def find_by_quotation(self, quotation_id: str) -> Optional[Invoice]:
        result = await self.session.execute(select(Invoice).where(Invoice.quotation_id == quotation_id))
        return result.scalars().first()


class QuotationRepository(SQLModelRepository[Quotation]):
    """Repository for quotations."""

    model = Quotation
    default_order = "date"
