"""
Invoice and quotation entity models.

Both documents carry a JSON list of line items
(``description``, ``quantity``, ``unit_price``, ``amount``) plus VAT and
discount percentages. ``total_amount`` is always derived from those inputs
by the invoicing rules before a row is written.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime, String
from sqlmodel import JSON, Field

from ..base import Base, new_uuid, utc_now


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class QuotationStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class InvoiceBase(Base):
    """Base fields for invoice."""

    client_id: Optional[str] = Field(default=None, index=True, max_length=36)
    quotation_id: Optional[str] = Field(default=None, max_length=36, description="Quotation this was converted from")
    date: dt.date = Field(index=True, description="Issue date")
    due_date: dt.date
    status: InvoiceStatus = Field(default=InvoiceStatus.DRAFT, sa_type=String(32), index=True)
    items: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    total_amount: float = Field(default=0.0, description="Subtotal plus VAT minus discount")
    paid_amount: float = Field(default=0.0, ge=0)
    payment_date: Optional[dt.date] = None
    payment_method: Optional[str] = None
    vat_percentage: float = Field(default=0.0, ge=0)
    discount_percentage: float = Field(default=0.0, ge=0)
    notes: Optional[str] = None


class Invoice(InvoiceBase, table=True):
    """Persistent invoice.

    Table: invoices
    """

    __tablename__ = "invoices"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"Invoice(id={self.id}, status={self.status}, total_amount={self.total_amount})"


class QuotationBase(Base):
    """Base fields for quotation."""

    client_id: Optional[str] = Field(default=None, index=True, max_length=36)
    date: dt.date = Field(index=True)
    valid_until: dt.date
    status: QuotationStatus = Field(default=QuotationStatus.DRAFT, sa_type=String(32), index=True)
    items: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    total_amount: float = Field(default=0.0)
    vat_percentage: float = Field(default=0.0, ge=0)
    discount_percentage: float = Field(default=0.0, ge=0)
    notes: Optional[str] = None


class Quotation(QuotationBase, table=True):
    """Persistent quotation.

    Table: quotations
    """

    __tablename__ = "quotations"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"Quotation(id={self.id}, status={self.status}, total_amount={self.total_amount})"
