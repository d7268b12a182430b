"""
Invoice and quotation I/O models for API requests and responses.

``total_amount`` is accepted on input for compatibility but always
recomputed from the items, VAT and discount before the row is written.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.core.database.entities.invoices import InvoiceBase, InvoiceStatus, QuotationBase, QuotationStatus


class InvoiceCreate(InvoiceBase):
    """Schema for creating an invoice via API."""


class InvoiceRead(InvoiceBase):
    """Schema for reading an invoice from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class InvoiceUpdate(BaseModel):
    """Schema for updating an invoice via API."""

    client_id: Optional[str] = None
    date: Optional[dt.date] = None
    due_date: Optional[dt.date] = None
    status: Optional[InvoiceStatus] = None
    items: Optional[List[Dict[str, Any]]] = None
    paid_amount: Optional[float] = Field(default=None, ge=0)
    payment_date: Optional[dt.date] = None
    payment_method: Optional[str] = None
    vat_percentage: Optional[float] = Field(default=None, ge=0)
    discount_percentage: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class PaymentCreate(BaseModel):
    """A payment received against an invoice."""

    amount: float = Field(gt=0)
    payment_date: Optional[dt.date] = None
    payment_method: Optional[str] = None


class MarkOverdueResult(BaseModel):
    updated_count: int
    invoice_ids: List[str] = Field(default_factory=list)


class QuotationCreate(QuotationBase):
    """Schema for creating a quotation via API."""


class QuotationRead(QuotationBase):
    """Schema for reading a quotation from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class QuotationUpdate(BaseModel):
    """Schema for updating a quotation via API."""

    client_id: Optional[str] = None
    date: Optional[dt.date] = None
    valid_until: Optional[dt.date] = None
    status: Optional[QuotationStatus] = None
    items: Optional[List[Dict[str, Any]]] = None
    vat_percentage: Optional[float] = Field(default=None, ge=0)
    discount_percentage: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class QuotationConversion(BaseModel):
    quotation: QuotationRead
    invoice: InvoiceRead
