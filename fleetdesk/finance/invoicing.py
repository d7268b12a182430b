"""Invoice and quotation rules.

Line items, totals, payments, the overdue rule, quotation conversion, and the
display formatting shared by PDFs and emails.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from fleetdesk.core.database.entities import Invoice, InvoiceStatus, Quotation, QuotationStatus
from fleetdesk.core.errors import BusinessRuleError

PAYMENT_TERM_DAYS = 30


class InvoiceItem(BaseModel):
    description: str = ""
    quantity: float = 0
    unit_price: float = 0
    amount: Optional[float] = None

    def resolved_amount(self) -> float:
        if self.amount is None:
            return self.quantity * self.unit_price
        return self.amount


class DocumentTotals(BaseModel):
    subtotal: float
    vat_percentage: float
    vat_amount: float
    discount_percentage: float
    discount_amount: float
    total: float
    paid_amount: float = 0.0
    balance_due: float = 0.0


def _coerce_item(raw: Any) -> InvoiceItem:
    if isinstance(raw, InvoiceItem):
        return raw
    if isinstance(raw, BaseModel):
        return InvoiceItem.model_validate(raw.model_dump())
    return InvoiceItem.model_validate(raw)


def normalize_items(items: Optional[Iterable[Any]]) -> List[Dict[str, Any]]:
    """Validate line items and fill in missing amounts.

    Raises:
        BusinessRuleError: listing every problem found, when any item is invalid
    """
    parsed = [_coerce_item(raw) for raw in (items or [])]
    problems: List[str] = []
    if not parsed:
        problems.append("At least one item is required")
    for index, item in enumerate(parsed, start=1):
        if not item.description.strip():
            problems.append(f"Item {index}: description is required")
        if item.quantity <= 0:
            problems.append(f"Item {index}: quantity must be greater than 0")
        if item.unit_price < 0:
            problems.append(f"Item {index}: unit price cannot be negative")
    if problems:
        raise BusinessRuleError("Invalid line items", problems)

    return [
        {
            "description": item.description.strip(),
            "quantity": item.quantity,
            "unit_price": item.unit_price,
            "amount": item.resolved_amount(),
        }
        for item in parsed
    ]


def calculate_totals(
    items: Iterable[Any],
    vat_percentage: float = 0.0,
    discount_percentage: float = 0.0,
    paid_amount: float = 0.0,
) -> DocumentTotals:
    subtotal = sum(_coerce_item(raw).resolved_amount() for raw in items)
    vat_percentage = vat_percentage or 0.0
    discount_percentage = discount_percentage or 0.0
    vat_amount = subtotal * vat_percentage / 100
    discount_amount = subtotal * discount_percentage / 100
    total = subtotal + vat_amount - discount_amount
    paid_amount = paid_amount or 0.0
    return DocumentTotals(
        subtotal=subtotal,
        vat_percentage=vat_percentage,
        vat_amount=vat_amount,
        discount_percentage=discount_percentage,
        discount_amount=discount_amount,
        total=total,
        paid_amount=paid_amount,
        balance_due=total - paid_amount,
    )


def totals_for(document: Any) -> DocumentTotals:
    """Totals of an invoice or quotation as stored."""
    return calculate_totals(
        document.items or [],
        document.vat_percentage,
        document.discount_percentage,
        getattr(document, "paid_amount", 0.0),
    )


def _status_value(status: Any) -> str:
    return str(getattr(status, "value", status))


def is_overdue(invoice: Any, today: Optional[date] = None) -> bool:
    today = today or date.today()
    if _status_value(invoice.status) != InvoiceStatus.SENT.value or invoice.due_date is None:
        return False
    return invoice.due_date < today


def apply_payment(
    invoice: Invoice, amount: float, payment_date: Optional[date] = None, payment_method: Optional[str] = None
) -> Invoice:
    """Add a payment to ``invoice`` in place.

    The invoice becomes paid once the paid amount reaches the total.
    """
    if amount is None or amount <= 0:
        raise BusinessRuleError("Payment amount must be greater than 0")
    invoice.paid_amount = (invoice.paid_amount or 0.0) + amount
    invoice.payment_date = payment_date or date.today()
    if payment_method:
        invoice.payment_method = payment_method
    if invoice.paid_amount >= (invoice.total_amount or 0.0):
        invoice.status = InvoiceStatus.PAID
    return invoice


def invoice_from_quotation(quotation: Quotation, today: Optional[date] = None) -> Invoice:
    """Build the draft invoice a quotation converts into.

    The caller persists it and marks the quotation approved.
    """
    today = today or date.today()
    items = [dict(item) for item in (quotation.items or [])]
    totals = calculate_totals(items, quotation.vat_percentage, quotation.discount_percentage)
    return Invoice(
        client_id=quotation.client_id,
        quotation_id=quotation.id,
        date=today,
        due_date=today + timedelta(days=PAYMENT_TERM_DAYS),
        status=InvoiceStatus.DRAFT,
        items=items,
        total_amount=totals.total,
        paid_amount=0.0,
        vat_percentage=quotation.vat_percentage,
        discount_percentage=quotation.discount_percentage,
        notes=quotation.notes,
    )


def mark_quotation_approved(quotation: Quotation) -> Quotation:
    quotation.status = QuotationStatus.APPROVED
    return quotation


# Display formatting


def format_document_number(document_id: str) -> str:
    return (document_id or "")[:8].upper()


def format_currency(amount: Optional[float]) -> str:
    value = float(amount or 0.0)
    if value < 0:
        return f"-${abs(value):,.2f}"
    return f"${value:,.2f}"


def format_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_status(status: Any) -> str:
    if status is None:
        return "Unknown"
    return " ".join(word.capitalize() for word in _status_value(status).split("_"))
