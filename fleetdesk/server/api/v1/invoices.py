"""
API endpoints for invoices.

Provides CRUD for invoices, payment recording, overdue marking, PDF
rendering and delivery of the PDF to the client by email.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Response, status

from fleetdesk.core.database.entities import InvoiceStatus
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import (
    EmailRequest,
    EmailResult,
    InvoiceCreate,
    InvoiceRead,
    InvoiceUpdate,
    MarkOverdueResult,
    PaymentCreate,
)
from fleetdesk.documents import attachment_headers
from fleetdesk.finance.invoicing import format_document_number
from fleetdesk.server.services.billing import BillingService
from fleetdesk.server.services.deps import EmailSenderDep, ReposDep, TodayDep
from fleetdesk.server.services.document_delivery import DocumentDeliveryService

logger = get_logger(__name__)

router = APIRouter(tags=["invoices"])


@router.post(
    "",
    response_model=InvoiceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Invoice",
    description="Create an invoice. The total is computed from the line items, VAT and discount.",
    responses={
        201: {"description": "Invoice created successfully"},
        404: {"description": "Client not found"},
        422: {"description": "Invalid line items"},
    },
)
async def create_invoice(payload: InvoiceCreate, repos: ReposDep) -> InvoiceRead:
    """
    Create a new invoice.

    - **items**: Line items with ``description``, ``quantity`` and ``unit_price``. A missing
      ``amount`` is filled in as quantity times unit price.
    - **vat_percentage** / **discount_percentage**: Applied to the subtotal.
    - **total_amount**: Ignored on input; always recomputed.
    """
    invoice = await BillingService(repos).create_invoice(payload)
    return InvoiceRead.model_validate(invoice)


@router.get("", response_model=List[InvoiceRead], summary="List Invoices")
async def list_invoices(
    repos: ReposDep,
    invoice_status: Optional[InvoiceStatus] = None,
    client_id: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[InvoiceRead]:
    invoices = await repos.invoices.list(
        limit=limit, offset=offset, filters={"status": invoice_status, "client_id": client_id}
    )
    return [InvoiceRead.model_validate(i) for i in invoices]


@router.post(
    "/mark-overdue",
    response_model=MarkOverdueResult,
    summary="Mark Overdue Invoices",
    description="Move every sent invoice whose due date has passed to the overdue status.",
)
async def mark_overdue_invoices(repos: ReposDep, today: TodayDep) -> MarkOverdueResult:
    return await BillingService(repos).mark_overdue(today)


@router.get("/{invoice_id}", response_model=InvoiceRead, summary="Get Invoice")
async def get_invoice(invoice_id: str, repos: ReposDep) -> InvoiceRead:
    return InvoiceRead.model_validate(await BillingService(repos).get_invoice(invoice_id))


@router.patch("/{invoice_id}", response_model=InvoiceRead, summary="Update Invoice")
async def update_invoice(invoice_id: str, payload: InvoiceUpdate, repos: ReposDep) -> InvoiceRead:
    invoice = await BillingService(repos).update_invoice(invoice_id, payload)
    return InvoiceRead.model_validate(invoice)


@router.post(
    "/{invoice_id}/payments",
    response_model=InvoiceRead,
    summary="Record Payment",
    description="Add a payment to the invoice. The invoice is marked paid once the total is covered.",
    responses={
        404: {"description": "Invoice not found"},
        422: {"description": "Invoice is cancelled"},
    },
)
async def record_payment(invoice_id: str, payment: PaymentCreate, repos: ReposDep) -> InvoiceRead:
    invoice = await BillingService(repos).record_payment(invoice_id, payment)
    return InvoiceRead.model_validate(invoice)


@router.get(
    "/{invoice_id}/pdf",
    summary="Download Invoice PDF",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}, 404: {"description": "Invoice not found"}},
)
async def download_invoice_pdf(invoice_id: str, repos: ReposDep) -> Response:
    invoice, pdf = await DocumentDeliveryService(repos).invoice_pdf(invoice_id)
    filename = f"Invoice-{format_document_number(invoice.id)}.pdf"
    return Response(content=pdf, media_type="application/pdf", headers=attachment_headers(filename))


@router.post(
    "/{invoice_id}/send",
    response_model=EmailResult,
    summary="Email Invoice",
    description="Render the invoice PDF and email it to the client. Draft invoices become sent.",
    responses={
        404: {"description": "Invoice not found"},
        422: {"description": "No recipient address"},
        502: {"description": "Email provider rejected the message"},
        503: {"description": "Email service not configured"},
    },
)
async def send_invoice(
    invoice_id: str, repos: ReposDep, sender: EmailSenderDep, request: Optional[EmailRequest] = None
) -> EmailResult:
    """
    Email an invoice.

    Recipients default to the client's email address; pass **to** to override them.
    """
    to = request.to if request else None
    return await DocumentDeliveryService(repos, sender).send_invoice(invoice_id, to)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Invoice")
async def delete_invoice(invoice_id: str, repos: ReposDep) -> None:
    if not await repos.invoices.delete(invoice_id):
        raise EntityNotFoundError("Invoice", invoice_id)
    logger.info(f"Deleted invoice {invoice_id}")
