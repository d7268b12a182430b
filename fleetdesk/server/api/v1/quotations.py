"""
API endpoints for quotations.

Quotations share the line item rules of invoices and can be converted into a
draft invoice once the client accepts them.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Response, status

from fleetdesk.core.database.entities import QuotationStatus
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.models.io import (
    EmailRequest,
    EmailResult,
    QuotationConversion,
    QuotationCreate,
    QuotationRead,
    QuotationUpdate,
)
from fleetdesk.documents import attachment_headers
from fleetdesk.finance.invoicing import format_document_number
from fleetdesk.server.services.billing import BillingService
from fleetdesk.server.services.deps import EmailSenderDep, ReposDep, TodayDep
from fleetdesk.server.services.document_delivery import DocumentDeliveryService

router = APIRouter(tags=["quotations"])


@router.post(
    "",
    response_model=QuotationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Quotation",
    responses={
        201: {"description": "Quotation created successfully"},
        422: {"description": "Invalid line items"},
    },
)
async def create_quotation(payload: QuotationCreate, repos: ReposDep) -> QuotationRead:
    return QuotationRead.model_validate(await BillingService(repos).create_quotation(payload))


@router.get("", response_model=List[QuotationRead], summary="List Quotations")
async def list_quotations(
    repos: ReposDep,
    quotation_status: Optional[QuotationStatus] = None,
    client_id: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[QuotationRead]:
    quotations = await repos.quotations.list(
        limit=limit, offset=offset, filters={"status": quotation_status, "client_id": client_id}
    )
    return [QuotationRead.model_validate(q) for q in quotations]


@router.get("/{quotation_id}", response_model=QuotationRead, summary="Get Quotation")
async def get_quotation(quotation_id: str, repos: ReposDep) -> QuotationRead:
    return QuotationRead.model_validate(await BillingService(repos).get_quotation(quotation_id))


@router.patch("/{quotation_id}", response_model=QuotationRead, summary="Update Quotation")
async def update_quotation(quotation_id: str, payload: QuotationUpdate, repos: ReposDep) -> QuotationRead:
    return QuotationRead.model_validate(await BillingService(repos).update_quotation(quotation_id, payload))


@router.post(
    "/{quotation_id}/convert",
    response_model=QuotationConversion,
    status_code=status.HTTP_201_CREATED,
    summary="Convert Quotation To Invoice",
    description="Create a draft invoice from the quotation and mark the quotation approved.",
    responses={
        404: {"description": "Quotation not found"},
        422: {"description": "Quotation already converted"},
    },
)
async def convert_quotation(
    quotation_id: str, repos: ReposDep, today: TodayDep
) -> QuotationConversion:
    return await BillingService(repos).convert_quotation(quotation_id, today)


@router.get(
    "/{quotation_id}/pdf",
    summary="Download Quotation PDF",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}, 404: {"description": "Quotation not found"}},
)
async def download_quotation_pdf(quotation_id: str, repos: ReposDep) -> Response:
    quotation, pdf = await DocumentDeliveryService(repos).quotation_pdf(quotation_id)
    filename = f"Quotation-{format_document_number(quotation.id)}.pdf"
    return Response(content=pdf, media_type="application/pdf", headers=attachment_headers(filename))


@router.post(
    "/{quotation_id}/send",
    response_model=EmailResult,
    summary="Email Quotation",
    responses={
        404: {"description": "Quotation not found"},
        502: {"description": "Email provider rejected the message"},
        503: {"description": "Email service not configured"},
    },
)
async def send_quotation(
    quotation_id: str, repos: ReposDep, sender: EmailSenderDep, request: Optional[EmailRequest] = None
) -> EmailResult:
    to = request.to if request else None
    return await DocumentDeliveryService(repos, sender).send_quotation(quotation_id, to)


@router.delete("/{quotation_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Quotation")
async def delete_quotation(quotation_id: str, repos: ReposDep) -> None:
    if not await repos.quotations.delete(quotation_id):
        raise EntityNotFoundError("Quotation", quotation_id)
