"""
Document delivery service.

Renders invoice and quotation PDFs and emails them to the client. A draft
document becomes ``sent`` once the provider accepts the email.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from fleetdesk.core.database.entities import Client, InvoiceStatus, QuotationStatus
from fleetdesk.core.database.repositories import SqlRepoBundle
from fleetdesk.core.errors import BusinessRuleError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import EmailResult
from fleetdesk.core.monitoring import log_document_generated, log_notification_sent
from fleetdesk.documents import render_invoice_pdf, render_quotation_pdf
from fleetdesk.finance.invoicing import format_document_number, totals_for
from fleetdesk.notifications import ResendEmailSender, invoice_subject, quotation_subject
from fleetdesk.notifications.email import attachment, invoice_email_html, quotation_email_html

from .billing import BillingService

logger = get_logger(__name__)


class DocumentDeliveryService:
    def __init__(self, repos: SqlRepoBundle, sender: Optional[ResendEmailSender] = None) -> None:
        self.repos = repos
        self.sender = sender or ResendEmailSender()
        self.billing = BillingService(repos)

    async def _client(self, client_id: Optional[str]) -> Optional[Client]:
        if not client_id:
            return None
        return await self.repos.clients.get_by_id(client_id)

    @staticmethod
    def _recipients(kind: str, document_id: str, client: Optional[Client], to: Optional[List[str]]) -> List[str]:
        recipients = [address for address in (to or []) if address]
        if not recipients and client is not None and client.email:
            recipients = [client.email]
        if not recipients:
            raise BusinessRuleError(f"Client email not found for {kind} {document_id}")
        return recipients

    async def invoice_pdf(self, invoice_id: str) -> Tuple[Any, bytes]:
        invoice = await self.billing.get_invoice(invoice_id)
        pdf = render_invoice_pdf(invoice, await self._client(invoice.client_id))
        log_document_generated("invoice", invoice.id, len(pdf))
        return invoice, pdf

    async def quotation_pdf(self, quotation_id: str) -> Tuple[Any, bytes]:
        quotation = await self.billing.get_quotation(quotation_id)
        pdf = render_quotation_pdf(quotation, await self._client(quotation.client_id))
        log_document_generated("quotation", quotation.id, len(pdf))
        return quotation, pdf

    async def send_invoice(self, invoice_id: str, to: Optional[List[str]] = None) -> EmailResult:
        invoice = await self.billing.get_invoice(invoice_id)
        client = await self._client(invoice.client_id)
        recipients = self._recipients("invoice", invoice_id, client, to)

        pdf = render_invoice_pdf(invoice, client)
        log_document_generated("invoice", invoice.id, len(pdf))
        short_id = format_document_number(invoice.id)
        email_id = await self.sender.send(
            sender=self.sender.config.invoice_sender,
            to=recipients,
            subject=invoice_subject(invoice.id),
            html_body=invoice_email_html(invoice, client.name if client else "Customer", totals_for(invoice)),
            attachments=[attachment(f"Invoice-{short_id}.pdf", pdf)],
        )

        if invoice.status == InvoiceStatus.DRAFT:
            await self.repos.invoices.apply_changes(invoice, {"status": InvoiceStatus.SENT})
        log_notification_sent("email", ", ".join(recipients), invoice_id)
        return EmailResult(success=True, message="Invoice sent successfully", email_id=email_id)

    async def send_quotation(self, quotation_id: str, to: Optional[List[str]] = None) -> EmailResult:
        quotation = await self.billing.get_quotation(quotation_id)
        client = await self._client(quotation.client_id)
        recipients = self._recipients("quotation", quotation_id, client, to)

        pdf = render_quotation_pdf(quotation, client)
        log_document_generated("quotation", quotation.id, len(pdf))
        short_id = format_document_number(quotation.id)
        email_id = await self.sender.send(
            sender=self.sender.config.quotation_sender,
            to=recipients,
            subject=quotation_subject(quotation.id),
            html_body=quotation_email_html(quotation, client.name if client else "Customer", totals_for(quotation)),
            attachments=[attachment(f"Quotation-{short_id}.pdf", pdf)],
        )

        if quotation.status == QuotationStatus.DRAFT:
            await self.repos.quotations.apply_changes(quotation, {"status": QuotationStatus.SENT})
        log_notification_sent("email", ", ".join(recipients), quotation_id)
        return EmailResult(success=True, message="Quotation sent successfully", email_id=email_id)
