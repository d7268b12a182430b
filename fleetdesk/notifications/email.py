"""Invoice and quotation emails through the Resend REST API.

The message body summarises the document; the rendered PDF goes along as a
base64 attachment.
"""

from __future__ import annotations

import base64
import html
from typing import Any, Dict, List, Optional, Sequence

import httpx

from fleetdesk.core.errors import NotificationDeliveryError, NotificationNotConfiguredError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.finance.invoicing import DocumentTotals, format_currency, format_date, format_document_number
from fleetdesk.server.core.config import CompanyConfig, ResendConfig, RetryConfig, settings

from .transport import RetryingHttpClient

logger = get_logger(__name__)


def invoice_subject(invoice_id: str, company: Optional[CompanyConfig] = None) -> str:
    company = company or settings.company
    return f"Invoice #{format_document_number(invoice_id)} from {company.name}"


def quotation_subject(quotation_id: str) -> str:
    return f"Quotation #{format_document_number(quotation_id)} - Fleet Management Services"


def attachment(filename: str, pdf: bytes) -> Dict[str, str]:
    return {"filename": filename, "content": base64.b64encode(pdf).decode("ascii")}


def _items_html(items: Sequence[Dict[str, Any]]) -> str:
    rows = []
    for item in items:
        rows.append(
            "<tr>"
            f"<td>{html.escape(str(item.get('description', '')))}</td>"
            f"<td style=\"text-align:center\">{item.get('quantity', '')}</td>"
            f"<td style=\"text-align:right\">{format_currency(item.get('unit_price'))}</td>"
            f"<td style=\"text-align:right\">{format_currency(item.get('amount'))}</td>"
            "</tr>"
        )
    return (
        "<table style=\"width:100%;border-collapse:collapse\">"
        "<tr><th>Description</th><th>Qty</th><th>Unit Price</th><th>Amount</th></tr>"
        f"{''.join(rows)}</table>"
    )


def _footer_html(company: CompanyConfig) -> str:
    address = ", ".join(line.rstrip(".") for line in company.address_lines)
    return (
        f"<p>{html.escape(company.name)} | {html.escape(address)}</p>"
        f"<p>{html.escape(company.website)} | {html.escape(company.phone)}</p>"
    )


def invoice_email_html(
    invoice: Any, client_name: str, totals: DocumentTotals, company: Optional[CompanyConfig] = None
) -> str:
    company = company or settings.company
    short_id = format_document_number(invoice.id)
    notes = f"<h3>Additional Notes</h3><p>{html.escape(invoice.notes)}</p>" if invoice.notes else ""
    return (
        "<!DOCTYPE html><html lang=\"en\"><body>"
        f"<h1>Invoice #{short_id}</h1>"
        f"<p>Professional Invoice from {html.escape(company.name)}</p>"
        f"<p>Dear {html.escape(client_name)},</p>"
        "<p>Thank you for your business! Please find your invoice attached as a PDF. "
        "The invoice details are summarized below for your convenience.</p>"
        "<h3>Invoice Information</h3>"
        f"<p>Invoice Date: {format_date(invoice.date)}<br/>Due Date: {format_date(invoice.due_date)}</p>"
        f"{_items_html(invoice.items or [])}"
        f"<p>Subtotal: {format_currency(totals.subtotal)}<br/>"
        f"VAT ({totals.vat_percentage:g}%): {format_currency(totals.vat_amount)}<br/>"
        f"Discount ({totals.discount_percentage:g}%): -{format_currency(totals.discount_amount)}<br/>"
        f"<strong>Total: {format_currency(totals.total)}</strong><br/>"
        f"Amount Paid: {format_currency(totals.paid_amount)}</p>"
        f"<h3>Balance Due</h3><p>{format_currency(totals.balance_due)}</p>"
        f"{notes}"
        f"<p>Best regards,<br/>The {html.escape(company.name)} Team</p>"
        f"<p>Payment is due by {format_date(invoice.due_date)}. "
        f"Please include invoice #{short_id} in your payment reference.</p>"
        f"{_footer_html(company)}"
        "</body></html>"
    )


def quotation_email_html(
    quotation: Any, client_name: str, totals: DocumentTotals, company: Optional[CompanyConfig] = None
) -> str:
    company = company or settings.company
    short_id = format_document_number(quotation.id)
    notes = f"<h3>Additional Notes</h3><p>{html.escape(quotation.notes)}</p>" if quotation.notes else ""
    return (
        "<!DOCTYPE html><html lang=\"en\"><body>"
        f"<h1>Quotation #{short_id}</h1>"
        f"<p>Dear {html.escape(client_name)},</p>"
        "<p>Thank you for your interest in our fleet management services. "
        "Please find your quotation attached as a PDF.</p>"
        "<h3>Quotation Information</h3>"
        f"<p>Date: {format_date(quotation.date)}<br/>Valid Until: {format_date(quotation.valid_until)}</p>"
        f"{_items_html(quotation.items or [])}"
        f"<p>Subtotal: {format_currency(totals.subtotal)}<br/>"
        f"VAT ({totals.vat_percentage:g}%): {format_currency(totals.vat_amount)}<br/>"
        f"Discount ({totals.discount_percentage:g}%): -{format_currency(totals.discount_amount)}<br/>"
        f"<strong>Total: {format_currency(totals.total)}</strong></p>"
        f"{notes}"
        f"<p>Best regards,<br/>The {html.escape(company.name)} Team</p>"
        f"{_footer_html(company)}"
        "</body></html>"
    )


class ResendEmailSender:
    def __init__(
        self,
        config: Optional[ResendConfig] = None,
        *,
        retry: Optional[RetryConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or settings.resend
        self._http = RetryingHttpClient(retry=retry, client=client, timeout=self.config.timeout)

    @property
    def configured(self) -> bool:
        return self.config.configured

    async def send(
        self,
        *,
        sender: str,
        to: List[str],
        subject: str,
        html_body: str,
        attachments: Optional[List[Dict[str, str]]] = None,
    ) -> Optional[str]:
        """Send one email and return the provider's message id.

        Raises:
            NotificationNotConfiguredError: when no API key is configured
            NotificationDeliveryError: when Resend rejects the email or is unreachable
        """
        if not self.configured:
            raise NotificationNotConfiguredError("Email", "Please set RESEND__API_KEY.")

        payload: Dict[str, Any] = {"from": sender, "to": to, "subject": subject, "html": html_body}
        if attachments:
            payload["attachments"] = attachments
        try:
            response = await self._http.post(
                f"{self.config.base_url.rstrip('/')}/emails",
                json=payload,
                headers={"Authorization": f"Bearer {self.config.api_key}"},
            )
        except httpx.TransportError as e:
            raise NotificationDeliveryError("email", str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.status_code >= 400:
            details = data.get("message") or data.get("error") or "Unknown error"
            logger.error(f"Resend error ({response.status_code}): {details}")
            raise NotificationDeliveryError("email", str(details), status_code=response.status_code)

        email_id = data.get("id")
        logger.info(f"Email '{subject}' sent to {', '.join(to)} ({email_id})")
        return email_id
