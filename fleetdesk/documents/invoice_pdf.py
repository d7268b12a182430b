"""Invoice and quotation PDFs.

Both documents share one layout:
- company block and title;
- document meta;
- bill-to block;
- items table;
- totals;
- terms and footer.

A quotation shows its validity date and has no paid or balance rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from reportlab.lib.units import mm
from reportlab.platypus import Spacer, Table, TableStyle

from fleetdesk.finance.invoicing import (
    calculate_totals,
    format_currency,
    format_date,
    format_document_number,
    format_status,
)
from fleetdesk.server.core.config import CompanyConfig, settings

from .styles import BRAND_PRIMARY, build_pdf, document_styles, grid_table, paragraph

INVOICE_TERMS = (
    "1. Payment is due within 30 days of invoice date unless otherwise specified.",
    "2. Late payments may incur additional charges.",
    "3. Please include invoice number in payment reference.",
    "4. Contact us immediately if there are any discrepancies.",
)

QUOTATION_TERMS = (
    "1. The quotation provided is valid for a period of thirty (30) days from the date of issue unless otherwise stated",
    "2. For all clients without an account or contract with us, a 50% down payment of the quoted amount, "
    "payable by cash or bank transfer, is required to confirm bookings.",
    "3. Payment for services is due upon receipt of invoice, unless otherwise specified.",
)

CLOSING_LINE = "Thank you for your business!"


@dataclass(frozen=True)
class _Layout:
    title: str
    number_label: str
    second_date_label: str
    terms: Sequence[str]
    footer: str
    show_payments: bool


INVOICE_LAYOUT = _Layout(
    title="INVOICE",
    number_label="Invoice #",
    second_date_label="Due Date",
    terms=INVOICE_TERMS,
    footer="This is a computer-generated invoice.",
    show_payments=True,
)

QUOTATION_LAYOUT = _Layout(
    title="QUOTATION",
    number_label="Quotation #",
    second_date_label="Valid Until",
    terms=QUOTATION_TERMS,
    footer="This is a computer-generated quotation.",
    show_payments=False,
)


def _quantity(value: Any) -> str:
    number = float(value or 0)
    return str(int(number)) if number.is_integer() else f"{number:g}"


def _percent(value: Any) -> str:
    return f"{float(value or 0):g}%"


def _document_story(document: Any, client: Any, layout: _Layout, second_date: Any, company: CompanyConfig) -> List[Any]:
    styles = document_styles()
    story: List[Any] = []

    company_lines = [paragraph(company.name, styles["company"])]
    company_lines += [paragraph(line, styles["body"]) for line in company.address_lines]
    company_lines.append(paragraph(f"{company.website} | {company.phone}", styles["small"]))

    meta_lines = [
        paragraph(layout.title, styles["title"]),
        paragraph(f"{layout.number_label}: {format_document_number(document.id)}", styles["right"]),
        paragraph(f"Date: {format_date(document.date)}", styles["right"]),
        paragraph(f"{layout.second_date_label}: {format_date(second_date)}", styles["right"]),
        paragraph(f"Status: {format_status(document.status)}", styles["right"]),
    ]
    header = Table([[company_lines, meta_lines]], colWidths=[95 * mm, 79 * mm])
    header.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
    story += [header, Spacer(1, 8 * mm)]

    story.append(paragraph("BILL TO", styles["section"]))
    if client is None:
        story.append(paragraph("N/A", styles["body"]))
    else:
        story.append(paragraph(client.name, styles["body"], bold=True))
        for value in (client.address, client.email, client.phone):
            if value:
                story.append(paragraph(value, styles["body"]))
    story.append(Spacer(1, 6 * mm))

    rows: List[List[Any]] = [["Description", "Qty", "Unit Price", "Amount"]]
    for item in document.items or []:
        amount = item.get("amount")
        if amount is None:
            amount = float(item.get("quantity") or 0) * float(item.get("unit_price") or 0)
        rows.append(
            [
                paragraph(item.get("description", ""), styles["body"]),
                _quantity(item.get("quantity")),
                format_currency(item.get("unit_price")),
                format_currency(amount),
            ]
        )
    story += [grid_table(rows, col_widths=[94 * mm, 16 * mm, 32 * mm, 32 * mm], right_align_from=1), Spacer(1, 4 * mm)]

    totals = calculate_totals(
        document.items or [],
        document.vat_percentage,
        document.discount_percentage,
        getattr(document, "paid_amount", 0.0),
    )
    total_rows = [
        ["Subtotal:", format_currency(totals.subtotal)],
        [f"VAT ({_percent(totals.vat_percentage)}):", format_currency(totals.vat_amount)],
        [f"Discount ({_percent(totals.discount_percentage)}):", f"-{format_currency(totals.discount_amount)}"],
        ["Total:", format_currency(totals.total)],
    ]
    if layout.show_payments:
        total_rows += [
            ["Amount Paid:", format_currency(totals.paid_amount)],
            ["Balance Due:", format_currency(totals.balance_due)],
        ]
    totals_table = Table(total_rows, colWidths=[40 * mm, 32 * mm], hAlign="RIGHT")
    totals_table.setStyle(
        TableStyle(
            [
                ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("FONTNAME", (0, 3), (-1, 3), "Helvetica-Bold"),
                ("LINEABOVE", (0, 3), (-1, 3), 0.75, BRAND_PRIMARY),
            ]
        )
    )
    story += [totals_table, Spacer(1, 6 * mm)]

    if document.notes:
        story += [paragraph("Notes", styles["section"]), paragraph(document.notes, styles["body"])]

    story.append(paragraph("Terms and conditions:", styles["section"]))
    story += [paragraph(line, styles["small"]) for line in layout.terms]
    story += [
        Spacer(1, 4 * mm),
        paragraph(CLOSING_LINE, styles["body"], bold=True),
        Spacer(1, 8 * mm),
        paragraph(layout.footer, styles["small"]),
    ]
    return story


def invoice_story(invoice: Any, client: Any = None, company: Optional[CompanyConfig] = None) -> List[Any]:
    return _document_story(invoice, client, INVOICE_LAYOUT, invoice.due_date, company or settings.company)


def quotation_story(quotation: Any, client: Any = None, company: Optional[CompanyConfig] = None) -> List[Any]:
    return _document_story(quotation, client, QUOTATION_LAYOUT, quotation.valid_until, company or settings.company)


def render_invoice_pdf(invoice: Any, client: Any = None, company: Optional[CompanyConfig] = None) -> bytes:
    return build_pdf(invoice_story(invoice, client, company), f"Invoice {format_document_number(invoice.id)}")


def render_quotation_pdf(quotation: Any, client: Any = None, company: Optional[CompanyConfig] = None) -> bytes:
    return build_pdf(quotation_story(quotation, client, company), f"Quotation {format_document_number(quotation.id)}")
