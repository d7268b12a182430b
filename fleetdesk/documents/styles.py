"""Shared reportlab styles and the PDF build helper."""

from __future__ import annotations

import html
import io
from typing import Any, Dict, List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Table, TableStyle

BRAND_PRIMARY = colors.HexColor("#1f2937")
BRAND_ACCENT = colors.HexColor("#2563eb")
ROW_SHADE = colors.HexColor("#f3f4f6")
GRID = colors.HexColor("#d1d5db")

PAGE_MARGIN = 18 * mm


def document_styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    body = base["BodyText"].clone("DocBody")
    body.fontSize = 9
    body.leading = 12

    small = body.clone("DocSmall")
    small.fontSize = 8
    small.leading = 10

    title = base["Heading1"].clone("DocTitle")
    title.alignment = TA_RIGHT
    title.textColor = BRAND_ACCENT

    company = base["Heading2"].clone("DocCompany")
    company.textColor = BRAND_PRIMARY
    company.spaceAfter = 2

    section = base["Heading4"].clone("DocSection")
    section.textColor = BRAND_PRIMARY
    section.spaceBefore = 8
    section.spaceAfter = 4

    right = body.clone("DocRight")
    right.alignment = TA_RIGHT

    return {"body": body, "small": small, "title": title, "company": company, "section": section, "right": right}


def escape(value: Any) -> str:
    """Escape ``value`` for Paragraph markup; newlines become line breaks."""
    if value is None:
        return ""
    return "<br/>".join(html.escape(line) for line in str(value).splitlines())


def paragraph(value: Any, style: ParagraphStyle, bold: bool = False) -> Paragraph:
    text = escape(value)
    if bold:
        text = f"<b>{text}</b>"
    return Paragraph(text, style)


def grid_table(
    rows: Sequence[Sequence[Any]],
    col_widths: Optional[Sequence[float]] = None,
    header: bool = True,
    right_align_from: Optional[int] = None,
) -> Table:
    """A bordered table with an optional shaded header row."""
    table = Table([list(row) for row in rows], colWidths=col_widths, repeatRows=1 if header else 0)
    commands: List[tuple] = [
        ("GRID", (0, 0), (-1, -1), 0.5, GRID),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    if header:
        commands += [
            ("BACKGROUND", (0, 0), (-1, 0), BRAND_PRIMARY),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ]
    if right_align_from is not None:
        commands.append(("ALIGN", (right_align_from, 0), (-1, -1), "RIGHT"))
    table.setStyle(TableStyle(commands))
    return table


def build_pdf(story: List[Any], title: str) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=title,
    )
    doc.build(story)
    buffer.seek(0)
    return buffer.getvalue()
