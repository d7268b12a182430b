"""Vehicle incident report PDF."""

from __future__ import annotations

from typing import Any, List, Optional

from reportlab.lib.units import mm
from reportlab.platypus import Spacer

from fleetdesk.finance.invoicing import format_currency, format_date, format_document_number
from fleetdesk.server.core.config import CompanyConfig, settings

from .styles import build_pdf, document_styles, grid_table, paragraph

REPORT_TITLE = "Vehicle Incident Report"


def _upper(value: Any) -> str:
    if value is None:
        return "-"
    return str(getattr(value, "value", value)).upper()


def _yes_no(value: Optional[bool]) -> str:
    if value is None:
        return "-"
    return "Yes" if value else "No"


def _or_dash(value: Any) -> str:
    return str(value) if value not in (None, "") else "-"


def incident_story(
    incident: Any, vehicle: Any = None, driver: Any = None, company: Optional[CompanyConfig] = None
) -> List[Any]:
    company = company or settings.company
    styles = document_styles()
    story: List[Any] = [
        paragraph(REPORT_TITLE, styles["title"]),
        paragraph(f"{company.name} Fleet Management", styles["right"]),
        Spacer(1, 6 * mm),
    ]

    vehicle_name = " ".join(part for part in (getattr(vehicle, "make", None), getattr(vehicle, "model", None)) if part)
    overview = [
        ["Incident ID", format_document_number(incident.id), "Status", _upper(incident.status)],
        ["Date", format_date(incident.incident_date) or "-", "Time", _or_dash(incident.incident_time)],
        ["Vehicle", vehicle_name or "-", "Registration", _or_dash(getattr(vehicle, "registration", None))],
        ["Driver", _or_dash(getattr(driver, "name", None)), "License", _or_dash(getattr(driver, "license_number", None))],
        ["Location", paragraph(incident.location, styles["body"]), "Reported By", _or_dash(incident.reported_by)],
    ]
    story += [grid_table(overview, col_widths=[30 * mm, 57 * mm, 30 * mm, 57 * mm], header=False), Spacer(1, 5 * mm)]

    classification = [
        ["Classification", "Details"],
        ["Type", _upper(incident.incident_type)],
        ["Severity", _upper(incident.severity)],
        ["Status", _upper(incident.status)],
    ]
    story += [grid_table(classification, col_widths=[60 * mm, 114 * mm]), Spacer(1, 5 * mm)]

    story += [
        paragraph("Incident Description", styles["section"]),
        paragraph(incident.description, styles["body"]),
        Spacer(1, 5 * mm),
    ]

    flags = [
        ["Incident Details", "Status"],
        ["Injuries Reported", _yes_no(incident.injuries_reported)],
        ["Third Party Involved", _yes_no(incident.third_party_involved)],
        ["Photos Attached", _yes_no(incident.photos_attached)],
        ["Follow-up Required", _yes_no(incident.follow_up_required)],
        ["Follow-up Date", format_date(incident.follow_up_date) or "-"],
    ]
    story += [grid_table(flags, col_widths=[60 * mm, 114 * mm]), Spacer(1, 5 * mm)]

    financial: List[List[Any]] = []
    if incident.estimated_damage_cost:
        financial.append(["Estimated Damage Cost", format_currency(incident.estimated_damage_cost)])
    if incident.actual_repair_cost:
        financial.append(["Actual Repair Cost", format_currency(incident.actual_repair_cost)])
    if incident.police_report_number:
        financial.append(["Police Report Number", incident.police_report_number])
    if incident.insurance_claim_number:
        financial.append(["Insurance Claim Number", incident.insurance_claim_number])
    if financial:
        rows = [["Financial & Reference Information", "Details"], *financial]
        story += [grid_table(rows, col_widths=[60 * mm, 114 * mm]), Spacer(1, 5 * mm)]

    additional: List[List[Any]] = []
    if incident.third_party_details:
        additional.append(["Third Party Details", paragraph(incident.third_party_details, styles["body"])])
    if incident.witness_details:
        additional.append(["Witness Details", paragraph(incident.witness_details, styles["body"])])
    if incident.damage_details:
        additional.append(["Damage Details", paragraph(incident.damage_details, styles["body"])])
    if incident.notes:
        additional.append(["Additional Notes", paragraph(incident.notes, styles["body"])])
    if additional:
        rows = [["Additional Information", "Details"], *additional]
        story += [grid_table(rows, col_widths=[60 * mm, 114 * mm]), Spacer(1, 5 * mm)]

    signatures = [["Reporter Signature", "Manager Approval"], ["", ""]]
    story += [Spacer(1, 10 * mm), grid_table(signatures, col_widths=[87 * mm, 87 * mm])]
    return story


def render_incident_pdf(
    incident: Any, vehicle: Any = None, driver: Any = None, company: Optional[CompanyConfig] = None
) -> bytes:
    return build_pdf(incident_story(incident, vehicle, driver, company), REPORT_TITLE)
