"""
Document rendering.

PDFs are built with reportlab platypus into bytes; CSV exports are plain text.
"""

from .csv_export import attachment_headers, fuel_logs_csv, maintenance_csv, trips_csv, vehicle_label
from .incident_pdf import incident_story, render_incident_pdf
from .invoice_pdf import invoice_story, quotation_story, render_invoice_pdf, render_quotation_pdf

__all__ = [
    "attachment_headers",
    "fuel_logs_csv",
    "incident_story",
    "invoice_story",
    "maintenance_csv",
    "quotation_story",
    "render_incident_pdf",
    "render_invoice_pdf",
    "render_quotation_pdf",
    "trips_csv",
    "vehicle_label",
]
