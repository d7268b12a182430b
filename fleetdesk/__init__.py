"""fleetdesk.

Back-office service for a fleet operator: vehicles, drivers, clients, trips,
maintenance and spare parts, fuel, invoicing and quotations, vehicle leases,
payroll and incident reporting.

Core subpackages
----------------

- ``fleetdesk.core``: logging, monitoring, errors, database entities,
  repositories and API I/O models.
- ``fleetdesk.finance``: financial aggregation, invoice totals, lease proration
  and payroll arithmetic. Pure functions over already-loaded records.
- ``fleetdesk.dispatch``: driver and vehicle availability derived from trips.
- ``fleetdesk.inventory``: spare part stock levels and consumption.
- ``fleetdesk.documents``: PDF (reportlab) and CSV rendering.
- ``fleetdesk.notifications``: email (Resend) and SMS (Twilio) delivery.
- ``fleetdesk.realtime``: per-table change fan-out for live dashboards.
- ``fleetdesk.storage``: uploaded file storage.
- ``fleetdesk.server``: the FastAPI application.
"""
