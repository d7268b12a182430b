"""
Data access layer.

One repository per table, all built on ``SQLModelRepository`` which provides
CRUD with realtime change publishing. ``SqlRepoBundle`` groups them around a
single session.
"""

from .base import AsyncBaseRepository, QueryBuilder, SQLModelRepository
from .bundle import SqlRepoBundle, build_sql_repos_from_session
from .clients import ClientRepository
from .incident_reports import IncidentReportRepository
from .invoices import InvoiceRepository, QuotationRepository
from .leases import LeaseInvoiceRepository, VehicleLeaseRepository
from .maintenance import FuelLogRepository, MaintenanceRepository, SparePartRepository
from .payroll import PayrollEmployeeRepository, PayrollRecordRepository
from .trips import TripRepository
from .vehicles import DriverRepository, VehicleRepository

__all__ = [
    "AsyncBaseRepository",
    "ClientRepository",
    "DriverRepository",
    "FuelLogRepository",
    "IncidentReportRepository",
    "InvoiceRepository",
    "LeaseInvoiceRepository",
    "MaintenanceRepository",
    "PayrollEmployeeRepository",
    "PayrollRecordRepository",
    "QueryBuilder",
    "QuotationRepository",
    "SQLModelRepository",
    "SparePartRepository",
    "SqlRepoBundle",
    "TripRepository",
    "VehicleLeaseRepository",
    "VehicleRepository",
    "build_sql_repos_from_session",
]
