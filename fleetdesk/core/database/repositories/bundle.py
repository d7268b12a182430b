"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances sharing
one session, for services and API endpoints that touch several tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.realtime.manager import RealtimeManager

from .clients import ClientRepository
from .incident_reports import IncidentReportRepository
from .invoices import InvoiceRepository, QuotationRepository
from .leases import LeaseInvoiceRepository, VehicleLeaseRepository
from .maintenance import FuelLogRepository, MaintenanceRepository, SparePartRepository
from .payroll import PayrollEmployeeRepository, PayrollRecordRepository
from .trips import TripRepository
from .vehicles import DriverRepository, VehicleRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    vehicles: VehicleRepository
    drivers: DriverRepository
    clients: ClientRepository
    trips: TripRepository
    maintenance: MaintenanceRepository
    spare_parts: SparePartRepository
    fuel_logs: FuelLogRepository
    invoices: InvoiceRepository
    quotations: QuotationRepository
    leases: VehicleLeaseRepository
    lease_invoices: LeaseInvoiceRepository
    payroll_employees: PayrollEmployeeRepository
    payroll_records: PayrollRecordRepository
    incidents: IncidentReportRepository


def build_sql_repos_from_session(*, session: AsyncSession, realtime: Optional[RealtimeManager] = None) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Existing async session
        realtime: Change publisher; defaults to the process-wide manager

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        vehicles=VehicleRepository(session, realtime),
        drivers=DriverRepository(session, realtime),
        clients=ClientRepository(session, realtime),
        trips=TripRepository(session, realtime),
        maintenance=MaintenanceRepository(session, realtime),
        spare_parts=SparePartRepository(session, realtime),
        fuel_logs=FuelLogRepository(session, realtime),
        invoices=InvoiceRepository(session, realtime),
        quotations=QuotationRepository(session, realtime),
        leases=VehicleLeaseRepository(session, realtime),
        lease_invoices=LeaseInvoiceRepository(session, realtime),
        payroll_employees=PayrollEmployeeRepository(session, realtime),
        payroll_records=PayrollRecordRepository(session, realtime),
        incidents=IncidentReportRepository(session, realtime),
    )
