"""
Database entity models.

This package contains all database entity models organized by business domain.
Each module represents either a single table or a business domain that spans
multiple related tables.

Modules:
- vehicles: Fleet vehicles
- drivers: Drivers
- clients: Billed customers
- trips: Transport jobs
- maintenance: Vehicle service events
- spare_parts: Workshop inventory
- fuel_logs: Fuel purchases
- invoices: Invoices and quotations
- leases: Vehicle leases and their generated invoices
- payroll: Payroll employees and pay records
- incident_reports: Vehicle incident reports
"""

from . import (
    clients,
    drivers,
    fuel_logs,
    incident_reports,
    invoices,
    leases,
    maintenance,
    payroll,
    spare_parts,
    trips,
    vehicles,
)
from .clients import Client, ClientType
from .drivers import Driver, DriverStatus
from .fuel_logs import FuelLog
from .incident_reports import IncidentReport, IncidentSeverity, IncidentStatus, IncidentType
from .invoices import Invoice, InvoiceStatus, Quotation, QuotationStatus
from .leases import LeaseInvoice, LeaseInvoiceStatus, LeasePaymentStatus, LeaseStatus, VehicleLease
from .maintenance import Maintenance, MaintenanceStatus
from .payroll import EmployeeRole, PayrollEmployee, PayrollRecord, PayrollStatus
from .spare_parts import PartStatus, SparePart
from .trips import ServiceType, Trip, TripStatus
from .vehicles import FuelType, Vehicle, VehicleStatus, VehicleType

__all__ = [
    "Client",
    "ClientType",
    "Driver",
    "DriverStatus",
    "EmployeeRole",
    "FuelLog",
    "FuelType",
    "IncidentReport",
    "IncidentSeverity",
    "IncidentStatus",
    "IncidentType",
    "Invoice",
    "InvoiceStatus",
    "LeaseInvoice",
    "LeaseInvoiceStatus",
    "LeasePaymentStatus",
    "LeaseStatus",
    "Maintenance",
    "MaintenanceStatus",
    "PartStatus",
    "PayrollEmployee",
    "PayrollRecord",
    "PayrollStatus",
    "Quotation",
    "QuotationStatus",
    "ServiceType",
    "SparePart",
    "Trip",
    "TripStatus",
    "Vehicle",
    "VehicleStatus",
    "VehicleType",
    "clients",
    "drivers",
    "fuel_logs",
    "incident_reports",
    "invoices",
    "leases",
    "maintenance",
    "payroll",
    "spare_parts",
    "trips",
    "vehicles",
]
