"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- fleet: Vehicle, driver and client I/O models
- trips: Trip and availability query I/O models
- maintenance: Maintenance, spare part and fuel log I/O models
- billing: Invoice, quotation and payment I/O models
- leases: Vehicle lease and lease billing I/O models
- payroll: Payroll employee and record I/O models
- incidents: Incident report I/O models
- notifications: Email and SMS I/O models
"""

from .billing import (
    InvoiceCreate,
    InvoiceRead,
    InvoiceUpdate,
    MarkOverdueResult,
    PaymentCreate,
    QuotationConversion,
    QuotationCreate,
    QuotationRead,
    QuotationUpdate,
)
from .fleet import (
    ClientCreate,
    ClientRead,
    ClientUpdate,
    DriverCreate,
    DriverRead,
    DriverUpdate,
    VehicleCreate,
    VehicleRead,
    VehicleUpdate,
)
from .incidents import IncidentReportCreate, IncidentReportRead, IncidentReportUpdate
from .leases import (
    LeaseBillingRequest,
    LeaseBillingResult,
    LeaseInvoiceRead,
    LeaseInvoiceStatusUpdate,
    LeasePeriodCheck,
    SimulatedLeaseInvoice,
    VehicleLeaseCreate,
    VehicleLeaseRead,
    VehicleLeaseUpdate,
)
from .maintenance import (
    FuelLogCreate,
    FuelLogRead,
    FuelLogUpdate,
    MaintenanceCompletion,
    MaintenanceCompletionResult,
    MaintenanceCreate,
    MaintenanceRead,
    MaintenanceUpdate,
    PartUsage,
    SparePartCreate,
    SparePartRead,
    SparePartUpdate,
)
from .notifications import EmailRequest, EmailResult, SmsRequest, SmsResult
from .payroll import (
    PayrollEmployeeCreate,
    PayrollEmployeeRead,
    PayrollEmployeeUpdate,
    PayrollRecordCreate,
    PayrollRecordRead,
    PayrollRecordUpdate,
)
from .trips import TimeSlotQuery, TripCreate, TripRead, TripStatusUpdate, TripUpdate

__all__ = [
    "ClientCreate",
    "ClientRead",
    "ClientUpdate",
    "DriverCreate",
    "DriverRead",
    "DriverUpdate",
    "EmailRequest",
    "EmailResult",
    "FuelLogCreate",
    "FuelLogRead",
    "FuelLogUpdate",
    "IncidentReportCreate",
    "IncidentReportRead",
    "IncidentReportUpdate",
    "InvoiceCreate",
    "InvoiceRead",
    "InvoiceUpdate",
    "LeaseBillingRequest",
    "LeaseBillingResult",
    "LeaseInvoiceRead",
    "LeaseInvoiceStatusUpdate",
    "LeasePeriodCheck",
    "MaintenanceCompletion",
    "MaintenanceCompletionResult",
    "MaintenanceCreate",
    "MaintenanceRead",
    "MaintenanceUpdate",
    "MarkOverdueResult",
    "PartUsage",
    "PaymentCreate",
    "PayrollEmployeeCreate",
    "PayrollEmployeeRead",
    "PayrollEmployeeUpdate",
    "PayrollRecordCreate",
    "PayrollRecordRead",
    "PayrollRecordUpdate",
    "QuotationConversion",
    "QuotationCreate",
    "QuotationRead",
    "QuotationUpdate",
    "SimulatedLeaseInvoice",
    "SmsRequest",
    "SmsResult",
    "TimeSlotQuery",
    "TripCreate",
    "TripRead",
    "TripStatusUpdate",
    "TripUpdate",
    "VehicleCreate",
    "VehicleLeaseCreate",
    "VehicleLeaseRead",
    "VehicleLeaseUpdate",
    "VehicleRead",
    "VehicleUpdate",
]
