"""
API endpoints for vehicle leases and their monthly billing.

Monthly billing creates one draft invoice per active lease for the month and
links it to the lease through a lease invoice record. Running it twice for
the same month does not bill a lease again.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from fleetdesk.core.database.entities import LeaseStatus, VehicleLease
from fleetdesk.core.errors import BusinessRuleError, EntityNotFoundError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import (
    LeaseBillingRequest,
    LeaseBillingResult,
    LeaseInvoiceRead,
    LeaseInvoiceStatusUpdate,
    LeasePeriodCheck,
    VehicleLeaseCreate,
    VehicleLeaseRead,
    VehicleLeaseUpdate,
)
from fleetdesk.finance.leasing import billing_period
from fleetdesk.server.services.deps import ReposDep, TodayDep
from fleetdesk.server.services.lease_billing import LeaseBillingService

logger = get_logger(__name__)

router = APIRouter(tags=["leases"])


async def _require_lease(repos, lease_id: str) -> VehicleLease:
    lease = await repos.leases.get_by_id(lease_id)
    if lease is None:
        raise EntityNotFoundError("Lease", lease_id)
    return lease


@router.post(
    "",
    response_model=VehicleLeaseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Lease",
    responses={
        201: {"description": "Lease created successfully"},
        404: {"description": "Vehicle not found"},
    },
)
async def create_lease(payload: VehicleLeaseCreate, repos: ReposDep) -> VehicleLeaseRead:
    if await repos.vehicles.get_by_id(payload.vehicle_id) is None:
        raise EntityNotFoundError("Vehicle", payload.vehicle_id)
    lease = await repos.leases.create(VehicleLease.model_validate(payload))
    return VehicleLeaseRead.model_validate(lease)


@router.get("", response_model=List[VehicleLeaseRead], summary="List Leases")
async def list_leases(
    repos: ReposDep,
    lease_status: Optional[LeaseStatus] = None,
    vehicle_id: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[VehicleLeaseRead]:
    leases = await repos.leases.list(
        limit=limit, offset=offset, filters={"lease_status": lease_status, "vehicle_id": vehicle_id}
    )
    return [VehicleLeaseRead.model_validate(lease) for lease in leases]


@router.post(
    "/generate-invoices",
    response_model=LeaseBillingResult,
    summary="Generate Monthly Lease Invoices",
    description="Create draft invoices for every active lease overlapping the billing month.",
    responses={200: {"description": "Billing run finished; see errors for leases that failed"}},
)
async def generate_lease_invoices(
    repos: ReposDep, today: TodayDep, request: Optional[LeaseBillingRequest] = None
) -> LeaseBillingResult:
    """
    Generate monthly lease invoices.

    The billing month defaults to the current month. A lease that started or ends
    inside the month is billed pro rata for the days it was active. Leases that
    already have an invoice for the month are skipped.

    - **year** / **month**: Billing month.
    - **dry_run**: Calculate the amounts without creating any invoice.
    """
    request = request or LeaseBillingRequest()
    return await LeaseBillingService(repos).generate_monthly_invoices(
        request.year, request.month, today, dry_run=request.dry_run
    )


@router.put(
    "/invoices/{lease_invoice_id}/status",
    response_model=LeaseInvoiceRead,
    summary="Update Lease Invoice Status",
    responses={404: {"description": "Lease invoice not found"}},
)
async def update_lease_invoice_status(
    lease_invoice_id: str, payload: LeaseInvoiceStatusUpdate, repos: ReposDep
) -> LeaseInvoiceRead:
    return await LeaseBillingService(repos).update_status(lease_invoice_id, payload.status)


@router.get("/{lease_id}", response_model=VehicleLeaseRead, summary="Get Lease")
async def get_lease(lease_id: str, repos: ReposDep) -> VehicleLeaseRead:
    return VehicleLeaseRead.model_validate(await _require_lease(repos, lease_id))


@router.patch("/{lease_id}", response_model=VehicleLeaseRead, summary="Update Lease")
async def update_lease(lease_id: str, payload: VehicleLeaseUpdate, repos: ReposDep) -> VehicleLeaseRead:
    lease = await _require_lease(repos, lease_id)
    changes = payload.model_dump(exclude_unset=True)
    start = changes.get("lease_start_date", lease.lease_start_date)
    end = changes.get("lease_end_date", lease.lease_end_date)
    if end < start:
        raise BusinessRuleError("lease_end_date must not be before lease_start_date")
    lease = await repos.leases.apply_changes(lease, changes)
    return VehicleLeaseRead.model_validate(lease)


@router.get(
    "/{lease_id}/invoices",
    response_model=List[LeaseInvoiceRead],
    summary="List Lease Invoices",
    description="Billing history of a lease, newest period first.",
)
async def list_lease_invoices(lease_id: str, repos: ReposDep) -> List[LeaseInvoiceRead]:
    return await LeaseBillingService(repos).list_for_lease(lease_id)


@router.get(
    "/{lease_id}/billing-check",
    response_model=LeasePeriodCheck,
    summary="Check Lease Billing Period",
    description="Whether the lease already has an invoice for the billing month.",
)
async def check_lease_period(
    lease_id: str,
    repos: ReposDep,
    today: TodayDep,
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    month: Optional[int] = Query(default=None, ge=1, le=12),
) -> LeasePeriodCheck:
    await _require_lease(repos, lease_id)
    period_start, period_end = billing_period(year, month, today)
    has_invoice = await LeaseBillingService(repos).has_invoice_for_period(lease_id, period_start, period_end)
    return LeasePeriodCheck(
        lease_id=lease_id,
        billing_period_start=period_start,
        billing_period_end=period_end,
        has_invoice=has_invoice,
    )


@router.delete("/{lease_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Lease")
async def delete_lease(lease_id: str, repos: ReposDep) -> None:
    if not await repos.leases.delete(lease_id):
        raise EntityNotFoundError("Lease", lease_id)
    logger.info(f"Deleted lease {lease_id}")
