"""
Lease billing service.

Generates one draft invoice per active lease for a billing month and records
the link in ``lease_invoices``. A failing lease is reported in the result and
does not stop the run.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from fleetdesk.core.database.entities import LeaseInvoice, LeaseInvoiceStatus
from fleetdesk.core.database.repositories import SqlRepoBundle
from fleetdesk.core.errors import EntityNotFoundError, FleetDeskError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import LeaseBillingResult, LeaseInvoiceRead, SimulatedLeaseInvoice, VehicleLeaseRead
from fleetdesk.core.monitoring import log_lease_billing_run
from fleetdesk.finance.leasing import billing_period, build_lease_invoice, calculate_lease_amount

logger = get_logger(__name__)


class LeaseInvoiceRecordError(FleetDeskError):
    pass


class LeaseBillingService:
    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def _bill_lease(
        self, lease: VehicleLeaseRead, period_start: date, period_end: date, today: date
    ) -> LeaseInvoiceRead:
        draft = build_lease_invoice(lease, period_start, period_end, today)
        try:
            invoice = await self.repos.invoices.create(draft)
        except SQLAlchemyError as e:
            await self.repos.invoices.session.rollback()
            raise LeaseInvoiceRecordError(f"Failed to create invoice: {e}") from e
        invoice_id = invoice.id
        record = LeaseInvoice(
            lease_id=lease.id,
            invoice_id=invoice_id,
            billing_period_start=period_start,
            billing_period_end=period_end,
            amount=invoice.total_amount,
            status=LeaseInvoiceStatus.GENERATED,
            auto_generated=True,
        )
        try:
            record = await self.repos.lease_invoices.create(record)
        except SQLAlchemyError as e:
            await self.repos.lease_invoices.session.rollback()
            await self.repos.invoices.delete(invoice_id)
            raise LeaseInvoiceRecordError(f"Failed to create lease invoice record: {e}") from e
        return LeaseInvoiceRead.model_validate(record)

    async def generate_monthly_invoices(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        today: Optional[date] = None,
        dry_run: bool = False,
    ) -> LeaseBillingResult:
        """Bill every active lease overlapping the month that is not billed yet.

        With ``dry_run`` the amounts are reported in ``simulated_invoices`` and
        nothing is written.
        """
        today = today or date.today()
        period_start, period_end = billing_period(year, month, today)
        result = LeaseBillingResult(billing_period_start=period_start, billing_period_end=period_end, dry_run=dry_run)

        leases = await self.repos.leases.list_active_overlapping(period_start, period_end)
        # Detached copies stay readable after a rollback expires the session's rows
        candidates = [VehicleLeaseRead.model_validate(lease) for lease in leases]
        to_bill: List[VehicleLeaseRead] = []
        for lease in candidates:
            if await self.repos.lease_invoices.find_for_period(lease.id, period_start, period_end) is None:
                to_bill.append(lease)
        logger.info(
            f"Found {len(to_bill)} leases to bill for {period_start.strftime('%b %Y')} "
            f"({len(candidates) - len(to_bill)} already have invoices)"
        )

        for lease in to_bill:
            try:
                if dry_run:
                    result.simulated_invoices.append(self._simulate(lease, period_start, period_end))
                else:
                    result.generated_invoices.append(await self._bill_lease(lease, period_start, period_end, today))
            except FleetDeskError as e:
                message = f"Failed to generate invoice for lease {lease.contract_number}: {e}"
                logger.error(message)
                result.errors.append(message)
                continue
            result.generated_count += 1

        result.success = not result.errors
        if not dry_run:
            log_lease_billing_run(period_start.strftime("%Y-%m"), result.generated_count, len(result.errors))
        return result

    @staticmethod
    def _simulate(lease: VehicleLeaseRead, period_start: date, period_end: date) -> SimulatedLeaseInvoice:
        return SimulatedLeaseInvoice(
            lease_id=lease.id,
            contract_number=lease.contract_number,
            lessee_name=lease.lessee_name,
            amount=calculate_lease_amount(lease, period_start, period_end),
        )

    async def list_for_lease(self, lease_id: str) -> List[LeaseInvoiceRead]:
        if await self.repos.leases.get_by_id(lease_id) is None:
            raise EntityNotFoundError("Lease", lease_id)
        return [LeaseInvoiceRead.model_validate(li) for li in await self.repos.lease_invoices.list_for_lease(lease_id)]

    async def update_status(self, lease_invoice_id: str, status: LeaseInvoiceStatus) -> LeaseInvoiceRead:
        record = await self.repos.lease_invoices.get_by_id(lease_invoice_id)
        if record is None:
            raise EntityNotFoundError("Lease invoice", lease_invoice_id)
        record = await self.repos.lease_invoices.apply_changes(record, {"status": status})
        return LeaseInvoiceRead.model_validate(record)

    async def has_invoice_for_period(self, lease_id: str, period_start: date, period_end: date) -> bool:
        return await self.repos.lease_invoices.find_for_period(lease_id, period_start, period_end) is not None
