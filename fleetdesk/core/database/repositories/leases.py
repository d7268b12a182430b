"""
Vehicle lease and lease invoice repositories.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlmodel import select

from ..entities.leases import LeaseInvoice, LeaseStatus, VehicleLease
from .base import SQLModelRepository


class VehicleLeaseRepository(SQLModelRepository[VehicleLease]):
    """Repository for lease contracts."""

    model = VehicleLease

    async def list_active_overlapping(self, period_start: date, period_end: date) -> List[VehicleLease]:
        """Active leases whose contract dates overlap ``[period_start, period_end]``."""
        stmt = select(VehicleLease).where(
            (VehicleLease.lease_status == LeaseStatus.ACTIVE)
            & (VehicleLease.lease_start_date <= period_end)
            & (VehicleLease.lease_end_date >= period_start)
        )
        return await self._fetch_all(stmt.order_by(VehicleLease.contract_number))


class LeaseInvoiceRepository(SQLModelRepository[LeaseInvoice]):
    """Repository for the lease-to-invoice billing links."""

    model = LeaseInvoice
    default_order = "billing_period_start"

    async def list_for_lease(self, lease_id: str) -> List[LeaseInvoice]:
        stmt = (
            select(LeaseInvoice)
            .where(LeaseInvoice.lease_id == lease_id)
            .order_by(LeaseInvoice.billing_period_start.desc())
        )
        return await self._fetch_all(stmt)

    async def find_for_period(self, lease_id: str, period_start: date, period_end: date) -> Optional[LeaseInvoice]:
        stmt = select(LeaseInvoice).where(
            (LeaseInvoice.lease_id == lease_id)
            & (LeaseInvoice.billing_period_start == period_start)
            & (LeaseInvoice.billing_period_end == period_end)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_between(self, start: Optional[date] = None, end: Optional[date] = None) -> List[LeaseInvoice]:
        """Lease invoices whose billing period starts in ``[start, end]``."""
        stmt = select(LeaseInvoice)
        if start is not None:
            stmt = stmt.where(LeaseInvoice.billing_period_start >= start)
        if end is not None:
            stmt = stmt.where(LeaseInvoice.billing_period_start <= end)
        return await self._fetch_all(stmt.order_by(LeaseInvoice.billing_period_start))
