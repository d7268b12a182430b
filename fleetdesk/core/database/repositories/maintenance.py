"""
Maintenance, spare part and fuel log repositories.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional

from sqlmodel import select

from ..entities.fuel_logs import FuelLog
from ..entities.maintenance import Maintenance, MaintenanceStatus
from ..entities.spare_parts import PartStatus, SparePart
from .base import SQLModelRepository


class MaintenanceRepository(SQLModelRepository[Maintenance]):
    """Repository for vehicle maintenance records."""

    model = Maintenance
    default_order = "date"

    async def list_between(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[MaintenanceStatus] = None,
    ) -> List[Maintenance]:
        stmt = select(Maintenance)
        if start is not None:
            stmt = stmt.where(Maintenance.date >= start)
        if end is not None:
            stmt = stmt.where(Maintenance.date <= end)
        if status is not None:
            stmt = stmt.where(Maintenance.status == status)
        return await self._fetch_all(stmt.order_by(Maintenance.date.desc()))

    async def list_for_vehicle(self, vehicle_id: str) -> List[Maintenance]:
        stmt = select(Maintenance).where(Maintenance.vehicle_id == vehicle_id).order_by(Maintenance.date.desc())
        return await self._fetch_all(stmt)


class SparePartRepository(SQLModelRepository[SparePart]):
    """Repository for workshop spare parts."""

    model = SparePart

    async def get_many(self, part_ids: Iterable[str]) -> Dict[str, SparePart]:
        ids = {pid for pid in part_ids if pid}
        if not ids:
            return {}
        rows = await self._fetch_all(select(SparePart).where(SparePart.id.in_(ids)))
        return {part.id: part for part in rows}

    async def list_used(self) -> List[SparePart]:
        """Parts that were consumed at least once, i.e. that carry a cost."""
        stmt = select(SparePart).where(SparePart.quantity_used > 0).order_by(SparePart.name)
        return await self._fetch_all(stmt)

    async def list_needing_reorder(self) -> List[SparePart]:
        stmt = (
            select(SparePart)
            .where(SparePart.status.in_([PartStatus.LOW_STOCK, PartStatus.OUT_OF_STOCK]))
            .order_by(SparePart.quantity)
        )
        return await self._fetch_all(stmt)


class FuelLogRepository(SQLModelRepository[FuelLog]):
    """Repository for fuel purchases."""

    model = FuelLog
    default_order = "date"

    async def list_between(self, start: Optional[date] = None, end: Optional[date] = None) -> List[FuelLog]:
        stmt = select(FuelLog)
        if start is not None:
            stmt = stmt.where(FuelLog.date >= start)
        if end is not None:
            stmt = stmt.where(FuelLog.date <= end)
        return await self._fetch_all(stmt.order_by(FuelLog.date.desc()))
