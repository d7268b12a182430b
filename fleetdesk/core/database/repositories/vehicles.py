"""
Vehicle and driver repositories.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from sqlmodel import select

from ..entities.drivers import Driver, DriverStatus
from ..entities.vehicles import Vehicle, VehicleStatus
from .base import SQLModelRepository


class VehicleRepository(SQLModelRepository[Vehicle]):
    """Repository for fleet vehicles."""

    model = Vehicle

    async def get_many(self, vehicle_ids: Iterable[str]) -> Dict[str, Vehicle]:
        """Load vehicles by id, keyed by id. Unknown ids are skipped."""
        ids = {vid for vid in vehicle_ids if vid}
        if not ids:
            return {}
        rows = await self._fetch_all(select(Vehicle).where(Vehicle.id.in_(ids)))
        return {vehicle.id: vehicle for vehicle in rows}

    async def list_by_status(self, status: VehicleStatus) -> List[Vehicle]:
        stmt = select(Vehicle).where(Vehicle.status == status).order_by(Vehicle.registration)
        return await self._fetch_all(stmt)


class DriverRepository(SQLModelRepository[Driver]):
    """Repository for drivers."""

    model = Driver

    async def list_active(self) -> List[Driver]:
        stmt = select(Driver).where(Driver.status == DriverStatus.ACTIVE).order_by(Driver.name)
        return await self._fetch_all(stmt)
