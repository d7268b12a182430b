"""
Trip repository.

Besides CRUD it answers the range and assignment queries used by the
financial report and by driver/vehicle availability checks.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import String, cast
from sqlmodel import or_, select

from ..entities.trips import Trip, TripStatus
from .base import SQLModelRepository


def _json_list_contains(column, value: str):
    """Match rows whose JSON string list holds ``value``."""
    return cast(column, String).contains(f'"{value}"')


def books_driver(driver_id: str):
    return or_(Trip.driver_id == driver_id, _json_list_contains(Trip.assigned_driver_ids, driver_id))


def books_vehicle(vehicle_id: str):
    return or_(
        Trip.vehicle_id == vehicle_id,
        _json_list_contains(Trip.assigned_vehicle_ids, vehicle_id),
        _json_list_contains(Trip.escort_vehicle_ids, vehicle_id),
    )


class TripRepository(SQLModelRepository[Trip]):
    """Repository for trips."""

    model = Trip
    default_order = "date"

    async def list_between(self, start: Optional[date] = None, end: Optional[date] = None) -> List[Trip]:
        """Trips whose date falls in ``[start, end]``; either bound may be open."""
        stmt = select(Trip)
        if start is not None:
            stmt = stmt.where(Trip.date >= start)
        if end is not None:
            stmt = stmt.where(Trip.date <= end)
        return await self._fetch_all(stmt.order_by(Trip.date, Trip.time))

    async def list_for_driver(self, driver_id: str, active_only: bool = False) -> List[Trip]:
        stmt = select(Trip).where(books_driver(driver_id))
        if active_only:
            stmt = stmt.where(Trip.status.in_([TripStatus.SCHEDULED, TripStatus.IN_PROGRESS]))
        return await self._fetch_all(stmt.order_by(Trip.date, Trip.time))

    async def list_for_vehicle(self, vehicle_id: str, active_only: bool = False) -> List[Trip]:
        stmt = select(Trip).where(books_vehicle(vehicle_id))
        if active_only:
            stmt = stmt.where(Trip.status.in_([TripStatus.SCHEDULED, TripStatus.IN_PROGRESS]))
        return await self._fetch_all(stmt.order_by(Trip.date, Trip.time))

    async def list_on_date(
        self, day: date, driver_id: Optional[str] = None, vehicle_id: Optional[str] = None
    ) -> List[Trip]:
        """Trips on ``day`` booking the given driver and/or vehicle, including carrier and escort roles."""
        stmt = select(Trip).where(Trip.date == day)
        assignment = []
        if driver_id:
            assignment.append(books_driver(driver_id))
        if vehicle_id:
            assignment.append(books_vehicle(vehicle_id))
        if assignment:
            stmt = stmt.where(or_(*assignment))
        return await self._fetch_all(stmt.order_by(Trip.time))
