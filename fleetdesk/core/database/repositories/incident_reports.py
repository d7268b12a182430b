"""
Incident report repository.
"""

from __future__ import annotations

from typing import List

from sqlmodel import select

from ..entities.incident_reports import IncidentReport
from .base import SQLModelRepository


class IncidentReportRepository(SQLModelRepository[IncidentReport]):
    """Repository for vehicle incident reports."""

    model = IncidentReport
    default_order = "incident_date"

    async def list_for_vehicle(self, vehicle_id: str) -> List[IncidentReport]:
        stmt = (
            select(IncidentReport)
            .where(IncidentReport.vehicle_id == vehicle_id)
            .order_by(IncidentReport.incident_date.desc())
        )
        return await self._fetch_all(stmt)
