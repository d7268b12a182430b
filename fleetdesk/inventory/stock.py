"""Spare part stock bookkeeping and maintenance follow-ups."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fleetdesk.core.database.entities import Maintenance, MaintenanceStatus, PartStatus, SparePart
from fleetdesk.core.errors import BusinessRuleError


def stock_status(quantity: int, min_stock_level: int) -> PartStatus:
    if quantity <= 0:
        return PartStatus.OUT_OF_STOCK
    if quantity <= (min_stock_level or 0):
        return PartStatus.LOW_STOCK
    return PartStatus.IN_STOCK


def refresh_status(part: SparePart) -> SparePart:
    part.status = stock_status(part.quantity or 0, part.min_stock_level or 0)
    return part


def consume_part(part: SparePart, used: int, maintenance_id: str, today: Optional[date] = None) -> SparePart:
    """Record ``used`` units of ``part`` consumed by a maintenance record.

    Stock never goes below zero even when more units are reported than held.
    """
    if used is None or used <= 0:
        raise BusinessRuleError(f"Quantity used for part {part.id} must be greater than 0")
    part.quantity = max(0, (part.quantity or 0) - used)
    part.quantity_used = (part.quantity_used or 0) + used
    part.last_used_date = today or date.today()
    part.maintenance_id = maintenance_id
    return refresh_status(part)


def needs_follow_up(record: Maintenance) -> bool:
    status = getattr(record.status, "value", record.status)
    return status == MaintenanceStatus.COMPLETED.value and record.next_scheduled is not None


def build_follow_up(record: Maintenance) -> Maintenance:
    return Maintenance(
        vehicle_id=record.vehicle_id,
        date=record.next_scheduled,
        description=f"Follow-up: {record.description}",
        cost=0.0,
        status=MaintenanceStatus.SCHEDULED,
        notes=f"Auto-generated follow-up maintenance for previous service on {record.date.isoformat()}",
    )
