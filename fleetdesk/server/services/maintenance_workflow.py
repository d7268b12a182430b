"""
Maintenance workflow service.

Completing a maintenance record consumes the spare parts it used and, when a
next service date is set, schedules a follow-up record for the same vehicle.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Tuple

from fleetdesk.core.database.entities import Maintenance, MaintenanceStatus
from fleetdesk.core.database.repositories import SqlRepoBundle
from fleetdesk.core.errors import BusinessRuleError, EntityNotFoundError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import (
    MaintenanceCompletion,
    MaintenanceCompletionResult,
    MaintenanceCreate,
    MaintenanceRead,
    MaintenanceUpdate,
    PartUsage,
)
from fleetdesk.inventory import build_follow_up, consume_part, needs_follow_up

logger = get_logger(__name__)


def _is_completed(record: Maintenance) -> bool:
    return record.status == MaintenanceStatus.COMPLETED


class MaintenanceWorkflow:
    def __init__(self, repos: SqlRepoBundle, today: Optional[date] = None) -> None:
        self.repos = repos
        self.today = today

    async def _require(self, maintenance_id: str) -> Maintenance:
        record = await self.repos.maintenance.get_by_id(maintenance_id)
        if record is None:
            raise EntityNotFoundError("Maintenance record", maintenance_id)
        return record

    async def _consume_parts(self, record: Maintenance, usages: Iterable[PartUsage]) -> List[str]:
        usages = list(usages)
        if not usages:
            return []
        parts = await self.repos.spare_parts.get_many(u.part_id for u in usages)
        missing = [u.part_id for u in usages if u.part_id not in parts]
        if missing:
            raise EntityNotFoundError("Spare part", missing[0])

        for usage in usages:
            consume_part(parts[usage.part_id], usage.quantity, record.id, self.today)
        for part in parts.values():
            await self.repos.spare_parts.update(part)
        logger.info(f"Maintenance {record.id} consumed {len(usages)} part entries")
        return list(parts.keys())

    async def _schedule_follow_up(self, record: Maintenance) -> Optional[Maintenance]:
        if not needs_follow_up(record):
            return None
        follow_up = await self.repos.maintenance.create(build_follow_up(record))
        logger.info(f"Scheduled follow-up maintenance {follow_up.id} on {follow_up.date}")
        return follow_up

    async def _after_completion(
        self, record: Maintenance, usages: Iterable[PartUsage], was_completed: bool
    ) -> Tuple[List[str], Optional[Maintenance]]:
        part_ids = await self._consume_parts(record, usages)
        follow_up = None if was_completed else await self._schedule_follow_up(record)
        return part_ids, follow_up

    @staticmethod
    def _result(
        record: Maintenance, follow_up: Optional[Maintenance], part_ids: List[str]
    ) -> MaintenanceCompletionResult:
        return MaintenanceCompletionResult(
            maintenance=MaintenanceRead.model_validate(record),
            follow_up=MaintenanceRead.model_validate(follow_up) if follow_up else None,
            updated_part_ids=part_ids,
        )

    async def create(self, payload: MaintenanceCreate) -> MaintenanceCompletionResult:
        if await self.repos.vehicles.get_by_id(payload.vehicle_id) is None:
            raise EntityNotFoundError("Vehicle", payload.vehicle_id)
        record = Maintenance.model_validate(payload.model_dump(exclude={"parts_used"}))
        record = await self.repos.maintenance.create(record)
        part_ids: List[str] = []
        follow_up = None
        if _is_completed(record):
            part_ids, follow_up = await self._after_completion(record, payload.parts_used, was_completed=False)
        return self._result(record, follow_up, part_ids)

    async def update(self, maintenance_id: str, payload: MaintenanceUpdate) -> MaintenanceCompletionResult:
        record = await self._require(maintenance_id)
        was_completed = _is_completed(record)
        changes = payload.model_dump(exclude_unset=True, exclude={"parts_used"})
        record = await self.repos.maintenance.apply_changes(record, changes)
        part_ids: List[str] = []
        follow_up = None
        if _is_completed(record):
            part_ids, follow_up = await self._after_completion(record, payload.parts_used or [], was_completed)
        return self._result(record, follow_up, part_ids)

    async def complete(self, maintenance_id: str, completion: MaintenanceCompletion) -> MaintenanceCompletionResult:
        """Mark a record completed, consume its parts and schedule any follow-up."""
        record = await self._require(maintenance_id)
        if _is_completed(record):
            raise BusinessRuleError(f"Maintenance record {maintenance_id} is already completed")

        changes = completion.model_dump(exclude_none=True, exclude={"parts_used"})
        changes["status"] = MaintenanceStatus.COMPLETED
        record = await self.repos.maintenance.apply_changes(record, changes)
        part_ids, follow_up = await self._after_completion(record, completion.parts_used, was_completed=False)
        return self._result(record, follow_up, part_ids)
