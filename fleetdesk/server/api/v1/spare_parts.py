"""
API endpoints for workshop spare parts.

The stock status of a part is always derived from its quantity and reorder
threshold; it is never taken from the request.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, status

from fleetdesk.core.database.entities import PartStatus, SparePart
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.models.io import SparePartCreate, SparePartRead, SparePartUpdate
from fleetdesk.inventory import refresh_status
from fleetdesk.server.services.deps import ReposDep

router = APIRouter(tags=["spare-parts"])


@router.post("", response_model=SparePartRead, status_code=status.HTTP_201_CREATED, summary="Create Spare Part")
async def create_spare_part(payload: SparePartCreate, repos: ReposDep) -> SparePartRead:
    part = refresh_status(SparePart.model_validate(payload))
    return SparePartRead.model_validate(await repos.spare_parts.create(part))


@router.get("", response_model=List[SparePartRead], summary="List Spare Parts")
async def list_spare_parts(
    repos: ReposDep,
    part_status: Optional[PartStatus] = None,
    category: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[SparePartRead]:
    parts = await repos.spare_parts.list(
        limit=limit, offset=offset, filters={"status": part_status, "category": category}
    )
    return [SparePartRead.model_validate(p) for p in parts]


@router.get(
    "/reorder",
    response_model=List[SparePartRead],
    summary="List Parts To Reorder",
    description="Parts that are low on stock or out of stock.",
)
async def list_parts_to_reorder(repos: ReposDep) -> List[SparePartRead]:
    return [SparePartRead.model_validate(p) for p in await repos.spare_parts.list_needing_reorder()]


@router.get("/{part_id}", response_model=SparePartRead, summary="Get Spare Part")
async def get_spare_part(part_id: str, repos: ReposDep) -> SparePartRead:
    part = await repos.spare_parts.get_by_id(part_id)
    if part is None:
        raise EntityNotFoundError("Spare part", part_id)
    return SparePartRead.model_validate(part)


@router.patch("/{part_id}", response_model=SparePartRead, summary="Update Spare Part")
async def update_spare_part(part_id: str, payload: SparePartUpdate, repos: ReposDep) -> SparePartRead:
    part = await repos.spare_parts.get_by_id(part_id)
    if part is None:
        raise EntityNotFoundError("Spare part", part_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(part, key, value)
    part = await repos.spare_parts.update(refresh_status(part))
    return SparePartRead.model_validate(part)


@router.delete("/{part_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Spare Part")
async def delete_spare_part(part_id: str, repos: ReposDep) -> None:
    if not await repos.spare_parts.delete(part_id):
        raise EntityNotFoundError("Spare part", part_id)
