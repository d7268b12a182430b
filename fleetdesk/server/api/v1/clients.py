"""
API endpoints for managing clients.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, status

from fleetdesk.core.database.entities import Client
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.models.io import ClientCreate, ClientRead, ClientUpdate
from fleetdesk.server.services.deps import ReposDep

router = APIRouter(tags=["clients"])


async def _require_client(repos, client_id: str) -> Client:
    client = await repos.clients.get_by_id(client_id)
    if client is None:
        raise EntityNotFoundError("Client", client_id)
    return client


@router.post("", response_model=ClientRead, status_code=status.HTTP_201_CREATED, summary="Create Client")
async def create_client(payload: ClientCreate, repos: ReposDep) -> ClientRead:
    return ClientRead.model_validate(await repos.clients.create(Client.model_validate(payload)))


@router.get(
    "",
    response_model=List[ClientRead],
    summary="List Clients",
    description="List clients. With ``search`` the names are matched case-insensitively.",
)
async def list_clients(
    repos: ReposDep,
    search: Optional[str] = None,
    include_archived: bool = False,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[ClientRead]:
    if search:
        clients = await repos.clients.search(search, include_archived=include_archived)
    else:
        filters = None if include_archived else {"is_archived": False}
        clients = await repos.clients.list(limit=limit, offset=offset, filters=filters)
    return [ClientRead.model_validate(c) for c in clients]


@router.get("/{client_id}", response_model=ClientRead, summary="Get Client")
async def get_client(client_id: str, repos: ReposDep) -> ClientRead:
    return ClientRead.model_validate(await _require_client(repos, client_id))


@router.patch("/{client_id}", response_model=ClientRead, summary="Update Client")
async def update_client(client_id: str, payload: ClientUpdate, repos: ReposDep) -> ClientRead:
    client = await _require_client(repos, client_id)
    client = await repos.clients.apply_changes(client, payload.model_dump(exclude_unset=True))
    return ClientRead.model_validate(client)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Client")
async def delete_client(client_id: str, repos: ReposDep) -> None:
    if not await repos.clients.delete(client_id):
        raise EntityNotFoundError("Client", client_id)
