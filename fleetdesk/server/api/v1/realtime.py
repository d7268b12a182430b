"""
Realtime change streams.

Every committed write to a table is published on the ``public:{table}``
channel. Clients follow a table over Server-Sent Events; each SSE message
carries the change type as ``event`` and the ``ChangeEvent`` JSON as ``data``.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Request
from sse_starlette.sse import EventSourceResponse

from fleetdesk.core.database import entities  # noqa: F401  registers every table on the metadata
from fleetdesk.core.database.base import Base
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.server.core.config import settings
from fleetdesk.server.services.deps import RealtimeDep

logger = get_logger(__name__)

router = APIRouter(tags=["realtime"])


def known_tables() -> List[str]:
    return sorted(Base.metadata.tables)


@router.get("/tables", summary="List Streamable Tables")
async def list_tables() -> List[str]:
    return known_tables()


@router.get("/channels", summary="List Active Channels")
async def list_channels(manager: RealtimeDep) -> List[str]:
    """Channels that currently have at least one subscriber."""
    return manager.channels


@router.get(
    "/{table}/stream",
    summary="Stream Table Changes",
    description="Follow inserts, updates and deletes on a table via Server-Sent Events (SSE).",
    responses={
        200: {
            "description": "SSE stream established",
            "content": {"text/event-stream": {"example": "event: INSERT\ndata: {\"table\": \"trips\", ...}\n\n"}},
        },
        404: {"description": "Unknown table"},
    },
)
async def stream_table_changes(table: str, request: Request, manager: RealtimeDep):
    """
    Stream changes on a table.

    The connection stays open until the client disconnects. Keep-alive pings
    are sent while the table is quiet.

    **Path Parameters:**
    - `table`: Table name, e.g. `trips`, `invoices`, `maintenance`
    """
    if table not in Base.metadata.tables:
        raise EntityNotFoundError("Table", table)
    logger.info(f"Starting change stream for table: {table}")

    async def event_generator():
        async for event in manager.stream(table):
            if await request.is_disconnected():
                logger.info(f"Client disconnected from change stream: {table}")
                break
            yield {"event": event.event_type.value, "data": event.model_dump_json()}

    return EventSourceResponse(event_generator(), ping=settings.realtime.ping_seconds)
