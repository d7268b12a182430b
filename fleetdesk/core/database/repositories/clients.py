"""
Client repository.
"""

from __future__ import annotations

from typing import List

from sqlmodel import select

from ..entities.clients import Client
from .base import SQLModelRepository


class ClientRepository(SQLModelRepository[Client]):
    """Repository for billed clients."""

    model = Client

    async def search(self, term: str, include_archived: bool = False) -> List[Client]:
        """Case-insensitive name search.

        Args:
            term: Substring to look for in the client name
            include_archived: Whether archived clients are returned too

        Returns:
            Matching clients ordered by name
        """
        stmt = select(Client).where(Client.name.ilike(f"%{term}%"))
        if not include_archived:
            stmt = stmt.where(Client.is_archived == False)  # noqa: E712
        return await self._fetch_all(stmt.order_by(Client.name))
