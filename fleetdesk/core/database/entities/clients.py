"""
Client entity models.

Clients are billed for trips and receive invoices and quotations.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String
from sqlmodel import Field

from ..base import Base, new_uuid, utc_now


class ClientType(str, Enum):
    ORGANIZATION = "organization"
    INDIVIDUAL = "individual"


class ClientBase(Base):
    """Base fields for client."""

    name: str = Field(index=True)
    type: ClientType = Field(default=ClientType.ORGANIZATION, sa_type=String(32))
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    contact: Optional[str] = Field(default=None, description="Primary contact person")
    website: Optional[str] = None
    is_archived: bool = Field(default=False, index=True)


class Client(ClientBase, table=True):
    """Persistent client record.

    Table: clients
    """

    __tablename__ = "clients"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"Client(id={self.id}, name={self.name})"
