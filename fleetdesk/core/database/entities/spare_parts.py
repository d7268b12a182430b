"""
Spare part entity models.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import DateTime, String
from sqlmodel import JSON, Field

from ..base import Base, new_uuid, utc_now


class PartStatus(str, Enum):
    """Stock level derived from quantity and min_stock_level."""

    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


class SparePartBase(Base):
    """Base fields for spare part."""

    name: str = Field(index=True)
    part_number: Optional[str] = Field(default=None, index=True)
    category: Optional[str] = None
    manufacturer: Optional[str] = None
    location: Optional[str] = Field(default=None, description="Storage location in the workshop")
    quantity: int = Field(default=0, ge=0, description="Units currently in stock")
    quantity_used: int = Field(default=0, ge=0, description="Units consumed by maintenance so far")
    unit_price: float = Field(default=0.0, ge=0)
    min_stock_level: int = Field(default=0, ge=0, description="Reorder threshold")
    status: PartStatus = Field(default=PartStatus.IN_STOCK, sa_type=String(32), index=True)
    purchase_date: Optional[date] = None
    last_used_date: Optional[date] = None
    last_ordered: Optional[date] = None
    maintenance_id: Optional[str] = Field(default=None, max_length=36, description="Last maintenance that used it")
    compatibility: List[str] = Field(default_factory=list, sa_type=JSON, description="Compatible vehicle models")


class SparePart(SparePartBase, table=True):
    """Persistent spare part inventory item.

    Table: spare_parts
    """

    __tablename__ = "spare_parts"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"SparePart(id={self.id}, name={self.name}, quantity={self.quantity})"
