"""
Vehicle incident report entity models.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String
from sqlmodel import Field

from ..base import Base, new_uuid, utc_now


class IncidentType(str, Enum):
    ACCIDENT = "accident"
    THEFT = "theft"
    VANDALISM = "vandalism"
    BREAKDOWN = "breakdown"
    TRAFFIC_VIOLATION = "traffic_violation"
    OTHER = "other"


class IncidentSeverity(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"
    CRITICAL = "critical"


class IncidentStatus(str, Enum):
    REPORTED = "reported"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


class IncidentReportBase(Base):
    """Base fields for incident report."""

    vehicle_id: str = Field(index=True, max_length=36)
    driver_id: Optional[str] = Field(default=None, index=True, max_length=36)
    incident_date: date = Field(index=True)
    incident_time: Optional[str] = Field(default=None, max_length=5, description="HH:MM")
    incident_type: IncidentType = Field(sa_type=String(32))
    severity: IncidentSeverity = Field(default=IncidentSeverity.MINOR, sa_type=String(32))
    status: IncidentStatus = Field(default=IncidentStatus.REPORTED, sa_type=String(32), index=True)
    location: str
    description: str
    reported_by: str
    injuries_reported: bool = False
    third_party_involved: bool = False
    third_party_details: Optional[str] = None
    witness_details: Optional[str] = None
    police_report_number: Optional[str] = None
    insurance_claim_number: Optional[str] = None
    estimated_damage_cost: Optional[float] = Field(default=None, ge=0)
    actual_repair_cost: Optional[float] = Field(default=None, ge=0)
    photos_attached: bool = False
    follow_up_required: bool = False
    follow_up_date: Optional[date] = None
    damage_details: Optional[str] = None
    notes: Optional[str] = None


class IncidentReport(IncidentReportBase, table=True):
    """Persistent vehicle incident report.

    Table: vehicle_incident_reports
    """

    __tablename__ = "vehicle_incident_reports"

    id: str = Field(default_factory=new_uuid, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"IncidentReport(id={self.id}, type={self.incident_type}, severity={self.severity})"
