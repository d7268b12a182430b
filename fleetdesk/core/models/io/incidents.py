"""
Vehicle incident report I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.core.database.entities.incident_reports import (
    IncidentReportBase,
    IncidentSeverity,
    IncidentStatus,
    IncidentType,
)


class IncidentReportCreate(IncidentReportBase):
    """Schema for creating an incident report via API."""


class IncidentReportRead(IncidentReportBase):
    """Schema for reading an incident report from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class IncidentReportUpdate(BaseModel):
    """Schema for updating an incident report via API."""

    vehicle_id: Optional[str] = None
    driver_id: Optional[str] = None
    incident_date: Optional[date] = None
    incident_time: Optional[str] = None
    incident_type: Optional[IncidentType] = None
    severity: Optional[IncidentSeverity] = None
    status: Optional[IncidentStatus] = None
    location: Optional[str] = None
    description: Optional[str] = None
    reported_by: Optional[str] = None
    injuries_reported: Optional[bool] = None
    third_party_involved: Optional[bool] = None
    third_party_details: Optional[str] = None
    witness_details: Optional[str] = None
    police_report_number: Optional[str] = None
    insurance_claim_number: Optional[str] = None
    estimated_damage_cost: Optional[float] = Field(default=None, ge=0)
    actual_repair_cost: Optional[float] = Field(default=None, ge=0)
    photos_attached: Optional[bool] = None
    follow_up_required: Optional[bool] = None
    follow_up_date: Optional[date] = None
    damage_details: Optional[str] = None
    notes: Optional[str] = None
