"""
API endpoints for vehicle incident reports.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Response, status

from fleetdesk.core.database.entities import IncidentReport, IncidentStatus
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.models.io import IncidentReportCreate, IncidentReportRead, IncidentReportUpdate
from fleetdesk.core.monitoring import log_document_generated
from fleetdesk.documents import attachment_headers, render_incident_pdf
from fleetdesk.server.services.deps import ReposDep

router = APIRouter(tags=["incidents"])


async def _require_incident(repos, incident_id: str) -> IncidentReport:
    incident = await repos.incidents.get_by_id(incident_id)
    if incident is None:
        raise EntityNotFoundError("Incident report", incident_id)
    return incident


@router.post(
    "",
    response_model=IncidentReportRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Incident Report",
    responses={404: {"description": "Vehicle or driver not found"}},
)
async def create_incident(payload: IncidentReportCreate, repos: ReposDep) -> IncidentReportRead:
    if await repos.vehicles.get_by_id(payload.vehicle_id) is None:
        raise EntityNotFoundError("Vehicle", payload.vehicle_id)
    if payload.driver_id and await repos.drivers.get_by_id(payload.driver_id) is None:
        raise EntityNotFoundError("Driver", payload.driver_id)
    incident = await repos.incidents.create(IncidentReport.model_validate(payload))
    return IncidentReportRead.model_validate(incident)


@router.get("", response_model=List[IncidentReportRead], summary="List Incident Reports")
async def list_incidents(
    repos: ReposDep,
    vehicle_id: Optional[str] = None,
    incident_status: Optional[IncidentStatus] = None,
) -> List[IncidentReportRead]:
    if vehicle_id:
        incidents = await repos.incidents.list_for_vehicle(vehicle_id)
        if incident_status is not None:
            incidents = [i for i in incidents if i.status == incident_status]
    else:
        incidents = await repos.incidents.list(filters={"status": incident_status})
    return [IncidentReportRead.model_validate(i) for i in incidents]


@router.get("/{incident_id}", response_model=IncidentReportRead, summary="Get Incident Report")
async def get_incident(incident_id: str, repos: ReposDep) -> IncidentReportRead:
    return IncidentReportRead.model_validate(await _require_incident(repos, incident_id))


@router.patch("/{incident_id}", response_model=IncidentReportRead, summary="Update Incident Report")
async def update_incident(incident_id: str, payload: IncidentReportUpdate, repos: ReposDep) -> IncidentReportRead:
    incident = await _require_incident(repos, incident_id)
    incident = await repos.incidents.apply_changes(incident, payload.model_dump(exclude_unset=True))
    return IncidentReportRead.model_validate(incident)


@router.get(
    "/{incident_id}/pdf",
    summary="Download Incident Report PDF",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}, 404: {"description": "Incident report not found"}},
)
async def download_incident_pdf(incident_id: str, repos: ReposDep) -> Response:
    incident = await _require_incident(repos, incident_id)
    vehicle = await repos.vehicles.get_by_id(incident.vehicle_id)
    driver = await repos.drivers.get_by_id(incident.driver_id) if incident.driver_id else None
    pdf = render_incident_pdf(incident, vehicle, driver)
    log_document_generated("incident_report", incident.id, len(pdf))
    filename = f"incident-report-{incident.id[:8]}.pdf"
    return Response(content=pdf, media_type="application/pdf", headers=attachment_headers(filename))


@router.delete("/{incident_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Incident Report")
async def delete_incident(incident_id: str, repos: ReposDep) -> None:
    if not await repos.incidents.delete(incident_id):
        raise EntityNotFoundError("Incident report", incident_id)
