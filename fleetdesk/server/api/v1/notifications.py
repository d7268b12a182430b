"""
API endpoints for outbound notifications.
"""

from __future__ import annotations

from fastapi import APIRouter

from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import SmsRequest, SmsResult
from fleetdesk.core.monitoring import log_notification_sent
from fleetdesk.server.services.deps import SmsSenderDep

logger = get_logger(__name__)

router = APIRouter(tags=["notifications"])


@router.post(
    "/sms",
    response_model=SmsResult,
    summary="Send SMS",
    description="Send a text message through Twilio, typically to notify a driver about a trip.",
    responses={
        200: {"description": "Message accepted by Twilio"},
        502: {"description": "Twilio rejected the message"},
        503: {"description": "SMS service not configured"},
    },
)
async def send_sms(request: SmsRequest, sender: SmsSenderDep) -> SmsResult:
    """
    Send an SMS.

    - **to**: Destination number; spaces and dashes are stripped and a leading ``+`` is added.
    - **message**: Message body.
    - **driver_id** / **trip_id**: Optional references recorded in the logs.
    """
    result = await sender.send(request.to, request.message)
    reference = request.trip_id or request.driver_id
    log_notification_sent("sms", result.to, reference)
    return result
