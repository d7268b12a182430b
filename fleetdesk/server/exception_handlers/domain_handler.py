"""
Domain Exception Handlers.

Translate ``FleetDeskError`` subclasses raised by business rules and
integrations into HTTP responses with a ``detail`` message.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from fleetdesk.core.errors import (
    BusinessRuleError,
    EntityNotFoundError,
    FleetDeskError,
    NotificationDeliveryError,
    NotificationNotConfiguredError,
)
from fleetdesk.core.logging_config import get_logger

logger = get_logger(__name__)


def status_for(exc: FleetDeskError) -> int:
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, BusinessRuleError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, NotificationNotConfiguredError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(exc, NotificationDeliveryError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_400_BAD_REQUEST


async def domain_exception_handler(request: Request, exc: FleetDeskError) -> JSONResponse:
    status_code = status_for(exc)
    content = {"detail": str(exc)}
    if isinstance(exc, BusinessRuleError) and exc.problems:
        content["problems"] = exc.problems
    if isinstance(exc, NotificationNotConfiguredError):
        content["configured"] = False
    if isinstance(exc, NotificationDeliveryError):
        content["details"] = exc.details

    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(status_code=status_code, content=content)
