"""
Global Exception Handler for FastAPI Application.

Catches all unhandled exceptions and logs detailed information including an
error ID and the request context, then answers with a generic 500.
"""

import traceback

from fastapi import Request
from fastapi.responses import JSONResponse

from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.monitoring import log_error

logger = get_logger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception and return a JSON 500 response.

    The response carries an ``error_id`` that clients can quote when reporting
    the problem; the same id is in the log record.
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )
