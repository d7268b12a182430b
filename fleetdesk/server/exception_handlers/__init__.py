"""
Exception handlers for the fleetdesk server.

This package contains the domain error mapping, the catch-all handler, and a
setup function to register them with the FastAPI application.
"""

from fastapi import FastAPI

from fleetdesk.core.errors import FleetDeskError
from fleetdesk.core.logging_config import get_logger

from .domain_handler import domain_exception_handler, status_for
from .global_handler import global_exception_handler

logger = get_logger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(FleetDeskError, domain_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")


__all__ = ["domain_exception_handler", "global_exception_handler", "setup_exception_handlers", "status_for"]
