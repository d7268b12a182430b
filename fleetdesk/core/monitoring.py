"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for monitoring and
tracing of the fleetdesk server, including:
- API endpoint tracing
- Database operation monitoring
- Outbound HTTP calls to the email and SMS providers
- Business events (documents rendered, notifications sent, lease billing runs)

Logfire is only configured when ``LOGFIRE_ENABLED`` is true and a token is
present. The ``log_*`` helpers are safe to call either way.
"""

import os
from typing import Optional

import logfire
from fastapi import FastAPI

from fleetdesk.core.logging_config import get_logger

logger = get_logger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "fleetdesk-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

# Feature flags
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")

_initialized = False


def initialize_logfire(app: FastAPI | None = None) -> bool:
    """
    Initialize Logfire for monitoring and tracing.

    Instruments SQLAlchemy, HTTPX and (when ``app`` is given) FastAPI.

    Args:
        app: FastAPI application instance for endpoint instrumentation (optional).

    Returns:
        True if Logfire was configured, False if monitoring stays disabled.
    """
    global _initialized

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return False

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False

    if LOGFIRE_TRACE_SQLALCHEMY:
        try:
            logfire.instrument_sqlalchemy()
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument SQLAlchemy: {e}")

    if LOGFIRE_TRACE_HTTPX:
        try:
            logfire.instrument_httpx()
            logger.info("Logfire: HTTPX instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument HTTPX: {e}")

    if LOGFIRE_TRACE_FASTAPI and app is not None:
        try:
            logfire.instrument_fastapi(app=app)
            logger.info("Logfire: FastAPI instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument FastAPI: {e}")

    _initialized = True
    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")
    return True


def is_enabled() -> bool:
    return _initialized


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _initialized:
        return
    try:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not _initialized:
        return
    try:
        logfire.error(f"{error_type}: {error_message}", **(context or {}))
    except Exception:
        logger.debug(f"Could not log error to Logfire: {error_type}")


def log_document_generated(kind: str, document_id: str, size_bytes: int) -> None:
    """
    Record that a PDF or CSV document was rendered.

    Args:
        kind: Document kind (invoice, quotation, incident, maintenance_csv, ...)
        document_id: Identifier of the rendered record, or the export name
        size_bytes: Size of the rendered payload
    """
    logger.debug(f"Rendered {kind} document {document_id} ({size_bytes} bytes)")
    if not _initialized:
        return
    try:
        logfire.info("Document generated", kind=kind, document_id=document_id, size_bytes=size_bytes)
    except Exception:
        logger.debug(f"Could not log document generation to Logfire: {kind} {document_id}")


def log_notification_sent(channel: str, recipient: str, reference: Optional[str] = None) -> None:
    """
    Record a delivered notification.

    Args:
        channel: "email" or "sms"
        recipient: Destination address or phone number
        reference: Provider message id, when available
    """
    if not _initialized:
        return
    try:
        logfire.info("Notification sent", channel=channel, recipient=recipient, reference=reference)
    except Exception:
        logger.debug(f"Could not log notification to Logfire: {channel} {recipient}")


def log_lease_billing_run(period: str, generated_count: int, error_count: int) -> None:
    """
    Record the outcome of a lease invoice generation run.

    Args:
        period: Billing period label (YYYY-MM)
        generated_count: Number of invoices created
        error_count: Number of leases that failed
    """
    if not _initialized:
        return
    try:
        logfire.info(
            "Lease billing run completed",
            period=period,
            generated_count=generated_count,
            error_count=error_count,
        )
    except Exception:
        logger.debug(f"Could not log lease billing run to Logfire: {period}")
