"""
Unit tests for server exception handlers.

Tests cover the mapping of domain errors to HTTP responses, the global
catch-all handler, and registration on a FastAPI application.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient

from fleetdesk.core.errors import (
    BusinessRuleError,
    EntityNotFoundError,
    FleetDeskError,
    LeaseRateError,
    NotificationDeliveryError,
    NotificationNotConfiguredError,
    StorageError,
)
from fleetdesk.server.exception_handlers import setup_exception_handlers, status_for
from fleetdesk.server.exception_handlers.domain_handler import domain_exception_handler
from fleetdesk.server.exception_handlers.global_handler import global_exception_handler


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/test"
    request.query_params = {"page": "2"}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


def body_of(response: JSONResponse) -> dict:
    return json.loads(response.body.decode())


class TestStatusMapping:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (EntityNotFoundError("Vehicle", "v1"), 404),
            (BusinessRuleError("nope"), 422),
            (LeaseRateError("LSE-1"), 422),
            (NotificationNotConfiguredError("Email", "Set RESEND__API_KEY."), 503),
            (NotificationDeliveryError("SMS", "invalid number", status_code=400), 502),
            (StorageError("disk full"), 400),
            (FleetDeskError("generic"), 400),
        ],
    )
    def test_status_for(self, exc, expected):
        assert status_for(exc) == expected


class TestDomainExceptionHandler:
    @pytest.mark.asyncio
    async def test_not_found(self, mock_request):
        response = await domain_exception_handler(mock_request, EntityNotFoundError("Invoice", "abc"))

        assert response.status_code == 404
        assert body_of(response) == {"detail": "Invoice abc not found"}

    @pytest.mark.asyncio
    async def test_business_rule_with_problems(self, mock_request):
        exc = BusinessRuleError("Invalid line items", ["Item 1: description is required"])

        response = await domain_exception_handler(mock_request, exc)

        assert body_of(response) == {
            "detail": "Invalid line items",
            "problems": ["Item 1: description is required"],
        }

    @pytest.mark.asyncio
    async def test_business_rule_without_problems(self, mock_request):
        response = await domain_exception_handler(mock_request, BusinessRuleError("Already converted"))

        assert "problems" not in body_of(response)

    @pytest.mark.asyncio
    async def test_not_configured(self, mock_request):
        exc = NotificationNotConfiguredError("Email", "Please set up your Resend API key.")

        response = await domain_exception_handler(mock_request, exc)

        assert body_of(response) == {
            "detail": "Email service not configured. Please set up your Resend API key.",
            "configured": False,
        }

    @pytest.mark.asyncio
    async def test_delivery_error_details(self, mock_request):
        response = await domain_exception_handler(mock_request, NotificationDeliveryError("SMS", "bad number"))

        assert body_of(response) == {"detail": "Failed to send SMS: bad number", "details": "bad number"}

    @pytest.mark.asyncio
    async def test_logs_request(self, mock_request):
        with patch("fleetdesk.server.exception_handlers.domain_handler.logger") as mock_logger:
            await domain_exception_handler(mock_request, EntityNotFoundError("Trip", "t1"))

        message = mock_logger.info.call_args[0][0]
        assert "GET /api/v1/test -> 404" in message


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    @pytest.fixture(autouse=True)
    def quiet_monitoring(self):
        with patch("fleetdesk.server.exception_handlers.global_handler.log_error") as mock_log_error:
            yield mock_log_error

    @pytest.mark.asyncio
    async def test_returns_500_with_error_id(self, mock_request):
        exc = RuntimeError("Test error")

        with patch("fleetdesk.server.exception_handlers.global_handler.logger"):
            response = await global_exception_handler(mock_request, exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        assert body_of(response) == {
            "detail": "Internal server error",
            "error_id": id(exc),
            "error_type": "RuntimeError",
        }

    @pytest.mark.asyncio
    async def test_logs_request_context(self, mock_request):
        exc = ValueError("Test error")

        with patch("fleetdesk.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["exc_info"] is True
        extra = call_args[1]["extra"]
        assert extra["error_type"] == "ValueError"
        assert extra["method"] == "GET"
        assert extra["path"] == "/api/v1/test"
        assert extra["query_params"] == {"page": "2"}
        assert extra["client"] == "127.0.0.1"

    @pytest.mark.asyncio
    async def test_handles_missing_client(self, mock_request):
        mock_request.client = None

        with patch("fleetdesk.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, KeyError("x"))

        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"

    @pytest.mark.asyncio
    async def test_reports_to_monitoring(self, mock_request, quiet_monitoring):
        exc = TypeError("bad")

        with patch("fleetdesk.server.exception_handlers.global_handler.logger"):
            await global_exception_handler(mock_request, exc)

        quiet_monitoring.assert_called_once_with("TypeError", "bad", {"error_id": id(exc), "path": "/api/v1/test"})


class TestSetupExceptionHandlers:
    """Test suite for setup_exception_handlers function."""

    def test_registers_handlers(self):
        app = FastAPI()

        setup_exception_handlers(app)

        assert app.exception_handlers[FleetDeskError] is domain_exception_handler
        assert app.exception_handlers[Exception] is global_exception_handler

    @pytest.mark.asyncio
    async def test_handlers_answer_requests(self):
        app = FastAPI()
        setup_exception_handlers(app)

        @app.get("/missing")
        async def missing():
            raise EntityNotFoundError("Driver", "d1")

        @app.get("/boom")
        async def boom():
            raise RuntimeError("boom")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        with patch("fleetdesk.server.exception_handlers.global_handler.log_error"):
            async with AsyncClient(transport=transport, base_url="http://localhost") as client:
                missing_response = await client.get("/missing")
                boom_response = await client.get("/boom")

        assert missing_response.status_code == 404
        assert missing_response.json() == {"detail": "Driver d1 not found"}
        assert boom_response.status_code == 500
        assert boom_response.json()["error_type"] == "RuntimeError"
