"""Fixtures for API tests.

The app runs against the per-test SQLite session from the unit test
conftest. Email and SMS senders talk to ``httpx.MockTransport`` handlers that
record every request, and uploads go to a temporary directory.
"""

from datetime import date
from typing import AsyncGenerator, Callable, Dict, List
from unittest.mock import patch

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.notifications import ResendEmailSender, TwilioSmsSender
from fleetdesk.server.core.config import ResendConfig, RetryConfig, StorageConfig, TwilioConfig
from fleetdesk.storage import LocalFileStorage

NO_RETRY = RetryConfig(max_retries=0, backoff_initial=0, backoff_factor=1, backoff_max=0)


@pytest.fixture
def outbox() -> List[httpx.Request]:
    """Requests sent to the email and SMS providers during a test."""
    return []


@pytest.fixture
def email_sender(outbox) -> ResendEmailSender:
    def handler(request: httpx.Request) -> httpx.Response:
        outbox.append(request)
        return httpx.Response(200, json={"id": "email_123"})

    return ResendEmailSender(
        ResendConfig(api_key="re_test_key", base_url="http://mock/resend"),
        retry=NO_RETRY,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def sms_sender(outbox) -> TwilioSmsSender:
    def handler(request: httpx.Request) -> httpx.Response:
        outbox.append(request)
        return httpx.Response(201, json={"sid": "SM123"})

    return TwilioSmsSender(
        TwilioConfig(account_sid="AC123", auth_token="secret", phone_number="+15550001111", base_url="http://mock/twilio"),
        retry=NO_RETRY,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def storage(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(StorageConfig(root=str(tmp_path), public_base_url="/files", max_upload_bytes=1024))


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession, email_sender, sms_sender, storage
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from fleetdesk.core.database import get_session
    from fleetdesk.server.main import app
    from fleetdesk.server.services.deps import get_email_sender, get_sms_sender
    from fleetdesk.storage import get_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_sms_sender] = lambda: sms_sender
    app.dependency_overrides[get_storage] = lambda: storage

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("fleetdesk.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()


@pytest.fixture
def set_today() -> Callable[[date], None]:
    """Pin the business date the API uses for due dates, overdue checks and billing months."""
    from fleetdesk.server.main import app
    from fleetdesk.server.services.deps import get_today

    def _set(value: date) -> None:
        app.dependency_overrides[get_today] = lambda: value

    return _set


async def create(client: AsyncClient, path: str, payload: Dict) -> Dict:
    """POST ``payload`` and return the created resource."""
    response = await client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def api_vehicle(client: AsyncClient) -> Dict:
    return await create(
        client,
        "/api/v1/vehicles",
        {"make": "Toyota", "model": "Land Cruiser", "registration": "SO-1234", "type": "armoured"},
    )


@pytest_asyncio.fixture
async def api_driver(client: AsyncClient) -> Dict:
    return await create(
        client, "/api/v1/drivers", {"name": "Abdi Hassan", "license_number": "LIC-77", "phone": "+252611111111"}
    )


@pytest_asyncio.fixture
async def api_client(client: AsyncClient) -> Dict:
    return await create(
        client,
        "/api/v1/clients",
        {"name": "Acme Logistics", "email": "billing@acme.example", "address": "Airport Road"},
    )
