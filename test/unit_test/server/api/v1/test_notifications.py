"""API tests for SMS notifications."""

from urllib.parse import parse_qs

import pytest
from httpx import AsyncClient

from fleetdesk.notifications import TwilioSmsSender
from fleetdesk.server.core.config import TwilioConfig
from fleetdesk.server.services.deps import get_sms_sender

pytestmark = pytest.mark.asyncio


async def test_send_sms(client: AsyncClient, outbox):
    response = await client.post(
        "/api/v1/notifications/sms",
        json={"to": "252 61-123 4567", "message": "Pickup at 10:00, Terminal 2", "trip_id": "trip-1"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message_sid": "SM123", "to": "+252611234567"}
    (request,) = outbox
    assert str(request.url) == "http://mock/twilio/Accounts/AC123/Messages.json"
    form = parse_qs(request.content.decode())
    assert form["To"] == ["+252611234567"]
    assert form["From"] == ["+15550001111"]
    assert form["Body"] == ["Pickup at 10:00, Terminal 2"]


async def test_empty_message_is_rejected(client: AsyncClient, outbox):
    response = await client.post("/api/v1/notifications/sms", json={"to": "+252611234567", "message": ""})

    assert response.status_code == 422
    assert outbox == []


async def test_unconfigured_sms(client: AsyncClient):
    from fleetdesk.server.main import app

    app.dependency_overrides[get_sms_sender] = lambda: TwilioSmsSender(TwilioConfig())

    response = await client.post("/api/v1/notifications/sms", json={"to": "+252611234567", "message": "hi"})

    assert response.status_code == 503
    assert response.json()["configured"] is False
