"""Unit tests for Twilio SMS delivery."""

from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest

from fleetdesk.core.errors import NotificationDeliveryError, NotificationNotConfiguredError
from fleetdesk.notifications import TwilioSmsSender, normalize_phone
from fleetdesk.server.core.config import TwilioConfig


@pytest.mark.parametrize(
    "raw, expected",
    [("252 61-123", "+25261123"), ("+252 (61) 123", "+25261123"), ("", "+")],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


class TestTwilioSmsSender:
    async def test_send_posts_form(self, twilio_config, no_backoff):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["form"] = parse_qs(request.content.decode())
            captured["auth"] = request.headers["Authorization"]
            return httpx.Response(201, json={"sid": "SM42"})

        sender = TwilioSmsSender(
            twilio_config, retry=no_backoff, client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
        )

        result = await sender.send("252 61 555", "Pickup at 10:00")

        assert result.success
        assert result.message_sid == "SM42"
        assert result.to == "+25261555"
        assert captured["url"] == "http://mock/twilio/Accounts/AC123/Messages.json"
        assert captured["form"] == {"From": ["+15550001111"], "To": ["+25261555"], "Body": ["Pickup at 10:00"]}
        assert captured["auth"].startswith("Basic ")

    async def test_missing_credentials(self, no_backoff):
        sender = TwilioSmsSender(TwilioConfig(account_sid="AC123", base_url="http://mock/twilio"), retry=no_backoff)

        with pytest.raises(NotificationNotConfiguredError, match="SMS service not configured"):
            await sender.send("+1", "hi")

    async def test_provider_rejection(self, twilio_config, no_backoff):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"message": "The 'To' number is not a valid phone number."})

        sender = TwilioSmsSender(
            twilio_config, retry=no_backoff, client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
        )

        with pytest.raises(NotificationDeliveryError) as exc_info:
            await sender.send("+1", "hi")

        assert exc_info.value.status_code == 400
        assert "not a valid phone number" in exc_info.value.details
