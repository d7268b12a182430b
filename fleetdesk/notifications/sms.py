"""SMS delivery through the Twilio REST API."""

from __future__ import annotations

import re
from typing import Optional

import httpx

from fleetdesk.core.errors import NotificationDeliveryError, NotificationNotConfiguredError
from fleetdesk.core.logging_config import get_logger
from fleetdesk.core.models.io import SmsResult
from fleetdesk.server.core.config import RetryConfig, TwilioConfig, settings

from .transport import RetryingHttpClient

logger = get_logger(__name__)

_NOT_PHONE_CHARS = re.compile(r"[^\d+]")


def normalize_phone(raw: str) -> str:
    """Keep digits and ``+`` only, and make sure the number starts with ``+``."""
    digits = _NOT_PHONE_CHARS.sub("", raw or "")
    return digits if digits.startswith("+") else f"+{digits}"


class TwilioSmsSender:
    def __init__(
        self,
        config: Optional[TwilioConfig] = None,
        *,
        retry: Optional[RetryConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or settings.twilio
        self._http = RetryingHttpClient(retry=retry, client=client, timeout=self.config.timeout)

    @property
    def configured(self) -> bool:
        return self.config.configured

    async def send(self, to: str, message: str) -> SmsResult:
        """Send ``message`` to ``to``.

        Raises:
            NotificationNotConfiguredError: when Twilio credentials are missing
            NotificationDeliveryError: when Twilio rejects the message or is unreachable
        """
        if not self.configured:
            logger.warning("Twilio credentials not configured. SMS sending disabled.")
            raise NotificationNotConfiguredError("SMS", "Please set up Twilio credentials.")

        phone_number = normalize_phone(to)
        url = f"{self.config.base_url.rstrip('/')}/Accounts/{self.config.account_sid}/Messages.json"
        try:
            response = await self._http.post(
                url,
                data={"From": self.config.phone_number, "To": phone_number, "Body": message},
                auth=(self.config.account_sid, self.config.auth_token),
            )
        except httpx.TransportError as e:
            raise NotificationDeliveryError("SMS", str(e)) from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.status_code >= 400:
            details = payload.get("message") or "Unknown error"
            logger.error(f"Twilio error ({response.status_code}): {details}")
            raise NotificationDeliveryError("SMS", details, status_code=response.status_code)

        logger.info(f"SMS sent to {phone_number}")
        return SmsResult(success=True, message_sid=payload.get("sid"), to=phone_number)
