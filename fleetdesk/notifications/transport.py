"""Outbound HTTP with retry and exponential backoff.

Transport errors and 5xx responses are retried; 4xx responses are
returned to the caller immediately.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx

from fleetdesk.core.logging_config import get_logger
from fleetdesk.server.core.config import RetryConfig, settings

logger = get_logger(__name__)


class RetryingHttpClient:
    """Thin wrapper over ``httpx.AsyncClient`` adding a retry policy.

    Usage:
    - Pass an existing ``client`` to share connection pools or to inject a
      ``httpx.MockTransport`` in tests; it is then not closed by this wrapper.
    - Without one, a client is created per request and closed afterwards.
    """

    def __init__(
        self,
        *,
        retry: Optional[RetryConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 15.0,
    ) -> None:
        self._retry = retry or settings.retry
        self._client = client
        self._timeout = timeout

    def _backoff(self, retries: int) -> float:
        return min(self._retry.backoff_initial * (self._retry.backoff_factor**retries), self._retry.backoff_max)

    async def _send(self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> httpx.Response:
        retries = 0
        while True:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.TransportError as e:
                if retries >= self._retry.max_retries:
                    raise
                sleep_s = self._backoff(retries)
                logger.warning(
                    "Request to %s failed (%s); retrying in %ss (attempt %s/%s)",
                    url,
                    e,
                    sleep_s,
                    retries + 1,
                    self._retry.max_retries,
                )
            else:
                if response.status_code < 500 or retries >= self._retry.max_retries:
                    return response
                sleep_s = self._backoff(retries)
                logger.warning(
                    "Request to %s returned %s; retrying in %ss (attempt %s/%s)",
                    url,
                    response.status_code,
                    sleep_s,
                    retries + 1,
                    self._retry.max_retries,
                )
            retries += 1
            await asyncio.sleep(sleep_s)

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request, retrying transient failures.

        Raises:
            httpx.TransportError: when every attempt failed at the transport level
        """
        if self._client is not None:
            return await self._send(self._client, method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._send(client, method, url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)
