from __future__ import annotations

import pytest

from fleetdesk.server.core.config import ResendConfig, RetryConfig, TwilioConfig


@pytest.fixture
def no_backoff() -> RetryConfig:
    return RetryConfig(max_retries=2, backoff_initial=0, backoff_factor=1, backoff_max=0)


@pytest.fixture
def resend_config() -> ResendConfig:
    return ResendConfig(api_key="re_test_key", base_url="http://mock/resend")


@pytest.fixture
def twilio_config() -> TwilioConfig:
    return TwilioConfig(
        account_sid="AC123",
        auth_token="secret",
        phone_number="+15550001111",
        base_url="http://mock/twilio",
    )
