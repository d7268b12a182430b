"""
Outbound notifications: email through Resend and SMS through Twilio.

Both providers are called over HTTPS with httpx and share one retry policy.
"""

from .email import ResendEmailSender, invoice_subject, quotation_subject
from .sms import TwilioSmsSender, normalize_phone
from .transport import RetryingHttpClient

__all__ = [
    "ResendEmailSender",
    "RetryingHttpClient",
    "TwilioSmsSender",
    "invoice_subject",
    "normalize_phone",
    "quotation_subject",
]
