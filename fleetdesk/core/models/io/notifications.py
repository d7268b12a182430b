"""
Notification I/O models for API requests and responses.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class SmsRequest(BaseModel):
    """Schema for sending an SMS via API."""

    to: str = Field(min_length=1, description="Destination phone number")
    message: str = Field(min_length=1, description="Message body")
    driver_id: Optional[str] = Field(default=None, description="Driver the message concerns")
    trip_id: Optional[str] = Field(default=None, description="Trip the message concerns")


class SmsResult(BaseModel):
    success: bool = True
    message_sid: Optional[str] = None
    to: str


class EmailRequest(BaseModel):
    """Optional overrides when emailing an invoice or quotation."""

    to: Optional[List[str]] = Field(default=None, description="Recipients; defaults to the client's email")


class EmailResult(BaseModel):
    success: bool = True
    message: str
    email_id: Optional[str] = None
