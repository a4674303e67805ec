"""Inbound message model.

Only the body and sender are needed for extraction; the remaining fields are
carried through so scan results can be traced back to their source message.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class SmsMessage(BaseModel):
    """A short message as delivered by the message source."""

    text: str = Field(description="Raw message body")
    sender: str = Field(default="", description="Phone number, short code or email-like sender")

    message_id: str | None = Field(default=None, description="Source message ID")
    received_at: datetime | None = Field(default=None, description="When the message was received")
