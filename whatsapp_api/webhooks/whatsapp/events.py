"""
Event models emitted to listeners of the WhatsApp API client.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MessageEvent(BaseModel):
    """An incoming message from a user."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    phone_id: str = Field(..., description="Business phone ID that received the message")
    from_: str = Field(..., alias="from", description="WhatsApp ID of the sender")
    name: str | None = Field(None, description="Profile name of the sender")
    message: dict[str, Any] = Field(..., description="The message object, as received")
    raw: dict[str, Any] = Field(..., description="The full notification payload")


class StatusEvent(BaseModel):
    """A delivery status update for an outgoing message."""

    model_config = ConfigDict(frozen=True)

    phone_id: str = Field(..., description="Business phone ID that sent the message")
    phone: str = Field(..., description="WhatsApp ID of the recipient")
    status: str = Field(..., description="sent, delivered, read or failed")
    id: str = Field(..., description="ID of the message the status refers to")
    conversation: dict[str, Any] | None = Field(
        None, description="Conversation information, if provided"
    )
    pricing: dict[str, Any] | None = Field(
        None, description="Pricing information, if provided"
    )
    errors: list[dict[str, Any]] | None = Field(
        None, description="Errors for failed deliveries"
    )
    raw: dict[str, Any] = Field(..., description="The full notification payload")


class SentEvent(BaseModel):
    """A message sent through ``WhatsAppAPI.send_message``."""

    model_config = ConfigDict(frozen=True)

    phone_id: str = Field(..., description="Business phone ID that sent the message")
    to: str = Field(..., description="Recipient of the message")
    type: str = Field(..., description="Message type (text, image, interactive, ...)")
    message: dict[str, Any] = Field(..., description="The serialized message object")
    request: dict[str, Any] = Field(..., description="The full request payload")
    id: str | None = Field(None, description="Message ID assigned by the server")
    response: dict[str, Any] | None = Field(
        None, description="Decoded server response, when parsed"
    )
