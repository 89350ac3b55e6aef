"""
Base model for outbound WhatsApp messages and the send payload builder.

Every message class carries a fixed ``message_type`` discriminant. The payload
builder reads it to pick the top-level key of the request body, so no model
ever stores or strips a type tag at runtime.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class ClientMessage(BaseModel):
    """Immutable outbound message component.

    Subclasses set ``message_type`` to the key the Cloud API expects for the
    message object (``"text"``, ``"image"``, ``"interactive"``, ...).
    """

    model_config = ConfigDict(frozen=True)

    message_type: ClassVar[str]

    def to_payload(self) -> dict[str, Any]:
        """Serialize the message object as sent to the API."""
        return self.model_dump(mode="json", exclude_none=True)


def build_message_payload(
    to: str, message: ClientMessage, context: str | None = None
) -> dict[str, Any]:
    """Build the request body for ``POST /{phone_id}/messages``.

    Args:
        to: Recipient phone number or WhatsApp ID
        message: Validated message object
        context: Optional message ID to reply to

    Returns:
        Payload ready to be sent as JSON
    """
    payload: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": to,
        "type": message.message_type,
        message.message_type: message.to_payload(),
    }
    if context:
        payload["context"] = {"message_id": context}
    return payload
