"""
WhatsApp webhook processor.

Turns a notification payload into ``MessageEvent`` and ``StatusEvent`` objects,
one per message and one per status, in the order they appear.
"""

from typing import Any

from pydantic import ValidationError

from whatsapp_api.core.logging.logger import get_logger
from whatsapp_api.webhooks.whatsapp.events import MessageEvent, StatusEvent
from whatsapp_api.webhooks.whatsapp.validators import WebhookError
from whatsapp_api.webhooks.whatsapp.webhook_container import (
    WebhookValue,
    WhatsAppWebhook,
)

WebhookEvent = MessageEvent | StatusEvent


class WhatsAppWebhookProcessor:
    """Parses WhatsApp Business Platform notifications into events."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def parse_webhook(self, data: dict[str, Any]) -> WhatsAppWebhook:
        """
        Validate the notification envelope.

        Raises:
            WebhookError: 400 if the payload is not a WhatsApp notification
        """
        if not isinstance(data, dict) or "object" not in data:
            raise WebhookError(400, "Invalid request")

        try:
            return WhatsAppWebhook.model_validate(data)
        except ValidationError as e:
            self.logger.error(f"Webhook payload failed validation: {e}")
            raise WebhookError(400, "Invalid request") from e

    def extract_events(self, data: dict[str, Any]) -> list[WebhookEvent]:
        """
        Build the events carried by a notification.

        Args:
            data: The parsed JSON body of the webhook request

        Returns:
            Message and status events, in payload order

        Raises:
            WebhookError: 400 if the payload is not a WhatsApp notification
        """
        webhook = self.parse_webhook(data)

        events: list[WebhookEvent] = []
        for entry in webhook.entry:
            for change in entry.changes:
                events.extend(self._value_events(change.value, data))

        self.logger.debug(f"Extracted {len(events)} events from webhook")
        return events

    def _value_events(
        self, value: WebhookValue, raw: dict[str, Any]
    ) -> list[WebhookEvent]:
        phone_id = value.metadata.phone_number_id
        events: list[WebhookEvent] = []

        for message in value.messages or []:
            sender = message.get("from")
            contact = value.find_contact(sender)
            name = contact.profile.name if contact and contact.profile else None
            events.append(
                MessageEvent(
                    phone_id=phone_id,
                    from_=sender or (contact.wa_id if contact else ""),
                    name=name,
                    message=message,
                    raw=raw,
                )
            )

        for status in value.statuses or []:
            events.append(
                StatusEvent(
                    phone_id=phone_id,
                    phone=status.get("recipient_id", ""),
                    status=status.get("status", ""),
                    id=status.get("id", ""),
                    conversation=status.get("conversation"),
                    pricing=status.get("pricing"),
                    errors=status.get("errors"),
                    raw=raw,
                )
            )

        if value.errors:
            self.logger.warning(f"Webhook reported errors for {phone_id}: {value.errors}")

        return events
