"""
Webhook container models for WhatsApp Business Platform notifications.

These models describe the envelope of a notification (object, entries,
changes, metadata, contacts). Individual messages and statuses are kept as raw
dictionaries and handed to listeners unchanged, so new message types never
break parsing.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WhatsAppMetadata(BaseModel):
    """Business phone number the notification is addressed to."""

    model_config = ConfigDict(extra="allow")

    display_phone_number: str | None = Field(
        None, description="Display phone number of the business"
    )
    phone_number_id: str = Field(..., description="Business phone number ID")


class WhatsAppProfile(BaseModel):
    """Public profile of the user."""

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(None, description="Profile name of the user")


class WhatsAppContact(BaseModel):
    """Sender information for incoming messages."""

    model_config = ConfigDict(extra="allow")

    wa_id: str = Field(..., description="WhatsApp ID of the user")
    profile: WhatsAppProfile | None = Field(None, description="User profile")


class WebhookValue(BaseModel):
    """
    The value object containing the notification data.

    Carries incoming ``messages`` (with their ``contacts``) and/or outgoing
    message ``statuses``.
    """

    model_config = ConfigDict(extra="allow")

    messaging_product: Literal["whatsapp"] = Field(
        ..., description="Always 'whatsapp' for WhatsApp Business webhooks"
    )
    metadata: WhatsAppMetadata = Field(..., description="Business phone metadata")
    contacts: list[WhatsAppContact] | None = Field(
        None, description="Contact information (present for incoming messages)"
    )
    messages: list[dict[str, Any]] | None = Field(
        None, description="Incoming messages, as received"
    )
    statuses: list[dict[str, Any]] | None = Field(
        None, description="Outgoing message statuses, as received"
    )
    errors: list[dict[str, Any]] | None = Field(
        None, description="System, app, or account level errors"
    )

    @field_validator("messages", "statuses", "errors")
    @classmethod
    def validate_arrays_not_empty(cls, v: list[dict] | None) -> list[dict] | None:
        """Convert empty arrays to None for cleaner logic."""
        if v is not None and len(v) == 0:
            return None
        return v

    def find_contact(self, wa_id: str | None) -> WhatsAppContact | None:
        """Find the contact entry of a sender, falling back to the first one."""
        if not self.contacts:
            return None
        for contact in self.contacts:
            if contact.wa_id == wa_id:
                return contact
        return self.contacts[0]


class WebhookChange(BaseModel):
    """Change object describing what changed in the webhook."""

    model_config = ConfigDict(extra="allow")

    field: str = Field(..., description="Subscribed field, 'messages' for messages")
    value: WebhookValue = Field(..., description="The notification data")


class WebhookEntry(BaseModel):
    """Entry for one WhatsApp Business Account."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="WhatsApp Business Account ID")
    changes: list[WebhookChange] = Field(
        ..., description="Array of changes (typically contains one change)"
    )


class WhatsAppWebhook(BaseModel):
    """Top-level notification posted to the webhook URL."""

    model_config = ConfigDict(extra="allow")

    object: str = Field(..., description="Always 'whatsapp_business_account'")
    entry: list[WebhookEntry] = Field(..., description="Entries of the notification")
