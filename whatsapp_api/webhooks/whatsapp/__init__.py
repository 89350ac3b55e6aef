"""
WhatsApp webhook ingestion: notification schema, validators and events.
"""

from .events import MessageEvent, SentEvent, StatusEvent
from .validators import (
    WebhookError,
    compute_signature,
    verify_challenge,
    verify_signature,
)
from .webhook_container import (
    WebhookChange,
    WebhookEntry,
    WebhookValue,
    WhatsAppContact,
    WhatsAppMetadata,
    WhatsAppProfile,
    WhatsAppWebhook,
)
from .webhook_processor import WhatsAppWebhookProcessor

__all__ = [
    # Events
    "MessageEvent",
    "StatusEvent",
    "SentEvent",
    # Validation
    "WebhookError",
    "compute_signature",
    "verify_signature",
    "verify_challenge",
    # Notification schema
    "WhatsAppWebhook",
    "WebhookEntry",
    "WebhookChange",
    "WebhookValue",
    "WhatsAppMetadata",
    "WhatsAppContact",
    "WhatsAppProfile",
    # Processing
    "WhatsAppWebhookProcessor",
]
