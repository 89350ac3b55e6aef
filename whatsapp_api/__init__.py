"""
whatsapp_api - Python client for the WhatsApp Cloud API

Validated message models, an async API client and webhook ingestion.

Clean Import Interface:
- The API client and message models are exposed at top level
- The FastAPI router lives in whatsapp_api.api
"""

from .messaging.whatsapp.messenger import WhatsAppAPI
from .messaging.whatsapp.models import (
    ActionButtons,
    ActionCatalog,
    ActionList,
    Audio,
    Body,
    Button,
    Document,
    Footer,
    Header,
    Image,
    Interactive,
    ListSection,
    Location,
    Product,
    ProductSection,
    Reaction,
    Row,
    Sticker,
    Text,
    Video,
)
from .webhooks.whatsapp import MessageEvent, SentEvent, StatusEvent, WebhookError

# Dynamic version from pyproject.toml
from .core.config.settings import settings

__version__ = settings.version

__all__ = [
    # Client
    "WhatsAppAPI",
    # Messages
    "Text",
    "Reaction",
    "Location",
    "Image",
    "Video",
    "Audio",
    "Document",
    "Sticker",
    "Interactive",
    "Header",
    "Body",
    "Footer",
    "Row",
    "Button",
    "Product",
    "ListSection",
    "ProductSection",
    "ActionButtons",
    "ActionList",
    "ActionCatalog",
    # Events
    "MessageEvent",
    "StatusEvent",
    "SentEvent",
    "WebhookError",
]
