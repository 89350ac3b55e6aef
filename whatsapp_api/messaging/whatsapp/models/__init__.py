"""WhatsApp models package."""

from .base_models import ClientMessage, build_message_payload
from .basic_models import Reaction, Text
from .errors import (
    CardinalityError,
    FormatViolationError,
    InvalidCombinationError,
    LengthExceededError,
    MissingFieldError,
    UniquenessError,
    WhatsAppConfigurationError,
    WhatsAppValidationError,
)
from .interactive_models import (
    ActionButtons,
    ActionCatalog,
    ActionList,
    Body,
    Button,
    Footer,
    Header,
    HeaderType,
    Interactive,
    InteractiveType,
    ListSection,
    Product,
    ProductSection,
    Row,
)
from .media_models import Audio, Document, Image, MediaType, Sticker, Video
from .specialized_models import Location

__all__ = [
    "ClientMessage",
    "build_message_payload",
    "Text",
    "Reaction",
    "Location",
    "MediaType",
    "Image",
    "Video",
    "Audio",
    "Document",
    "Sticker",
    "Interactive",
    "InteractiveType",
    "Header",
    "HeaderType",
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
    "WhatsAppValidationError",
    "MissingFieldError",
    "LengthExceededError",
    "FormatViolationError",
    "CardinalityError",
    "UniquenessError",
    "InvalidCombinationError",
    "WhatsAppConfigurationError",
]
