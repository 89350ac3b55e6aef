"""
Media message models for WhatsApp messaging.

A media message references either an uploaded media ID or a public link,
never both. Image, video and document messages may carry a caption; audio and
sticker messages have no caption capability at all.
"""

from enum import Enum
from typing import Any, ClassVar

from pydantic import Field, model_validator

from .base_models import ClientMessage
from .constraints import as_input_dict, check_length
from .errors import FormatViolationError, InvalidCombinationError, MissingFieldError


class MediaType(Enum):
    """Supported media types for WhatsApp uploads."""

    AUDIO = "audio"
    DOCUMENT = "document"
    IMAGE = "image"
    STICKER = "sticker"
    VIDEO = "video"

    @classmethod
    def get_supported_mime_types(cls, media_type: "MediaType") -> set[str]:
        """Returns set of supported MIME types for each media type."""
        supported_types = {
            cls.AUDIO: {
                "audio/aac",
                "audio/mp4",
                "audio/mpeg",
                "audio/amr",
                "audio/ogg",
            },
            cls.DOCUMENT: {
                "text/plain",
                "application/pdf",
                "application/vnd.ms-powerpoint",
                "application/msword",
                "application/vnd.ms-excel",
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                "application/vnd.openxmlformats-officedocument.presentationml.presentation",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            },
            cls.IMAGE: {"image/jpeg", "image/png"},
            cls.STICKER: {"image/webp"},
            cls.VIDEO: {"video/3gp", "video/mp4"},
        }
        return supported_types[media_type]

    @classmethod
    def get_max_file_size(cls, media_type: "MediaType") -> int:
        """Returns maximum file size in bytes (decimal units) for each media type."""
        max_sizes = {
            cls.AUDIO: 16_000_000,
            cls.DOCUMENT: 100_000_000,
            cls.IMAGE: 5_000_000,
            cls.STICKER: 500_000,
            cls.VIDEO: 16_000_000,
        }
        return max_sizes[media_type]

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "MediaType | None":
        """Resolve the media type a MIME type uploads as, or None if unsupported."""
        for media_type in cls:
            if mime_type in cls.get_supported_mime_types(media_type):
                return media_type
        return None

    @classmethod
    def all_mime_types(cls) -> set[str]:
        supported: set[str] = set()
        for media_type in cls:
            supported.update(cls.get_supported_mime_types(media_type))
        return supported


class MediaMessage(ClientMessage):
    """Base media message: exactly one of ``id`` or ``link``."""

    supports_caption: ClassVar[bool] = False

    id: str | None = Field(None, description="ID of previously uploaded media")
    link: str | None = Field(None, description="Public http(s) URL of the media")

    @model_validator(mode="before")
    @classmethod
    def validate_source(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if not isinstance(data, dict):
            return data

        name = cls.__name__
        media_id = data.get("id") or None
        link = data.get("link") or None
        if media_id is None and link is None:
            raise MissingFieldError(f"{name} must have an id or a link", "id")
        if media_id is not None and link is not None:
            raise InvalidCombinationError(
                f"{name} must have either an id or a link, not both", "link", link
            )
        if isinstance(link, str) and not link.startswith(("http://", "https://")):
            raise FormatViolationError(
                f"{name} link must start with http:// or https://", "link", link
            )
        data["id"], data["link"] = media_id, link

        if data.get("caption") is not None and not cls.supports_caption:
            raise InvalidCombinationError(
                f"{name} does not support captions", "caption", data["caption"]
            )
        if cls.supports_caption:
            data["caption"] = data.get("caption") or None
            check_length(data["caption"], 1024, "caption", name)
        return data


class CaptionedMediaMessage(MediaMessage):
    """Media message that may carry a caption."""

    supports_caption: ClassVar[bool] = True

    caption: str | None = Field(None, description="Optional caption")


class Image(CaptionedMediaMessage):
    """Image message (JPEG or PNG, up to 5MB)."""

    message_type: ClassVar[str] = "image"


class Video(CaptionedMediaMessage):
    """Video message (MP4 or 3GP, up to 16MB)."""

    message_type: ClassVar[str] = "video"


class Document(CaptionedMediaMessage):
    """Document message, optionally with the filename shown to the user."""

    message_type: ClassVar[str] = "document"

    filename: str | None = Field(None, description="Filename shown to the user")


class Audio(MediaMessage):
    """Audio message. Captions are not supported."""

    message_type: ClassVar[str] = "audio"


class Sticker(MediaMessage):
    """Sticker message (WebP). Captions are not supported."""

    message_type: ClassVar[str] = "sticker"
