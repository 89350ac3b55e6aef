"""
Basic message models for WhatsApp messaging: text and reactions.
"""

from typing import Any, ClassVar

from pydantic import Field, model_validator

from .base_models import ClientMessage
from .constraints import as_input_dict, require, require_text


class Text(ClientMessage):
    """Text message.

    Also used as the content of a text ``Header`` for interactive messages,
    where the stricter 60 character limit applies.
    """

    message_type: ClassVar[str] = "text"

    body: str = Field(..., description="Text content of the message")
    preview_url: bool | None = Field(
        None, description="Render a preview for the first URL in the body"
    )

    @model_validator(mode="before")
    @classmethod
    def validate_text(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if isinstance(data, dict):
            require_text(data, "body", 4096, "Text")
            if data.get("preview_url") is False:
                data["preview_url"] = None
        return data


class Reaction(ClientMessage):
    """Reaction to a previously received message.

    An empty emoji removes an existing reaction.
    """

    message_type: ClassVar[str] = "reaction"

    message_id: str = Field(..., description="ID of the message to react to")
    emoji: str = Field("", description="Emoji to react with, empty to remove")

    @model_validator(mode="before")
    @classmethod
    def validate_reaction(cls, data: Any) -> Any:
        if isinstance(data, dict):
            require(data, "message_id", "Reaction")
        return data
