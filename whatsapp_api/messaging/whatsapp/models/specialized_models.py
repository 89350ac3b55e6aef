"""
WhatsApp specialized message models: location sharing.
"""

from typing import Any, ClassVar

from pydantic import Field, model_validator

from .base_models import ClientMessage
from .constraints import as_input_dict
from .errors import FormatViolationError, MissingFieldError


class Location(ClientMessage):
    """Geographic location message.

    The address is only displayed by WhatsApp clients when a name is present.
    """

    message_type: ClassVar[str] = "location"

    longitude: float = Field(..., description="Longitude of the location")
    latitude: float = Field(..., description="Latitude of the location")
    name: str | None = Field(None, description="Name of the location")
    address: str | None = Field(None, description="Address of the location")

    @model_validator(mode="before")
    @classmethod
    def validate_coordinates(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if not isinstance(data, dict):
            return data

        for field, limit in (("longitude", 180), ("latitude", 90)):
            value = data.get(field)
            if value is None:
                raise MissingFieldError(f"Location must have a {field}", field)
            if isinstance(value, int | float) and not -limit <= value <= limit:
                raise FormatViolationError(
                    f"Location {field} must be between -{limit} and {limit}",
                    field,
                    value,
                )

        data["name"] = data.get("name") or None
        data["address"] = data.get("address") or None
        return data
