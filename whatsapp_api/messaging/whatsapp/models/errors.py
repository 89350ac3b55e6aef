"""
Validation errors raised while building outbound WhatsApp messages.

All errors derive from ``Exception`` rather than ``ValueError`` so that they
propagate unchanged out of pydantic validators instead of being folded into a
``pydantic.ValidationError``.
"""

from typing import Any


class WhatsAppValidationError(Exception):
    """Base exception for WhatsApp message validation errors."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(message)


class MissingFieldError(WhatsAppValidationError):
    """A required field is absent or empty."""


class LengthExceededError(WhatsAppValidationError):
    """A text field or payload is longer than the platform allows."""


class FormatViolationError(WhatsAppValidationError):
    """A field is present but malformed (e.g. surrounding spaces in an id)."""


class CardinalityError(WhatsAppValidationError):
    """A collection has too few or too many children."""


class UniquenessError(WhatsAppValidationError):
    """Two children of a collection share an identifying field."""


class InvalidCombinationError(WhatsAppValidationError):
    """Fields are individually valid but not allowed together."""


class WhatsAppConfigurationError(Exception):
    """The client was constructed with missing or invalid settings."""
