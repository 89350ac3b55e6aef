"""WhatsApp messaging utilities."""

from .error_helpers import is_authentication_error

__all__ = ["is_authentication_error"]
