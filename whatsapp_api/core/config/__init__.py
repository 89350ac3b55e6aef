"""Configuration for the WhatsApp Cloud API client."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
