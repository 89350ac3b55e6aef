"""WhatsApp client package."""

from .whatsapp_client import WhatsAppClient, WhatsAppFormDataBuilder, WhatsAppUrlBuilder

__all__ = ["WhatsAppClient", "WhatsAppFormDataBuilder", "WhatsAppUrlBuilder"]
