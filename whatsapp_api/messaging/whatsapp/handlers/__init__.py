"""WhatsApp handlers package."""

from .whatsapp_media_handler import WhatsAppMediaHandler
from .whatsapp_qr_handler import WhatsAppQRHandler

__all__ = ["WhatsAppMediaHandler", "WhatsAppQRHandler"]
