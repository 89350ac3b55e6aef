"""
WhatsApp API facade.
"""

from .whatsapp_api import WhatsAppAPI

__all__ = ["WhatsAppAPI"]
