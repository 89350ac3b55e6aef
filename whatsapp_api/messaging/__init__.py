"""
Messaging components.

Usage:
    from whatsapp_api.messaging import WhatsAppAPI, WhatsAppClient

    from whatsapp_api.messaging import WhatsAppMediaHandler, WhatsAppQRHandler
"""

from .whatsapp.client import WhatsAppClient, WhatsAppFormDataBuilder, WhatsAppUrlBuilder
from .whatsapp.handlers import WhatsAppMediaHandler, WhatsAppQRHandler
from .whatsapp.messenger import WhatsAppAPI

__all__ = [
    # Facade
    "WhatsAppAPI",
    # Client
    "WhatsAppClient",
    "WhatsAppFormDataBuilder",
    "WhatsAppUrlBuilder",
    # Handlers
    "WhatsAppMediaHandler",
    "WhatsAppQRHandler",
]
