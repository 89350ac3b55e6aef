"""
WhatsApp QR code handler.

Manages message QR codes (short links with a prefilled message) of a business
phone number via the /PHONE_NUMBER_ID/message_qrdls endpoints.
"""

from typing import Any

import aiohttp

from whatsapp_api.core.logging.logger import get_logger
from whatsapp_api.messaging.whatsapp.client.whatsapp_client import WhatsAppClient
from whatsapp_api.messaging.whatsapp.models.errors import (
    FormatViolationError,
    MissingFieldError,
)

Response = dict[str, Any] | aiohttp.ClientResponse

QR_FORMATS = ("png", "svg")


class WhatsAppQRHandler:
    """Create, retrieve, update and delete message QR codes."""

    def __init__(self, client: WhatsAppClient):
        self.client = client
        self.logger = get_logger(__name__)

    async def create_qr(self, phone_id: str, message: str, format: str = "png") -> Response:
        """
        Generate a QR code for sharing the bot.

        Args:
            phone_id: The bot's phone ID
            message: The prefilled message of the QR code
            format: Image format, "png" or "svg"

        Raises:
            MissingFieldError: If phone_id or message is missing
            FormatViolationError: If format is not png or svg
        """
        if not phone_id:
            raise MissingFieldError("Phone ID must be specified", "phone_id")
        if not message:
            raise MissingFieldError("Message must be specified", "message")
        if format not in QR_FORMATS:
            raise FormatViolationError(
                "Format must be either 'png' or 'svg'", "format", format
            )

        return await self.client.post_request(
            self.client.url_builder.get_qr_url(phone_id),
            params={"generate_qr_image": format, "prefilled_message": message},
        )

    async def retrieve_qr(self, phone_id: str, qr_id: str | None = None) -> Response:
        """Get one QR code of the bot, or all of them when qr_id is omitted."""
        if not phone_id:
            raise MissingFieldError("Phone ID must be specified", "phone_id")

        return await self.client.get_request(
            self.client.url_builder.get_qr_url(phone_id, qr_id)
        )

    async def update_qr(self, phone_id: str, qr_id: str, message: str) -> Response:
        """Replace the prefilled message of a QR code."""
        if not phone_id:
            raise MissingFieldError("Phone ID must be specified", "phone_id")
        if not qr_id:
            raise MissingFieldError("ID must be specified", "id")
        if not message:
            raise MissingFieldError("Message must be specified", "message")

        return await self.client.post_request(
            self.client.url_builder.get_qr_url(phone_id, qr_id),
            params={"prefilled_message": message},
        )

    async def delete_qr(self, phone_id: str, qr_id: str) -> Response:
        """Delete a QR code of the bot."""
        if not phone_id:
            raise MissingFieldError("Phone ID must be specified", "phone_id")
        if not qr_id:
            raise MissingFieldError("ID must be specified", "id")

        result = await self.client.delete_request(
            self.client.url_builder.get_qr_url(phone_id, qr_id)
        )
        self.logger.info(f"Deleted QR code {qr_id} of {phone_id}")
        return result
