"""
WhatsApp Cloud API facade.

One object bundles every operation of the SDK:
- Messaging: send_message, mark_as_read
- QR codes: create_qr, retrieve_qr, update_qr, delete_qr
- Media: upload_media, retrieve_media, fetch_media, delete_media
- Webhook ingestion: post (notifications), get (verification handshake)

Uses composition with WhatsAppClient (HTTP), WhatsAppMediaHandler,
WhatsAppQRHandler, WhatsAppWebhookProcessor and WhatsAppEventDispatcher.
"""

from typing import Any, BinaryIO

import aiohttp

from whatsapp_api.core.config.settings import settings
from whatsapp_api.core.events.event_dispatcher import (
    EventName,
    Listener,
    WhatsAppEventDispatcher,
)
from whatsapp_api.core.logging.context import request_context
from whatsapp_api.core.logging.logger import get_logger
from whatsapp_api.messaging.whatsapp.client.whatsapp_client import WhatsAppClient
from whatsapp_api.messaging.whatsapp.handlers.whatsapp_media_handler import (
    WhatsAppMediaHandler,
)
from whatsapp_api.messaging.whatsapp.handlers.whatsapp_qr_handler import (
    WhatsAppQRHandler,
)
from whatsapp_api.messaging.whatsapp.models.base_models import (
    ClientMessage,
    build_message_payload,
)
from whatsapp_api.messaging.whatsapp.models.errors import (
    MissingFieldError,
    WhatsAppConfigurationError,
)
from whatsapp_api.webhooks.whatsapp.events import MessageEvent, SentEvent
from whatsapp_api.webhooks.whatsapp.validators import (
    WebhookError,
    verify_challenge,
    verify_signature,
)
from whatsapp_api.webhooks.whatsapp.webhook_processor import WhatsAppWebhookProcessor

Response = dict[str, Any] | aiohttp.ClientResponse


class WhatsAppAPI:
    """
    Client for the WhatsApp Cloud API.

    Example::

        async with aiohttp.ClientSession() as session:
            api = WhatsAppAPI(token="...", app_secret="...", session=session)

            @api.on("message")
            def on_message(event):
                print(event.from_, event.message)

            await api.send_message(phone_id, to, Text(body="Hello"))
    """

    def __init__(
        self,
        token: str,
        session: aiohttp.ClientSession | None = None,
        app_secret: str | None = None,
        webhook_verify_token: str | None = None,
        api_version: str = settings.api_version,
        base_url: str = settings.base_url,
        parsed: bool = True,
        secure: bool = True,
    ):
        """Initialize the API client.

        Args:
            token: Access token of the app
            session: aiohttp session used for every request, owned by the caller
            app_secret: App secret, used to validate webhook signatures
            webhook_verify_token: Token expected by the webhook handshake
            api_version: Graph API version
            base_url: Graph API base URL
            parsed: Return decoded JSON instead of raw responses
            secure: Validate the signature of incoming notifications

        Raises:
            WhatsAppConfigurationError: If the token is not a string, the app
                secret is missing in secure mode, or no session is given
        """
        if not isinstance(token, str):
            raise WhatsAppConfigurationError("Token must be a string")
        if secure and not app_secret:
            raise WhatsAppConfigurationError(
                "App secret must be defined when secure mode is enabled"
            )
        if session is None:
            raise WhatsAppConfigurationError("An aiohttp ClientSession must be provided")

        self.token = token
        self.app_secret = app_secret
        self.webhook_verify_token = webhook_verify_token
        self.api_version = api_version
        self.parsed = parsed
        self.secure = secure
        self.logger = get_logger(__name__)

        self.client = WhatsAppClient(
            session=session,
            access_token=token,
            api_version=api_version,
            base_url=base_url,
            parsed=parsed,
        )
        self.media_handler = WhatsAppMediaHandler(self.client)
        self.qr_handler = WhatsAppQRHandler(self.client)
        self.webhook_processor = WhatsAppWebhookProcessor()
        self.events = WhatsAppEventDispatcher()

    @classmethod
    def from_settings(cls, session: aiohttp.ClientSession, **overrides: Any) -> "WhatsAppAPI":
        """Build a client from environment settings.

        Raises:
            WhatsAppConfigurationError: If WP_ACCESS_TOKEN is not configured
        """
        if not settings.has_credentials:
            raise WhatsAppConfigurationError("WP_ACCESS_TOKEN is not configured")

        options: dict[str, Any] = {
            "token": settings.wp_access_token,
            "session": session,
            "app_secret": settings.wp_app_secret,
            "webhook_verify_token": settings.whatsapp_webhook_verify_token,
            "api_version": settings.api_version,
            "base_url": settings.base_url,
        }
        options.update(overrides)
        return cls(**options)

    # Events

    def on(self, event: EventName | str, callback: Listener | None = None):
        """Register a listener for "message", "status" or "sent" events."""
        return self.events.on(event, callback)

    def off(self, event: EventName | str, callback: Listener) -> None:
        """Remove a listener."""
        self.events.off(event, callback)

    # Messaging

    async def send_message(
        self,
        phone_id: str,
        to: str,
        message: ClientMessage,
        context: str | None = None,
    ) -> Response:
        """
        Send a message to a user.

        Args:
            phone_id: The bot's phone ID
            to: The user's phone number
            message: A validated message object (Text, Image, Interactive, ...)
            context: ID of the message to reply to

        Returns:
            Server response, or the raw response when parsed is False

        Raises:
            MissingFieldError: If phone_id, to or message is missing
        """
        if not phone_id:
            raise MissingFieldError("Phone ID must be specified", "phone_id")
        if not to:
            raise MissingFieldError("To must be specified", "to")
        if message is None:
            raise MissingFieldError("Message must be specified", "message")

        request = build_message_payload(to, message, context)
        self.logger.debug(f"Sending {message.message_type} message to {to}")

        response = await self.client.post_request(
            self.client.url_builder.get_messages_url(phone_id), payload=request
        )

        parsed_response = response if isinstance(response, dict) else None
        message_id = None
        if parsed_response:
            message_id = (parsed_response.get("messages") or [{}])[0].get("id")
            self.logger.info(
                f"{message.message_type} message sent to {to}, id: {message_id}"
            )

        self.events.emit(
            EventName.SENT,
            SentEvent(
                phone_id=phone_id,
                to=to,
                type=message.message_type,
                message=request[message.message_type],
                request=request,
                id=message_id,
                response=parsed_response,
            ),
        )
        return response

    async def mark_as_read(self, phone_id: str, message_id: str) -> Response:
        """Mark a message as read."""
        if not phone_id:
            raise MissingFieldError("Phone ID must be specified", "phone_id")
        if not message_id:
            raise MissingFieldError("Message ID must be specified", "message_id")

        payload = {
            "messaging_product": "whatsapp",
            "status": "read",
            "message_id": message_id,
        }
        return await self.client.post_request(
            self.client.url_builder.get_messages_url(phone_id), payload=payload
        )

    # QR codes

    async def create_qr(self, phone_id: str, message: str, format: str = "png") -> Response:
        """Generate a QR code for sharing the bot."""
        return await self.qr_handler.create_qr(phone_id, message, format)

    async def retrieve_qr(self, phone_id: str, id: str | None = None) -> Response:
        """Get one QR code of the bot, or all of them."""
        return await self.qr_handler.retrieve_qr(phone_id, id)

    async def update_qr(self, phone_id: str, id: str, message: str) -> Response:
        """Update the prefilled message of a QR code."""
        return await self.qr_handler.update_qr(phone_id, id, message)

    async def delete_qr(self, phone_id: str, id: str) -> Response:
        """Delete a QR code of the bot."""
        return await self.qr_handler.delete_qr(phone_id, id)

    # Media

    async def retrieve_media(self, id: str, phone_id: str | None = None) -> Response:
        """Get the download URL and metadata of a media file."""
        return await self.media_handler.retrieve_media(id, phone_id)

    async def upload_media(
        self,
        phone_id: str,
        file: bytes | BinaryIO,
        mime_type: str,
        filename: str = "file",
        check: bool = True,
    ) -> Response:
        """Upload a file to WhatsApp servers."""
        return await self.media_handler.upload_media(
            phone_id, file, mime_type, filename=filename, check=check
        )

    async def fetch_media(self, url: str) -> aiohttp.ClientResponse:
        """Download a media file from a URL returned by retrieve_media."""
        return await self.media_handler.fetch_media(url)

    async def delete_media(self, id: str, phone_id: str | None = None) -> Response:
        """Delete a media file from WhatsApp servers."""
        return await self.media_handler.delete_media(id, phone_id)

    # Webhooks

    def post(
        self,
        data: dict[str, Any],
        raw_body: bytes | str | None = None,
        signature: str | None = None,
    ) -> int:
        """
        Process a notification posted to the webhook.

        Emits a "message" event for every incoming message and a "status"
        event for every status update.

        Args:
            data: The parsed JSON body of the request
            raw_body: The raw body of the request, required in secure mode
            signature: The X-Hub-Signature-256 header, required in secure mode

        Returns:
            200, the status code to answer the request with

        Raises:
            WebhookError: 400 for a missing or invalid signature or an invalid
                payload, 500 if the app secret is not configured
        """
        if self.secure:
            if not raw_body or not signature:
                raise WebhookError(400, "Missing signature or raw body")
            if not self.app_secret:
                raise WebhookError(500, "App secret is not defined")
            if not verify_signature(raw_body, signature, self.app_secret):
                self.logger.warning("Rejected webhook with invalid signature")
                raise WebhookError(400, "Invalid signature")

        for event in self.webhook_processor.extract_events(data):
            if isinstance(event, MessageEvent):
                with request_context(phone_id=event.phone_id, user_id=event.from_):
                    self.logger.debug(f"Incoming {event.message.get('type')} message")
                    self.events.emit(EventName.MESSAGE, event)
            else:
                with request_context(phone_id=event.phone_id, user_id=event.phone):
                    self.logger.debug(f"Status '{event.status}' for message {event.id}")
                    self.events.emit(EventName.STATUS, event)

        return 200

    def get(self, params: dict[str, str]) -> str:
        """
        Answer the webhook verification handshake.

        Args:
            params: Query parameters of the GET request

        Returns:
            The hub.challenge value

        Raises:
            WebhookError: 500 if no verify token is configured, 400 if the
                request is missing parameters, 403 if the token doesn't match
        """
        if not self.webhook_verify_token:
            raise WebhookError(500, "Webhook verify token is not defined")

        challenge = verify_challenge(params, self.webhook_verify_token)
        self.logger.info("Webhook verified")
        return challenge
