"""
WhatsApp media handler.

Media operations of the Cloud API, used by WhatsAppAPI via composition:

- POST /PHONE_NUMBER_ID/media (upload)
- GET /MEDIA_ID (retrieve info and download URL)
- DELETE /MEDIA_ID (delete)
- GET /MEDIA_URL (authenticated download)
"""

from typing import Any, BinaryIO
from urllib.parse import urlparse

import aiohttp

from whatsapp_api.core.logging.logger import get_logger
from whatsapp_api.messaging.whatsapp.client.whatsapp_client import WhatsAppClient
from whatsapp_api.messaging.whatsapp.models.errors import (
    FormatViolationError,
    LengthExceededError,
    MissingFieldError,
)
from whatsapp_api.messaging.whatsapp.models.media_models import MediaType

Response = dict[str, Any] | aiohttp.ClientResponse


class WhatsAppMediaHandler:
    """Upload, retrieve, download and delete media on WhatsApp servers."""

    def __init__(self, client: WhatsAppClient):
        """Initialize media handler.

        Args:
            client: Configured WhatsApp client for API operations
        """
        self.client = client
        self.logger = get_logger(__name__)

    @property
    def supported_media_types(self) -> set[str]:
        """Get supported MIME types for WhatsApp."""
        return MediaType.all_mime_types()

    def validate_upload(self, mime_type: str, file_size: int) -> MediaType:
        """Check a file against the WhatsApp upload limits.

        Args:
            mime_type: MIME type of the file
            file_size: Size of the file in bytes

        Returns:
            The media type the file uploads as

        Raises:
            FormatViolationError: If the MIME type is not supported
            LengthExceededError: If the file is too big for its media type
        """
        if not mime_type:
            raise FormatViolationError("File must have a type specified", "mime_type")

        media_type = MediaType.from_mime_type(mime_type)
        if media_type is None:
            raise FormatViolationError(
                f"Invalid media type: {mime_type}", "mime_type", mime_type
            )

        max_size = MediaType.get_max_file_size(media_type)
        if file_size > max_size:
            raise LengthExceededError(
                f"File is too big ({file_size} bytes) for a {media_type.value} "
                f"({max_size} bytes limit)",
                "file",
                file_size,
            )
        return media_type

    async def upload_media(
        self,
        phone_id: str,
        file: bytes | BinaryIO,
        mime_type: str,
        filename: str = "file",
        check: bool = True,
    ) -> Response:
        """
        Upload media to WhatsApp servers.

        Args:
            phone_id: The bot's phone ID
            file: File content as bytes or a binary file object
            mime_type: MIME type of the file
            filename: Filename sent in the multipart form
            check: Validate MIME type and size before uploading

        Returns:
            Server response (``{"id": ...}``) or the raw response

        Raises:
            MissingFieldError: If phone_id or file is missing
            FormatViolationError: If check is set and the MIME type is unsupported
            LengthExceededError: If check is set and the file is too big
        """
        if not phone_id:
            raise MissingFieldError("Phone ID must be specified", "phone_id")
        if file is None:
            raise MissingFieldError("File must be specified", "file")

        file_data = file.read() if hasattr(file, "read") else file

        if check:
            self.validate_upload(mime_type, len(file_data))

        payload = {"messaging_product": "whatsapp", "type": mime_type}
        files = {"file": (filename, file_data, mime_type)}

        self.logger.debug(f"Uploading {filename} ({mime_type}, {len(file_data)} bytes)")
        result = await self.client.post_request(
            self.client.url_builder.get_media_url(phone_id=phone_id),
            payload=payload,
            files=files,
        )
        if isinstance(result, dict) and result.get("id"):
            self.logger.info(f"Uploaded {filename} (ID: {result['id']})")
        return result

    async def retrieve_media(self, media_id: str, phone_id: str | None = None) -> Response:
        """
        Retrieve media information (download URL, MIME type, size, sha256).

        Args:
            media_id: The media's ID
            phone_id: If given, only succeeds if the media was uploaded on this phone ID

        Raises:
            MissingFieldError: If media_id is missing
        """
        if not media_id:
            raise MissingFieldError("ID must be specified", "id")

        params = {"phone_number_id": phone_id} if phone_id else None
        self.logger.debug(f"Fetching media info for ID: {media_id}")
        return await self.client.get_request(
            self.client.url_builder.get_media_url(media_id=media_id), params=params
        )

    async def fetch_media(self, url: str) -> aiohttp.ClientResponse:
        """
        Download media from a URL returned by retrieve_media.

        The request is authenticated with the access token, so only pass
        trusted URLs.

        Raises:
            FormatViolationError: If url is not an absolute http(s) URL
        """
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise FormatViolationError(f"Invalid media URL: {url!r}", "url", url)
        return await self.client.get_raw(url)

    async def delete_media(self, media_id: str, phone_id: str | None = None) -> Response:
        """
        Delete media from WhatsApp servers.

        Args:
            media_id: The media's ID
            phone_id: If given, only succeeds if the media was uploaded on this phone ID

        Raises:
            MissingFieldError: If media_id is missing
        """
        if not media_id:
            raise MissingFieldError("ID must be specified", "id")

        params = {"phone_number_id": phone_id} if phone_id else None
        result = await self.client.delete_request(
            self.client.url_builder.get_media_url(media_id=media_id), params=params
        )
        if isinstance(result, dict) and result.get("success"):
            self.logger.info(f"Deleted media ID: {media_id}")
        return result
