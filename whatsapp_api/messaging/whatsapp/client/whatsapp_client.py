"""
WhatsApp Cloud API HTTP client.

Key Design Decisions:
- Pure dependency injection: the aiohttp session is owned by the caller
- One client serves every business phone number of the token; the phone ID
  is part of each endpoint rather than client state
- Single responsibility for HTTP operations, with error logging
"""

from typing import Any

import aiohttp

from whatsapp_api.core.config.settings import settings
from whatsapp_api.core.logging.logger import get_logger
from whatsapp_api.messaging.whatsapp.utils.error_helpers import (
    is_authentication_error,
)


class WhatsAppUrlBuilder:
    """Builds URLs for Graph API endpoints."""

    def __init__(self, base_url: str, api_version: str):
        """Initialize URL builder with configuration.

        Args:
            base_url: Graph API base URL
            api_version: Graph API version (e.g. "v16.0")
        """
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version

    def get_messages_url(self, phone_id: str) -> str:
        """Build URL for sending messages from a business phone number."""
        return self.get_endpoint_url(f"{phone_id}/messages")

    def get_media_url(self, phone_id: str | None = None, media_id: str | None = None) -> str:
        """Build URL for media operations.

        Args:
            phone_id: Business phone ID (upload endpoint)
            media_id: Media ID (retrieve/delete endpoint)

        Returns:
            URL for media endpoint
        """
        if media_id:
            return self.get_endpoint_url(media_id)
        return self.get_endpoint_url(f"{phone_id}/media")

    def get_qr_url(self, phone_id: str, qr_id: str | None = None) -> str:
        """Build URL for QR code (message short link) operations."""
        if qr_id:
            return self.get_endpoint_url(f"{phone_id}/message_qrdls/{qr_id}")
        return self.get_endpoint_url(f"{phone_id}/message_qrdls")

    def get_endpoint_url(self, endpoint: str) -> str:
        """Build URL for any versioned endpoint."""
        return f"{self.base_url}/{self.api_version}/{endpoint.lstrip('/')}"


class WhatsAppFormDataBuilder:
    """Builds form data for WhatsApp multipart requests."""

    @staticmethod
    def build_form_data(
        payload: dict[str, Any], files: dict[str, Any]
    ) -> aiohttp.FormData:
        """Build FormData for multipart/form-data requests.

        Args:
            payload: Data fields to include in the form
            files: Files to upload as {field_name: (filename, file_handle, content_type)}

        Returns:
            aiohttp.FormData object ready for request

        Raises:
            ValueError: If file format is invalid
        """
        form = aiohttp.FormData()

        # Data fields go first, the API reads messaging_product before the file
        if payload:
            for key, value in payload.items():
                form.add_field(key, str(value))

        for field_name, file_info in files.items():
            if isinstance(file_info, tuple) and len(file_info) == 3:
                filename, file_handle, content_type = file_info

                if hasattr(file_handle, "read"):
                    file_content = file_handle.read()
                else:
                    file_content = file_handle

                form.add_field(
                    field_name,
                    file_content,
                    filename=filename,
                    content_type=content_type,
                )
            else:
                raise ValueError(
                    f"Invalid file format for field '{field_name}'. "
                    f"Expected tuple (filename, file_handle, content_type)"
                )

        return form


class WhatsAppClient:
    """
    Graph API client with injected aiohttp session.

    Every request is authenticated with the bearer token. With ``parsed=True``
    responses are checked and decoded as JSON; with ``parsed=False`` the raw
    ``aiohttp.ClientResponse`` is returned with its body already read.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        access_token: str,
        logger: Any | None = None,
        api_version: str = settings.api_version,
        base_url: str = settings.base_url,
        parsed: bool = True,
    ):
        """Initialize client with dependency injection.

        Args:
            session: aiohttp session, managed by the caller
            access_token: WhatsApp Business API access token
            logger: Pre-configured logger instance
            api_version: Graph API version to use
            base_url: Graph API base URL
            parsed: Decode JSON responses instead of returning raw responses
        """
        self.session = session
        self.access_token = access_token
        self.api_version = api_version
        self.parsed = parsed
        self.logger = logger or get_logger(__name__)

        self.url_builder = WhatsAppUrlBuilder(base_url, api_version)
        self.form_builder = WhatsAppFormDataBuilder()

        self.logger.debug(f"WhatsApp client initialized, api_version: {api_version}")

    def _get_headers(self, include_content_type: bool = True) -> dict[str, str]:
        """Get HTTP headers for Graph API requests."""
        headers = {"Authorization": f"Bearer {self.access_token}"}
        if include_content_type:
            headers["Content-Type"] = "application/json"
        return headers

    async def _read_response(
        self, response: aiohttp.ClientResponse, url: str
    ) -> dict[str, Any] | aiohttp.ClientResponse:
        """Decode a response, or hand back the raw response when not parsing."""
        if not self.parsed:
            await response.read()
            return response

        try:
            response.raise_for_status()
        except aiohttp.ClientResponseError as http_err:
            try:
                error_text = await response.text()
            except Exception:
                error_text = "Error reading response"
            self._log_http_error(http_err, url, error_text)
            raise

        response_data = await response.json()
        self.logger.debug(f"Response from {url}: {response_data}")
        return response_data

    def _log_http_error(
        self, http_err: aiohttp.ClientResponseError, url: str, error_text: str
    ) -> None:
        if is_authentication_error(http_err):
            self.logger.error(
                "CRITICAL: WhatsApp access token expired or invalid (401 Unauthorized)"
            )
            self.logger.error(f"URL: {url} - Response: {error_text}")
        else:
            self.logger.error(f"HTTP error {http_err.status} for {url}: {error_text}")

    async def post_request(
        self,
        url: str,
        payload: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any] | aiohttp.ClientResponse:
        """Send POST request to the Graph API.

        Args:
            url: Full endpoint URL (see url_builder)
            payload: JSON payload, or form fields when files are given
            files: Optional files for multipart upload
            params: Optional query parameters

        Returns:
            JSON response, or the raw response when parsed is False

        Raises:
            aiohttp.ClientResponseError: For HTTP errors
            aiohttp.ClientError: For transport failures
        """
        try:
            if files:
                # aiohttp sets the multipart Content-Type itself
                headers = self._get_headers(include_content_type=False)
                data = self.form_builder.build_form_data(payload or {}, files)

                self.logger.debug(f"Sending multipart request to {url}")
                self.logger.debug(f"Files: {list(files.keys())}")

                async with self.session.post(
                    url, headers=headers, data=data, params=params
                ) as response:
                    return await self._read_response(response, url)

            self.logger.debug(f"Sending JSON request to {url}")
            self.logger.debug(f"Payload: {payload}")

            async with self.session.post(
                url, headers=self._get_headers(), json=payload, params=params
            ) as response:
                return await self._read_response(response, url)

        except aiohttp.ClientResponseError:
            raise
        except aiohttp.ClientError as err:
            self.logger.error(f"Request to {url} failed: {err}")
            raise

    async def get_request(
        self, url: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any] | aiohttp.ClientResponse:
        """Send GET request to the Graph API.

        Raises:
            aiohttp.ClientResponseError: For HTTP errors
            aiohttp.ClientError: For transport failures
        """
        try:
            async with self.session.get(
                url, headers=self._get_headers(), params=params
            ) as response:
                self.logger.debug(f"GET request to {url} with params: {params}")
                return await self._read_response(response, url)

        except aiohttp.ClientResponseError:
            raise
        except aiohttp.ClientError as err:
            self.logger.error(f"GET request to {url} failed: {err}")
            raise

    async def delete_request(
        self, url: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any] | aiohttp.ClientResponse:
        """Send DELETE request to the Graph API.

        Raises:
            aiohttp.ClientResponseError: For HTTP errors
            aiohttp.ClientError: For transport failures
        """
        try:
            async with self.session.delete(
                url, headers=self._get_headers(), params=params
            ) as response:
                self.logger.debug(f"DELETE request to {url} with params: {params}")
                return await self._read_response(response, url)

        except aiohttp.ClientResponseError:
            raise
        except aiohttp.ClientError as err:
            self.logger.error(f"DELETE request to {url} failed: {err}")
            raise

    async def get_raw(self, url: str) -> aiohttp.ClientResponse:
        """Perform an authenticated GET and return the raw response.

        Used for media downloads, where the body is binary. The body is read
        before the response is returned.

        Raises:
            aiohttp.ClientError: For transport failures
        """
        try:
            async with self.session.get(
                url, headers=self._get_headers(include_content_type=False)
            ) as response:
                await response.read()
                self.logger.debug(f"Raw GET request to {url}: {response.status}")
                return response

        except aiohttp.ClientError as err:
            self.logger.error(f"Raw GET request to {url} failed: {err}")
            raise
