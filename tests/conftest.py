"""
Pytest configuration and common fixtures for whatsapp_api tests.

Provides a mocked aiohttp session and ready-made WhatsAppAPI instances.
"""

import hashlib
import hmac
import json
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from whatsapp_api import WhatsAppAPI
from whatsapp_api.core.logging.context import clear_request_context

TEST_TOKEN = "test-access-token"
TEST_APP_SECRET = "test-app-secret"
TEST_VERIFY_TOKEN = "test-verify-token"
TEST_PHONE_ID = "1234567890"
TEST_BASE_URL = "https://graph.facebook.com/"
TEST_API_VERSION = "v16.0"


def make_response(
    json_data: dict | None = None, status: int = 200, body: bytes = b""
) -> MagicMock:
    """Build a mock aiohttp response."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=json_data)
    response.text = AsyncMock(return_value=json.dumps(json_data or {}))
    response.read = AsyncMock(return_value=body)

    if status >= 400:
        response.raise_for_status = MagicMock(
            side_effect=aiohttp.ClientResponseError(
                request_info=MagicMock(), history=(), status=status
            )
        )
    else:
        response.raise_for_status = MagicMock()
    return response


def attach_response(session: MagicMock, response: MagicMock) -> None:
    """Make every request method of a mock session yield the response."""
    for method in ("post", "get", "delete"):
        getattr(session, method).return_value.__aenter__.return_value = response


def sign(raw_body: bytes, secret: str = TEST_APP_SECRET) -> str:
    """Compute the X-Hub-Signature-256 header value of a body."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


@pytest.fixture(name="make_response")
def make_response_fixture() -> Callable[..., MagicMock]:
    """Factory for mock aiohttp responses."""
    return make_response


@pytest.fixture(name="attach_response")
def attach_response_fixture() -> Callable[[MagicMock, MagicMock], None]:
    """Attach a mock response to every method of a mock session."""
    return attach_response


@pytest.fixture(name="sign")
def sign_fixture() -> Callable[..., str]:
    """Signature helper using the test app secret."""
    return sign


@pytest.fixture(autouse=True)
def reset_request_context():
    """Context variables leak between synchronous tests otherwise."""
    clear_request_context()
    yield
    clear_request_context()


@pytest.fixture
def api_response() -> MagicMock:
    """Default successful send response."""
    return make_response(
        {
            "messaging_product": "whatsapp",
            "contacts": [{"input": "5491122334455", "wa_id": "5491122334455"}],
            "messages": [{"id": "wamid.TEST"}],
        }
    )


@pytest.fixture
def mock_session(api_response: MagicMock) -> MagicMock:
    """Mock aiohttp ClientSession whose requests return api_response."""
    session = MagicMock(spec=aiohttp.ClientSession)
    session.post = MagicMock()
    session.get = MagicMock()
    session.delete = MagicMock()
    attach_response(session, api_response)
    return session


@pytest.fixture
def api_factory(mock_session: MagicMock) -> Callable[..., WhatsAppAPI]:
    """Build WhatsAppAPI instances on the mock session."""

    def factory(**overrides) -> WhatsAppAPI:
        options = {
            "token": TEST_TOKEN,
            "session": mock_session,
            "app_secret": TEST_APP_SECRET,
            "webhook_verify_token": TEST_VERIFY_TOKEN,
            "api_version": TEST_API_VERSION,
            "base_url": TEST_BASE_URL,
        }
        options.update(overrides)
        return WhatsAppAPI(**options)

    return factory


@pytest.fixture
def api(api_factory) -> WhatsAppAPI:
    """Secure, parsed WhatsAppAPI on the mock session."""
    return api_factory()


@pytest.fixture
def message_notification() -> dict:
    """Webhook notification carrying one incoming text message."""
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "WABA_ID",
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "messaging_product": "whatsapp",
                            "metadata": {
                                "display_phone_number": "15550001111",
                                "phone_number_id": TEST_PHONE_ID,
                            },
                            "contacts": [
                                {"profile": {"name": "Ana"}, "wa_id": "5491122334455"}
                            ],
                            "messages": [
                                {
                                    "from": "5491122334455",
                                    "id": "wamid.IN",
                                    "timestamp": "1700000000",
                                    "type": "text",
                                    "text": {"body": "Hola"},
                                }
                            ],
                        },
                    }
                ],
            }
        ],
    }


@pytest.fixture
def status_notification() -> dict:
    """Webhook notification carrying one delivery status."""
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "WABA_ID",
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "messaging_product": "whatsapp",
                            "metadata": {
                                "display_phone_number": "15550001111",
                                "phone_number_id": TEST_PHONE_ID,
                            },
                            "statuses": [
                                {
                                    "id": "wamid.OUT",
                                    "status": "delivered",
                                    "timestamp": "1700000001",
                                    "recipient_id": "5491122334455",
                                    "conversation": {
                                        "id": "CONVERSATION_ID",
                                        "origin": {"type": "service"},
                                    },
                                    "pricing": {
                                        "billable": True,
                                        "pricing_model": "CBP",
                                        "category": "service",
                                    },
                                }
                            ],
                        },
                    }
                ],
            }
        ],
    }
