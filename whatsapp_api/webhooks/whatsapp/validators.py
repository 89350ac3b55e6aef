"""
Validators for incoming WhatsApp webhook requests.

Covers the two checks the Cloud API expects from a webhook endpoint: the
HMAC-SHA256 payload signature sent in ``X-Hub-Signature-256`` and the
``hub.challenge`` verification handshake.
"""

import hashlib
import hmac
from collections.abc import Mapping


class WebhookError(Exception):
    """Webhook request rejected, carrying the HTTP status to answer with."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


SIGNATURE_PREFIX = "sha256="


def compute_signature(raw_body: bytes | str, app_secret: str) -> str:
    """Compute the hex HMAC-SHA256 of a raw body with the app secret."""
    if isinstance(raw_body, str):
        raw_body = raw_body.encode("utf-8")
    return hmac.new(app_secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()


def verify_signature(raw_body: bytes | str, signature: str, app_secret: str) -> bool:
    """
    Validate an ``X-Hub-Signature-256`` header value against the raw body.

    Args:
        raw_body: Raw request body, exactly as received
        signature: Header value, ``sha256=<hex digest>``
        app_secret: The app secret

    Returns:
        True if the signature matches
    """
    if not signature or not signature.startswith(SIGNATURE_PREFIX):
        return False

    provided_hash = signature[len(SIGNATURE_PREFIX) :]
    expected_hash = compute_signature(raw_body, app_secret)
    return hmac.compare_digest(expected_hash, provided_hash)


def verify_challenge(params: Mapping[str, str], verify_token: str) -> str:
    """
    Answer the webhook verification handshake.

    Args:
        params: Query parameters of the GET request
        verify_token: The verify token configured for the webhook

    Returns:
        The ``hub.challenge`` value, to be sent back as the response body

    Raises:
        WebhookError: 400 if mode or token are missing, 403 if they don't match
    """
    mode = params.get("hub.mode")
    token = params.get("hub.verify_token")
    challenge = params.get("hub.challenge")

    if not mode or not token:
        raise WebhookError(400, "Missing hub.mode or hub.verify_token")
    if mode != "subscribe" or token != verify_token:
        raise WebhookError(403, "Verification token mismatch")
    return challenge or ""
