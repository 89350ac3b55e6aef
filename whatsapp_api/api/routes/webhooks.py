"""
Webhook routes for receiving WhatsApp notifications with FastAPI.

Routes handle only HTTP concerns (body, headers, responses) and delegate the
verification handshake and notification processing to WhatsAppAPI.
"""

import json

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from whatsapp_api.core.logging.logger import get_logger
from whatsapp_api.messaging.whatsapp.messenger.whatsapp_api import WhatsAppAPI
from whatsapp_api.webhooks.whatsapp.validators import WebhookError

SIGNATURE_HEADER = "X-Hub-Signature-256"


def create_webhook_router(api: WhatsAppAPI, prefix: str = "/webhook") -> APIRouter:
    """
    Create the webhook router for a WhatsAppAPI instance.

    Args:
        api: Configured WhatsAppAPI whose listeners receive the events
        prefix: URL prefix of the webhook endpoint

    Returns:
        APIRouter with GET (verification) and POST (notifications) endpoints
    """
    logger = get_logger(__name__)

    router = APIRouter(
        prefix=prefix,
        tags=["Webhooks"],
        responses={
            400: {"description": "Bad Request - Invalid signature or payload"},
            403: {"description": "Forbidden - Webhook verification failed"},
            500: {"description": "Internal Server Error - Missing configuration"},
        },
    )

    @router.get("", response_class=PlainTextResponse)
    async def verify_webhook(request: Request) -> PlainTextResponse:
        """Answer the hub.challenge verification request."""
        try:
            challenge = api.get(dict(request.query_params))
        except WebhookError as e:
            logger.warning(f"Webhook verification failed: {e.message}")
            raise HTTPException(status_code=e.status_code, detail=e.message) from e
        return PlainTextResponse(content=challenge)

    @router.post("")
    async def process_webhook(request: Request) -> dict[str, str]:
        """Validate and dispatch an incoming notification."""
        raw_body = await request.body()
        try:
            payload = json.loads(raw_body)
        except ValueError as e:
            logger.error(f"Failed to parse webhook payload: {e}")
            raise HTTPException(status_code=400, detail="Invalid JSON payload") from e

        try:
            api.post(
                payload,
                raw_body=raw_body,
                signature=request.headers.get(SIGNATURE_HEADER),
            )
        except WebhookError as e:
            logger.warning(f"Webhook rejected: {e.message}")
            raise HTTPException(status_code=e.status_code, detail=e.message) from e

        return {"status": "ok"}

    return router
