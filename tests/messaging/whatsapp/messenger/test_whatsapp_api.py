"""
Tests for the WhatsAppAPI facade: configuration, sending, events and
webhook ingestion.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from whatsapp_api import (
    Body,
    Interactive,
    MessageEvent,
    SentEvent,
    StatusEvent,
    Text,
    WebhookError,
    WhatsAppAPI,
)
from whatsapp_api.core.logging.context import get_context_info, request_context
from whatsapp_api.messaging.whatsapp.models import (
    ActionButtons,
    Button,
    MissingFieldError,
    WhatsAppConfigurationError,
)

PHONE_ID = "1234567890"
RECIPIENT = "5491122334455"


class TestConfiguration:
    """Tests for constructor checks."""

    def test_token_must_be_string(self, mock_session):
        with pytest.raises(WhatsAppConfigurationError):
            WhatsAppAPI(token=None, session=mock_session, app_secret="secret")

    def test_secure_mode_requires_app_secret(self, mock_session):
        with pytest.raises(WhatsAppConfigurationError):
            WhatsAppAPI(token="token", session=mock_session)

    def test_insecure_mode_without_app_secret(self, mock_session):
        api = WhatsAppAPI(token="token", session=mock_session, secure=False)
        assert api.app_secret is None

    def test_session_required(self):
        with pytest.raises(WhatsAppConfigurationError):
            WhatsAppAPI(token="token", app_secret="secret")

    def test_from_settings(self, mock_session):
        with patch("whatsapp_api.messaging.whatsapp.messenger.whatsapp_api.settings") as s:
            s.has_credentials = True
            s.wp_access_token = "env-token"
            s.wp_app_secret = "env-secret"
            s.whatsapp_webhook_verify_token = "env-verify"
            s.api_version = "v18.0"
            s.base_url = "https://graph.facebook.com/"

            api = WhatsAppAPI.from_settings(mock_session)

        assert api.token == "env-token"
        assert api.webhook_verify_token == "env-verify"
        assert api.api_version == "v18.0"

    def test_from_settings_without_token(self, mock_session):
        with patch("whatsapp_api.messaging.whatsapp.messenger.whatsapp_api.settings") as s:
            s.has_credentials = False

            with pytest.raises(WhatsAppConfigurationError):
                WhatsAppAPI.from_settings(mock_session)


class TestSendMessage:
    """Tests for sending messages."""

    @pytest.mark.asyncio
    async def test_posts_payload(self, api, mock_session):
        await api.send_message(PHONE_ID, RECIPIENT, Text(body="Hola"), context="wamid.PREV")

        args, kwargs = mock_session.post.call_args
        assert args[0] == f"https://graph.facebook.com/v16.0/{PHONE_ID}/messages"
        assert kwargs["json"] == {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": RECIPIENT,
            "type": "text",
            "text": {"body": "Hola"},
            "context": {"message_id": "wamid.PREV"},
        }

    @pytest.mark.asyncio
    async def test_emits_sent(self, api):
        sent: list[SentEvent] = []
        api.on("sent", sent.append)

        message = Interactive(
            action=ActionButtons(buttons=[Button(id="yes", title="Yes")]),
            body=Body(text="Continue?"),
        )
        response = await api.send_message(PHONE_ID, RECIPIENT, message)

        assert len(sent) == 1
        event = sent[0]
        assert event.phone_id == PHONE_ID
        assert event.to == RECIPIENT
        assert event.type == "interactive"
        assert event.message["type"] == "button"
        assert event.request["interactive"] == event.message
        assert event.id == "wamid.TEST"
        assert event.response == response

    @pytest.mark.asyncio
    async def test_unparsed_sent_event_has_no_id(self, api_factory, api_response):
        api = api_factory(parsed=False)
        sent: list[SentEvent] = []
        api.on("sent", sent.append)

        response = await api.send_message(PHONE_ID, RECIPIENT, Text(body="Hola"))

        assert response is api_response
        assert sent[0].id is None
        assert sent[0].response is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "phone_id, to, message",
        [("", RECIPIENT, Text(body="Hi")), (PHONE_ID, "", Text(body="Hi")), (PHONE_ID, RECIPIENT, None)],
    )
    async def test_missing_arguments(self, api, mock_session, phone_id, to, message):
        with pytest.raises(MissingFieldError):
            await api.send_message(phone_id, to, message)
        mock_session.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_mark_as_read(self, api, mock_session):
        await api.mark_as_read(PHONE_ID, "wamid.IN")

        assert mock_session.post.call_args[1]["json"] == {
            "messaging_product": "whatsapp",
            "status": "read",
            "message_id": "wamid.IN",
        }

    @pytest.mark.asyncio
    async def test_delegates_qr_and_media(self, api, mock_session):
        await api.create_qr(PHONE_ID, "Hi")
        await api.delete_media("MEDIA", PHONE_ID)

        assert mock_session.post.call_args[0][0].endswith(f"/{PHONE_ID}/message_qrdls")
        assert mock_session.delete.call_args[1]["params"] == {"phone_number_id": PHONE_ID}


class TestListeners:
    """Tests for on/off."""

    def test_on_as_decorator_and_off(self, api):
        @api.on("message")
        def handler(event):
            pass

        assert api.events.listener_count("message") == 1
        api.off("message", handler)
        assert api.events.listener_count("message") == 0

    def test_unknown_event(self, api):
        with pytest.raises(ValueError):
            api.on("delivered", print)


class TestPost:
    """Tests for webhook notifications."""

    def test_emits_message(self, api, message_notification, sign):
        raw_body = json.dumps(message_notification).encode()
        received: list[MessageEvent] = []
        api.on("message", received.append)

        assert api.post(message_notification, raw_body, sign(raw_body)) == 200

        assert len(received) == 1
        event = received[0]
        assert event.phone_id == PHONE_ID
        assert event.from_ == RECIPIENT
        assert event.name == "Ana"
        assert event.message["text"] == {"body": "Hola"}
        assert event.raw == message_notification
        assert get_context_info() == {"phone_id": None, "user_id": None}

    def test_listeners_see_event_context(self, api_factory, message_notification):
        api = api_factory(secure=False)
        seen = []
        api.on("message", lambda event: seen.append(get_context_info()))

        api.post(message_notification)

        assert seen == [{"phone_id": PHONE_ID, "user_id": RECIPIENT}]
        assert get_context_info() == {"phone_id": None, "user_id": None}

    def test_status_context_does_not_inherit_user(
        self, api_factory, message_notification, status_notification
    ):
        api = api_factory(secure=False)
        status = status_notification["entry"][0]["changes"][0]["value"]["statuses"][0]
        del status["recipient_id"]
        message_notification["entry"].extend(status_notification["entry"])
        seen = []
        api.on("status", lambda event: seen.append(get_context_info()))

        with request_context(phone_id="outer", user_id="outer-user"):
            api.post(message_notification)
            assert get_context_info() == {"phone_id": "outer", "user_id": "outer-user"}

        assert seen == [{"phone_id": PHONE_ID, "user_id": None}]

    def test_emits_status(self, api, status_notification, sign):
        raw_body = json.dumps(status_notification).encode()
        received: list[StatusEvent] = []
        api.on("status", received.append)

        api.post(status_notification, raw_body, sign(raw_body))

        event = received[0]
        assert event.phone == RECIPIENT
        assert event.status == "delivered"
        assert event.id == "wamid.OUT"
        assert event.conversation["id"] == "CONVERSATION_ID"
        assert event.pricing["category"] == "service"

    def test_signature_mismatch(self, api, message_notification, sign):
        raw_body = json.dumps(message_notification).encode()

        with pytest.raises(WebhookError) as exc_info:
            api.post(message_notification, raw_body, sign(raw_body, "other-secret"))
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("raw_body, signature", [(None, "sha256=abc"), (b"{}", None)])
    def test_missing_signature_or_body(self, api, raw_body, signature):
        with pytest.raises(WebhookError) as exc_info:
            api.post({"object": "whatsapp_business_account"}, raw_body, signature)
        assert exc_info.value.status_code == 400

    def test_missing_app_secret(self, api, message_notification):
        api.app_secret = None

        with pytest.raises(WebhookError) as exc_info:
            api.post(message_notification, b"{}", "sha256=abc")
        assert exc_info.value.status_code == 500

    def test_insecure_mode_skips_signature(self, api_factory, message_notification):
        api = api_factory(secure=False, app_secret=None)
        listener = MagicMock()
        api.on("message", listener)

        api.post(message_notification)

        listener.assert_called_once()

    def test_payload_without_object(self, api_factory):
        api = api_factory(secure=False)

        with pytest.raises(WebhookError) as exc_info:
            api.post({"entry": []})
        assert exc_info.value.status_code == 400

    def test_listener_errors_propagate(self, api_factory, message_notification):
        api = api_factory(secure=False)
        api.on("message", MagicMock(side_effect=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            api.post(message_notification)


class TestGet:
    """Tests for the verification handshake."""

    def test_returns_challenge(self, api):
        params = {
            "hub.mode": "subscribe",
            "hub.verify_token": "test-verify-token",
            "hub.challenge": "1158201444",
        }
        assert api.get(params) == "1158201444"

    def test_wrong_token(self, api):
        params = {"hub.mode": "subscribe", "hub.verify_token": "wrong"}

        with pytest.raises(WebhookError) as exc_info:
            api.get(params)
        assert exc_info.value.status_code == 403

    def test_missing_parameters(self, api):
        with pytest.raises(WebhookError) as exc_info:
            api.get({"hub.challenge": "1"})
        assert exc_info.value.status_code == 400

    def test_verify_token_not_configured(self, api_factory):
        api = api_factory(webhook_verify_token=None)

        with pytest.raises(WebhookError) as exc_info:
            api.get({"hub.mode": "subscribe", "hub.verify_token": "x"})
        assert exc_info.value.status_code == 500
