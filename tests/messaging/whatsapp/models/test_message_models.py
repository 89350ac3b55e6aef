"""
Tests for text, reaction, location and media message models, and for the
send payload builder.
"""

import pytest
from pydantic import ValidationError

from whatsapp_api.messaging.whatsapp.models import (
    Audio,
    Document,
    FormatViolationError,
    Image,
    InvalidCombinationError,
    LengthExceededError,
    Location,
    MediaType,
    MissingFieldError,
    Reaction,
    Sticker,
    Text,
    Video,
    build_message_payload,
)


class TestText:
    """Tests for text messages."""

    def test_body_limit(self):
        Text(body="x" * 4096)
        with pytest.raises(LengthExceededError):
            Text(body="x" * 4097)

    def test_body_required(self):
        with pytest.raises(MissingFieldError):
            Text(body="")

    def test_preview_url_false_is_omitted(self):
        assert Text(body="Hi", preview_url=False).to_payload() == {"body": "Hi"}

    def test_preview_url_true(self):
        assert Text(body="https://example.com", preview_url=True).to_payload() == {
            "body": "https://example.com",
            "preview_url": True,
        }


class TestReaction:
    """Tests for reactions."""

    def test_empty_emoji_removes_reaction(self):
        assert Reaction(message_id="wamid.X").to_payload() == {
            "message_id": "wamid.X",
            "emoji": "",
        }

    def test_message_id_required(self):
        with pytest.raises(MissingFieldError):
            Reaction(message_id="", emoji="👍")


class TestLocation:
    """Tests for location messages."""

    def test_payload(self):
        location = Location(longitude=-58.38, latitude=-34.6, name="Obelisco")

        assert location.to_payload() == {
            "longitude": -58.38,
            "latitude": -34.6,
            "name": "Obelisco",
        }

    @pytest.mark.parametrize(
        "longitude, latitude", [(181, 0), (-181, 0), (0, 91), (0, -91)]
    )
    def test_out_of_range(self, longitude, latitude):
        with pytest.raises(FormatViolationError):
            Location(longitude=longitude, latitude=latitude)

    def test_missing_coordinate(self):
        with pytest.raises(MissingFieldError):
            Location(longitude=10)

    def test_empty_address_is_dropped(self):
        assert Location(longitude=0, latitude=0, address="").address is None


class TestMediaMessages:
    """Tests for media message sources and captions."""

    @pytest.mark.parametrize("media_class", [Image, Video, Document, Audio, Sticker])
    def test_id_or_link_required(self, media_class):
        with pytest.raises(MissingFieldError):
            media_class()

    @pytest.mark.parametrize("media_class", [Image, Video, Document, Audio, Sticker])
    def test_id_and_link_are_exclusive(self, media_class):
        with pytest.raises(InvalidCombinationError):
            media_class(id="media-id", link="https://example.com/file")

    def test_link_must_be_http(self):
        with pytest.raises(FormatViolationError):
            Image(link="ftp://example.com/a.png")

    def test_non_string_link_is_a_type_error(self):
        with pytest.raises(ValidationError):
            Image(link=5)

    def test_caption_capability(self):
        assert Image.supports_caption
        assert Video.supports_caption
        assert Document.supports_caption
        assert not Audio.supports_caption
        assert not Sticker.supports_caption

    @pytest.mark.parametrize("media_class", [Audio, Sticker])
    def test_caption_rejected_without_capability(self, media_class):
        with pytest.raises(InvalidCombinationError):
            media_class(id="media-id", caption="Nope")

    def test_caption_limit(self):
        Image(id="img", caption="x" * 1024)
        with pytest.raises(LengthExceededError):
            Image(id="img", caption="x" * 1025)

    def test_document_payload(self):
        document = Document(
            link="https://example.com/report.pdf", caption="Report", filename="report.pdf"
        )

        assert document.to_payload() == {
            "link": "https://example.com/report.pdf",
            "caption": "Report",
            "filename": "report.pdf",
        }


class TestMediaType:
    """Tests for upload media types."""

    @pytest.mark.parametrize(
        "mime_type, media_type",
        [
            ("image/png", MediaType.IMAGE),
            ("image/webp", MediaType.STICKER),
            ("audio/ogg", MediaType.AUDIO),
            ("video/mp4", MediaType.VIDEO),
            ("application/pdf", MediaType.DOCUMENT),
            ("text/plain", MediaType.DOCUMENT),
        ],
    )
    def test_from_mime_type(self, mime_type, media_type):
        assert MediaType.from_mime_type(mime_type) is media_type

    def test_unknown_mime_type(self):
        assert MediaType.from_mime_type("image/gif") is None

    def test_limits_use_decimal_units(self):
        assert MediaType.get_max_file_size(MediaType.STICKER) == 500_000
        assert MediaType.get_max_file_size(MediaType.IMAGE) == 5_000_000
        assert MediaType.get_max_file_size(MediaType.DOCUMENT) == 100_000_000


class TestBuildMessagePayload:
    """Tests for the send request body."""

    def test_text_payload(self):
        payload = build_message_payload("5491122334455", Text(body="Hola"))

        assert payload == {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": "5491122334455",
            "type": "text",
            "text": {"body": "Hola"},
        }

    def test_reply_context(self):
        payload = build_message_payload(
            "5491122334455", Image(id="img"), context="wamid.PREV"
        )

        assert payload["type"] == "image"
        assert payload["image"] == {"id": "img"}
        assert payload["context"] == {"message_id": "wamid.PREV"}
