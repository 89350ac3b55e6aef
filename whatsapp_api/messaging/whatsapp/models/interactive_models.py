"""
Interactive message models for WhatsApp messaging.

Pydantic schemas for the four interactive message modes of the Cloud API:

1. Button Messages - Quick reply buttons (max 3)
2. List Messages - Sectioned lists with rows (max 10 sections, 10 rows each)
3. Single Product Messages - One product from a catalog
4. Multi-Product Messages - Sectioned product lists (max 10 sections, 30 items each)

Every component validates itself once, at construction, and is immutable
afterwards. The mode of an ``Interactive`` is derived from the class of its
action; nothing is tagged on or stripped from the action at runtime.
"""

from enum import Enum
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    model_serializer,
    model_validator,
)

from .base_models import ClientMessage
from .basic_models import Text
from .constraints import (
    as_input_dict,
    check_count,
    check_length,
    check_unique,
    require,
    require_text,
)
from .errors import FormatViolationError, InvalidCombinationError, MissingFieldError
from .media_models import Document, Image, Video


class InteractiveType(str, Enum):
    """Interactive message modes, selected by the action."""

    BUTTON = "button"
    LIST = "list"
    PRODUCT = "product"
    PRODUCT_LIST = "product_list"


class HeaderType(str, Enum):
    """Supported header types for interactive messages."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"


# Media classes allowed as header content, keyed by their header type
HEADER_MEDIA: dict[HeaderType, type[Image | Video | Document]] = {
    HeaderType.IMAGE: Image,
    HeaderType.VIDEO: Video,
    HeaderType.DOCUMENT: Document,
}

_HEADER_FIELDS = ("type", "text", "image", "video", "document")


class InteractiveComponent(BaseModel):
    """Immutable building block of an interactive message."""

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Primitive components
# ---------------------------------------------------------------------------


class Body(InteractiveComponent):
    """Body text of an interactive message (max 1024 chars)."""

    text: str = Field(..., description="Body text")

    @model_validator(mode="before")
    @classmethod
    def validate_body(cls, data: Any) -> Any:
        if isinstance(data, dict):
            require_text(data, "text", 1024, "Body")
        return data


class Footer(InteractiveComponent):
    """Footer text of an interactive message (max 60 chars)."""

    text: str = Field(..., description="Footer text")

    @model_validator(mode="before")
    @classmethod
    def validate_footer(cls, data: Any) -> Any:
        if isinstance(data, dict):
            require_text(data, "text", 60, "Footer")
        return data


class Row(InteractiveComponent):
    """Row within a list section."""

    id: str = Field(..., description="Row identifier, returned in the webhook")
    title: str = Field(..., description="Row title")
    description: str | None = Field(None, description="Optional row description")

    @model_validator(mode="before")
    @classmethod
    def validate_row(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if isinstance(data, dict):
            require_text(data, "id", 200, "Row")
            require_text(data, "title", 24, "Row")
            data["description"] = data.get("description") or None
            check_length(data["description"], 72, "description", "Row")
        return data


class Button(InteractiveComponent):
    """Quick reply button.

    Rendered as ``{"type": "reply", "reply": {"id": ..., "title": ...}}``.
    """

    id: str = Field(..., description="Button identifier, returned in the webhook")
    title: str = Field(..., description="Button label")

    @model_validator(mode="before")
    @classmethod
    def validate_button(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("reply"), dict):
            # Wire form, as produced by serialize_button
            data = dict(data["reply"])
        if isinstance(data, dict):
            button_id = require_text(data, "id", 256, "Button")
            if isinstance(button_id, str) and (
                button_id.startswith(" ") or button_id.endswith(" ")
            ):
                raise FormatViolationError(
                    "Button id cannot have leading or trailing spaces", "id", button_id
                )
            require_text(data, "title", 20, "Button")
        return data

    @model_serializer(mode="plain")
    def serialize_button(self) -> dict[str, Any]:
        return {"type": "reply", "reply": {"id": self.id, "title": self.title}}


class Product(InteractiveComponent):
    """Catalog product reference."""

    product_retailer_id: str = Field(..., description="Retailer ID of the product")

    @model_validator(mode="before")
    @classmethod
    def validate_product(cls, data: Any) -> Any:
        if isinstance(data, dict):
            require(data, "product_retailer_id", "Product")
        return data


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


def _optional_title(data: dict[str, Any], owner: str) -> None:
    data["title"] = data.get("title") or None
    check_length(data["title"], 24, "title", owner)


class ListSection(InteractiveComponent):
    """Section of rows within a list action.

    The title is only required when the list has more than one section.
    """

    title: str | None = Field(None, description="Section title")
    rows: list[Row] = Field(..., description="Rows of the section (1-10)")

    @model_validator(mode="before")
    @classmethod
    def validate_section(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if isinstance(data, dict):
            _optional_title(data, "Section")
            check_count(data.get("rows"), 1, 10, "rows", "Section")
            data["rows"] = list(data["rows"])
        return data


class ProductSection(InteractiveComponent):
    """Section of products within a multi-product catalog action."""

    title: str | None = Field(None, description="Section title")
    product_items: list[Product] = Field(
        ..., description="Products of the section (1-30)"
    )

    @model_validator(mode="before")
    @classmethod
    def validate_section(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if isinstance(data, dict):
            _optional_title(data, "Section")
            check_count(data.get("product_items"), 1, 30, "products", "Section")
            data["product_items"] = list(data["product_items"])
        return data


def _require_section_titles(sections: list[ListSection] | list[ProductSection]) -> None:
    if len(sections) > 1 and any(section.title is None for section in sections):
        raise InvalidCombinationError(
            "All sections must have a title if more than 1 section is provided",
            "sections",
        )


class ActionButtons(InteractiveComponent):
    """Reply buttons action: 1 to 3 buttons with unique ids and titles."""

    buttons: list[Button] = Field(..., description="Reply buttons (1-3)")

    @property
    def kind(self) -> InteractiveType:
        return InteractiveType.BUTTON

    @model_validator(mode="before")
    @classmethod
    def validate_count(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if isinstance(data, dict):
            check_count(data.get("buttons"), 1, 3, "buttons", "Reply buttons")
            data["buttons"] = list(data["buttons"])
        return data

    @model_validator(mode="after")
    def validate_uniqueness(self) -> "ActionButtons":
        check_unique([b.id for b in self.buttons], "ids", "Reply buttons")
        check_unique([b.title for b in self.buttons], "titles", "Reply buttons")
        return self


class ActionList(InteractiveComponent):
    """List action: a menu button opening 1 to 10 sections of rows."""

    button: str = Field(..., description="Label of the button opening the list")
    sections: list[ListSection] = Field(..., description="Sections of the list (1-10)")

    @property
    def kind(self) -> InteractiveType:
        return InteractiveType.LIST

    @model_validator(mode="before")
    @classmethod
    def validate_list(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if isinstance(data, dict):
            require_text(data, "button", 20, "Action")
            check_count(data.get("sections"), 1, 10, "sections", "Action")
            data["sections"] = list(data["sections"])
        return data

    @model_validator(mode="after")
    def validate_sections(self) -> "ActionList":
        _require_section_titles(self.sections)
        check_unique(
            [row.id for section in self.sections for row in section.rows],
            "row ids",
            "List",
        )
        return self


def _is_product(item: Any) -> bool:
    return isinstance(item, Product) or (
        isinstance(item, dict) and "product_retailer_id" in item
    )


def _is_product_section(item: Any) -> bool:
    return isinstance(item, ProductSection) or (
        isinstance(item, dict) and "product_items" in item
    )


class ActionCatalog(InteractiveComponent):
    """Catalog action.

    Built from ``products``: either exactly one ``Product`` (single product
    mode) or 1 to 10 ``ProductSection`` objects (product list mode). The two
    modes are mutually exclusive.
    """

    catalog_id: str = Field(..., description="ID of the catalog holding the products")
    product_retailer_id: str | None = Field(
        None, description="Product shown in single product mode"
    )
    sections: list[ProductSection] | None = Field(
        None, description="Product sections shown in product list mode"
    )

    @property
    def kind(self) -> InteractiveType:
        if self.product_retailer_id is not None:
            return InteractiveType.PRODUCT
        return InteractiveType.PRODUCT_LIST

    @model_validator(mode="before")
    @classmethod
    def validate_catalog(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if not isinstance(data, dict):
            return data

        require(data, "catalog_id", "Catalog")

        if "products" in data:
            products = list(data.pop("products") or [])
            if data.get("product_retailer_id") or data.get("sections"):
                raise InvalidCombinationError(
                    "Catalog products cannot be combined with product_retailer_id or sections",
                    "products",
                )
            if products and _is_product(products[0]):
                if len(products) > 1:
                    raise InvalidCombinationError(
                        "Catalog must have only 1 product, use a ProductSection instead",
                        "products",
                        len(products),
                    )
                first = products[0]
                data["product_retailer_id"] = (
                    first.product_retailer_id
                    if isinstance(first, Product)
                    else first["product_retailer_id"]
                )
            elif products:
                data["sections"] = products

        single = data.get("product_retailer_id") or None
        sections = data.get("sections")
        if single is not None and sections is not None:
            raise InvalidCombinationError(
                "Catalog must have either a single product or product sections, not both",
                "sections",
            )
        if single is None:
            check_count(
                sections, 1, 10, "product sections", "Catalog"
            )
            sections = list(sections)
            if not all(_is_product_section(item) for item in sections):
                raise InvalidCombinationError(
                    "Catalog must have only ProductSection objects", "sections"
                )
            data["sections"] = sections
        data["product_retailer_id"] = single
        return data

    @model_validator(mode="after")
    def validate_sections(self) -> "ActionCatalog":
        if self.sections is not None:
            _require_section_titles(self.sections)
        return self


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------


class Header(InteractiveComponent):
    """Header of an interactive message.

    Built from one content object, ``Header(content=Text(body="Hi"))`` or
    ``Header(content=Image(link=...))``, or directly from its fields. Text
    headers are limited to 60 characters; media headers cannot carry a caption.
    """

    type: HeaderType = Field(..., description="Header type")
    text: str | None = Field(None, description="Header text (text headers)")
    image: Image | None = Field(None, description="Image header")
    video: Video | None = Field(None, description="Video header")
    document: Document | None = Field(None, description="Document header")

    @model_validator(mode="before")
    @classmethod
    def validate_header(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if not isinstance(data, dict):
            return data

        if "content" in data:
            data = cls._from_content(data)

        raw_type = require(data, "type", "Header")
        try:
            header_type = HeaderType(raw_type)
        except ValueError as e:
            raise InvalidCombinationError(
                "Header object must be either Text, Video, Image or Document.",
                "type",
                raw_type,
            ) from e
        data["type"] = header_type

        if header_type is HeaderType.TEXT:
            require_text(data, "text", 60, "Header")
        else:
            media = require(data, header_type.value, "Header")
            caption = (
                media.get("caption")
                if isinstance(media, dict)
                else getattr(media, "caption", None)
            )
            if caption is not None:
                raise InvalidCombinationError(
                    f"Header {header_type.value} must not have a caption",
                    "caption",
                    caption,
                )

        for other in HeaderType:
            if other is not header_type and data.get(other.value) is not None:
                raise InvalidCombinationError(
                    f"Header of type {header_type.value} cannot also have a {other.value}",
                    other.value,
                )
        return data

    @staticmethod
    def _from_content(data: dict[str, Any]) -> dict[str, Any]:
        content = data.pop("content")
        if content is None:
            raise MissingFieldError("Header must have an object", "content")
        if any(data.get(field) is not None for field in _HEADER_FIELDS):
            raise InvalidCombinationError(
                "Header content cannot be combined with explicit header fields",
                "content",
            )

        if isinstance(content, Text):
            return {"type": HeaderType.TEXT, "text": content.body}

        for header_type, media_class in HEADER_MEDIA.items():
            if isinstance(content, media_class):
                if content.supports_caption and content.caption is not None:
                    raise InvalidCombinationError(
                        f"Header {header_type.value} must not have a caption",
                        "caption",
                        content.caption,
                    )
                return {"type": header_type, header_type.value: content}

        raise InvalidCombinationError(
            "Header object must be either Text, Video, Image or Document.",
            "content",
            type(content).__name__,
        )


# ---------------------------------------------------------------------------
# Interactive message
# ---------------------------------------------------------------------------


def _coerce_action(action: Any) -> Any:
    """Build the right action class from a plain dict."""
    if not isinstance(action, dict):
        return action
    if "catalog_id" in action or "products" in action:
        return ActionCatalog(**action)
    if "buttons" in action:
        return ActionButtons(**action)
    return ActionList(**action)


class Interactive(ClientMessage):
    """Interactive message.

    The mode (``type``) comes from the action:

    - ``product``: single product catalog; body optional, header forbidden
    - ``product_list``: multi-product catalog; text header required
    - ``list``: list menu; body required, header must be text
    - ``button``: reply buttons; body required, any header type
    """

    message_type: ClassVar[str] = "interactive"

    action: ActionList | ActionButtons | ActionCatalog = Field(
        ..., description="Action of the interactive message"
    )
    body: Body | None = Field(None, description="Body component")
    header: Header | None = Field(None, description="Header component")
    footer: Footer | None = Field(None, description="Footer component")

    @computed_field
    @property
    def type(self) -> InteractiveType:
        return self.action.kind

    @model_validator(mode="before")
    @classmethod
    def validate_components(cls, data: Any) -> Any:
        data = as_input_dict(data)
        if not isinstance(data, dict):
            return data

        data.pop("type", None)
        if data.get("action") is None:
            raise MissingFieldError(
                "Interactive must have an action component", "action"
            )
        data["action"] = _coerce_action(data["action"])

        if isinstance(data.get("body"), str):
            data["body"] = Body(text=data["body"])
        if isinstance(data.get("footer"), str):
            data["footer"] = Footer(text=data["footer"])
        return data

    @model_validator(mode="after")
    def validate_mode(self) -> "Interactive":
        mode = self.action.kind
        header_type = self.header.type if self.header is not None else None

        if mode is not InteractiveType.PRODUCT and self.body is None:
            raise MissingFieldError("Interactive must have a body component", "body")
        if mode is InteractiveType.PRODUCT and self.header is not None:
            raise InvalidCombinationError(
                "Interactive must not have a header component if action is a single product",
                "header",
            )
        if mode is InteractiveType.PRODUCT_LIST and header_type is not HeaderType.TEXT:
            raise InvalidCombinationError(
                "Interactive must have a Text header component if action is a product list",
                "header",
            )
        if (
            self.header is not None
            and mode is not InteractiveType.BUTTON
            and header_type is not HeaderType.TEXT
        ):
            raise InvalidCombinationError(
                "Interactive header must be of type Text", "header", header_type
            )
        return self
