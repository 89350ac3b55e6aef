"""
Constraint checks shared by the outbound message models.

Each helper raises the matching ``WhatsAppValidationError`` subclass on the
first broken rule. Models call them from ``mode="before"`` model validators so
that nothing is assigned until every rule has passed.
"""

from collections.abc import Sequence
from typing import Any

from .errors import (
    CardinalityError,
    LengthExceededError,
    MissingFieldError,
    UniquenessError,
)


def require(data: dict[str, Any], field: str, owner: str) -> Any:
    """Return a required value, rejecting None and empty strings/sequences."""
    value = data.get(field)
    if value is None or (isinstance(value, str | list | tuple) and len(value) == 0):
        raise MissingFieldError(f"{owner} must have a {field}", field, value)
    return value


def check_length(
    value: str | None, max_length: int, field: str, owner: str
) -> str | None:
    """Validate a text field against its maximum length (None passes)."""
    if value is not None and isinstance(value, str) and len(value) > max_length:
        raise LengthExceededError(
            f"{owner} {field} must be {max_length} characters or less",
            field,
            value,
        )
    return value


def require_text(data: dict[str, Any], field: str, max_length: int, owner: str) -> str:
    """Required, non-empty text no longer than max_length."""
    value = require(data, field, owner)
    check_length(value, max_length, field, owner)
    return value


def check_count(
    items: Sequence[Any] | None,
    minimum: int,
    maximum: int,
    field: str,
    owner: str,
) -> Sequence[Any]:
    """Validate the number of children in a collection (closed interval)."""
    count = len(items) if items is not None else 0
    if count < minimum or count > maximum:
        raise CardinalityError(
            f"{owner} must have between {minimum} and {maximum} {field}",
            field,
            count,
        )
    return items


def check_unique(values: Sequence[str], field: str, owner: str) -> None:
    """Reject duplicated identifying values (exact string equality)."""
    seen: set[str] = set()
    for value in values:
        if value in seen:
            raise UniquenessError(f"{owner} must have unique {field}", field, value)
        seen.add(value)


def as_input_dict(data: Any) -> Any:
    """Copy dict input so validators never mutate what the caller passed."""
    return dict(data) if isinstance(data, dict) else data
