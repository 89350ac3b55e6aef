"""
Request context management using contextvars for automatic propagation.

Webhook processing scopes the business phone number ID and the user's WhatsApp ID
to each event; every logger used inside that scope picks them up.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_phone_context: ContextVar[str | None] = ContextVar(
    "phone_id", default=None
)  # Business phone number ID from webhook metadata
_user_context: ContextVar[str | None] = ContextVar(
    "user_id", default=None
)  # WhatsApp ID of the user from webhook payload


@contextmanager
def request_context(
    phone_id: str | None = None,
    user_id: str | None = None,
) -> Iterator[None]:
    """
    Scope the request context to a block.

    Both values are set, None included, and the previous values are
    restored on exit.

    Args:
        phone_id: Business phone number ID (the bot's phone ID)
        user_id: User identifier from webhook payload (WhatsApp ID)
    """
    phone_token = _phone_context.set(phone_id or None)
    user_token = _user_context.set(user_id or None)
    try:
        yield
    finally:
        _user_context.reset(user_token)
        _phone_context.reset(phone_token)


def get_current_phone_context() -> str | None:
    """Get the current business phone ID, or None if not set."""
    return _phone_context.get()


def get_current_user_context() -> str | None:
    """Get the current user ID, or None if not set."""
    return _user_context.get()


def clear_request_context() -> None:
    """
    Clear the request context.

    Context is isolated per task, but tests and long-lived workers reuse it.
    """
    _phone_context.set(None)
    _user_context.set(None)


def get_context_info() -> dict[str, str | None]:
    """
    Get current context information for debugging.

    Returns:
        Dictionary with current phone_id and user_id
    """
    return {
        "phone_id": get_current_phone_context(),
        "user_id": get_current_user_context(),
    }
