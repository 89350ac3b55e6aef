"""Event dispatching for webhook and outbound events."""

from .event_dispatcher import EventName, WhatsAppEventDispatcher

__all__ = ["EventName", "WhatsAppEventDispatcher"]
