"""
Event dispatcher for routing parsed webhook and send events to listeners.

Listeners are plain callables registered per event name. Emission is
synchronous and follows registration order.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from whatsapp_api.core.logging.logger import get_logger


class EventName(str, Enum):
    """Events emitted by the WhatsApp API client."""

    MESSAGE = "message"
    STATUS = "status"
    SENT = "sent"


Listener = Callable[[Any], Any]


class WhatsAppEventDispatcher:
    """
    Registry of event listeners.

    Routes ``message`` and ``status`` events from webhook notifications and
    ``sent`` events from outbound messages to the registered callbacks.
    """

    def __init__(self):
        self.logger = get_logger(__name__)
        self._listeners: dict[EventName, list[Listener]] = {
            event: [] for event in EventName
        }

    def on(self, event: EventName | str, callback: Listener | None = None):
        """
        Register a listener for an event.

        Can be called directly or used as a decorator::

            @api.on("message")
            def handle(event): ...

        Args:
            event: Event name ("message", "status" or "sent")
            callback: Callable receiving the event object

        Returns:
            The callback, or a decorator when callback is omitted

        Raises:
            ValueError: If the event name is unknown
        """
        event_name = EventName(event)

        def register(func: Listener) -> Listener:
            self._listeners[event_name].append(func)
            self.logger.debug(
                f"Registered listener {getattr(func, '__name__', func)!r} for '{event_name.value}'"
            )
            return func

        if callback is None:
            return register
        return register(callback)

    def off(self, event: EventName | str, callback: Listener) -> None:
        """Remove a previously registered listener (no-op if absent)."""
        listeners = self._listeners[EventName(event)]
        if callback in listeners:
            listeners.remove(callback)

    def listener_count(self, event: EventName | str) -> int:
        """Number of listeners registered for an event."""
        return len(self._listeners[EventName(event)])

    def emit(self, event: EventName | str, payload: Any) -> None:
        """
        Call every listener registered for the event with the payload.

        Raises:
            Exception: Whatever a listener raises, after it is logged
        """
        event_name = EventName(event)
        for listener in list(self._listeners[event_name]):
            try:
                listener(payload)
            except Exception as e:
                self.logger.error(
                    f"Listener for '{event_name.value}' failed: {e}", exc_info=True
                )
                raise
