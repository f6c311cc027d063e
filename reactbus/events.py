"""Event bus over a fixed set of named events.

Usage:
    bus = EventBus("file.saved", "file.closed")

    def on_saved(path):
        print(f"saved {path}")

    bus.listen("file.saved", on_saved)
    bus.emit("file.saved", "/tmp/notes.txt")
    bus.unlisten("file.saved", on_saved)

Handlers run synchronously on the caller's stack, in the order they were
attached. A handler that emits the event it is handling recurses without
bound and ends in ``RecursionError``.
"""

from __future__ import annotations

import logging
from typing import Any

from .exceptions import DuplicateHandlerError, HandlerNotAttachedError, UnknownEventError
from .handlers import Handler, find_handler

LOGGER = logging.getLogger(__name__)


class EventBus:
    """Synchronous publish/subscribe registry with a fixed event schema.

    The event names passed to the constructor are the only events the bus
    will ever accept. Emitting, listening or unlistening anything else is a
    programmer error and raises ``UnknownEventError``.
    """

    def __init__(self, *events: str) -> None:
        self._handlers: dict[str, list[Handler]] = {}
        for event in events:
            self._handlers[event] = []

    @property
    def events(self) -> tuple[str, ...]:
        """Return registered event names in registration order."""
        return tuple(self._handlers)

    def __contains__(self, event: object) -> bool:
        try:
            return event in self._handlers
        except TypeError:
            return False

    def handlers(self, event: str) -> tuple[Handler, ...]:
        """Return a snapshot of the handlers attached to ``event``."""
        return tuple(self._require(event))

    def emit(self, event: str, data: Any = None) -> None:
        """Run every handler attached to ``event`` with ``data``.

        Handlers attached or detached while the event is being dispatched take
        effect on the next ``emit``. Return values are discarded and handler
        exceptions propagate to the caller.
        """
        handlers = tuple(self._require(event))
        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug(
                "events.emit",
                extra={"event_name": event, "handler_count": len(handlers)},
            )
        for handler in handlers:
            handler(data)

    def listen(self, event: str, handler: Handler) -> None:
        """Attach ``handler`` to ``event``.

        Args:
            event: Registered event name
            handler: Callable receiving the event payload
        """
        handlers = self._require(event)
        if find_handler(handlers, handler) != -1:
            raise DuplicateHandlerError(event, handler)
        handlers.append(handler)
        LOGGER.debug("Attached handler to event: %s", event)

    def unlisten(self, event: str, handler: Handler) -> None:
        """Detach ``handler`` from ``event``.

        Args:
            event: Registered event name
            handler: Previously attached callable
        """
        handlers = self._require(event)
        index = find_handler(handlers, handler)
        if index == -1:
            raise HandlerNotAttachedError(event, handler)
        del handlers[index]
        LOGGER.debug("Detached handler from event: %s", event)

    def _require(self, event: str) -> list[Handler]:
        try:
            return self._handlers[event]
        except (KeyError, TypeError):
            raise UnknownEventError(event) from None
