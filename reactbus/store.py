"""Reactive property store with a fixed key schema."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import logging
from typing import Any

from .exceptions import DuplicateHandlerError, HandlerNotAttachedError, UnknownPropertyError
from .handlers import Handler, find_handler

LOGGER = logging.getLogger(__name__)


class PropertyStore:
    """Hold named values and notify subscribers whenever one is written.

    The mapping given to the constructor fixes the set of keys permanently:
    values can change, keys can't be added or removed. Values are stored and
    handed out by reference. Mutating a stored list or dict in place does not
    notify anyone; write it back with ``set``/``set_many`` for that.

    Subscribers are called as ``handler(current, previous)`` on every write,
    even when the value did not change. Writing a property from inside one of
    its own subscribers (or from an ``alt`` update function) recurses without
    bound and ends in ``RecursionError``.
    """

    def __init__(self, props: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        self._subscribers: dict[str, list[Handler]] = {}
        for key, value in (props or {}).items():
            self._values[key] = value
            self._subscribers[key] = []

    @property
    def keys(self) -> tuple[str, ...]:
        """Return registered property names in registration order."""
        return tuple(self._values)

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._values
        except TypeError:
            return False

    def subscribers(self, key: str) -> tuple[Handler, ...]:
        """Return a snapshot of the subscribers attached to ``key``."""
        self._ensure_exist((key,))
        return tuple(self._subscribers[key])

    def get(self, key: str) -> Any:
        """Return the current value of ``key``."""
        self._ensure_exist((key,))
        return self._values[key]

    def get_many(self, *keys: str) -> dict[str, Any]:
        """Return several properties as a new dict.

        With no keys, every property in the store is returned. Unknown keys
        are reported together in a single ``UnknownPropertyError``.
        """
        if not keys:
            return dict(self._values)
        self._ensure_exist(keys)
        return {key: self._values[key] for key in keys}

    def set(self, key: str, value: Any) -> None:
        """Assign ``value`` to ``key`` then notify its subscribers."""
        self._ensure_exist((key,))
        previous = self._values[key]
        self._values[key] = value
        self._notify(key, previous)

    def set_many(self, props: Mapping[str, Any]) -> None:
        """Assign a batch of properties then notify their subscribers.

        Every key is validated before anything is written. Subscribers only
        run once the whole batch has been assigned, so a subscriber of one key
        reads the new values of every other key in the same batch.
        """
        self._ensure_exist(props.keys())
        previous: dict[str, Any] = {}
        for key, value in props.items():
            previous[key] = self._values[key]
            self._values[key] = value
        for key in props:
            self._notify(key, previous[key])

    def alt(self, key: str, fn: Callable[[Any], Any]) -> None:
        """Replace ``key`` with ``fn(current)`` then notify its subscribers.

        ``fn`` should be a pure function of the current value.
        """
        self._ensure_exist((key,))
        previous = self._values[key]
        self._values[key] = fn(previous)
        self._notify(key, previous)

    def sub(self, key: str, handler: Handler) -> None:
        """Attach ``handler`` to ``key``."""
        self._ensure_exist((key,))
        subscribers = self._subscribers[key]
        if find_handler(subscribers, handler) != -1:
            raise DuplicateHandlerError(key, handler, kind="property")
        subscribers.append(handler)
        LOGGER.debug("Subscribed to property: %s", key)

    def unsub(self, key: str, handler: Handler) -> None:
        """Detach ``handler`` from ``key``."""
        self._ensure_exist((key,))
        subscribers = self._subscribers[key]
        index = find_handler(subscribers, handler)
        if index == -1:
            raise HandlerNotAttachedError(key, handler, kind="property")
        del subscribers[index]
        LOGGER.debug("Unsubscribed from property: %s", key)

    getx = get_many
    setx = set_many

    def _notify(self, key: str, previous: Any) -> None:
        # Changes to this key's subscribers mid-dispatch apply to its next dispatch.
        subscribers = tuple(self._subscribers[key])
        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug(
                "store.notify",
                extra={"property": key, "subscriber_count": len(subscribers)},
            )
        for handler in subscribers:
            handler(self._values[key], previous)

    def _ensure_exist(self, keys: Iterable[str]) -> None:
        missing = [key for key in keys if key not in self]
        if missing:
            raise UnknownPropertyError(missing)
