"""Domain exception hierarchy for the reactbus primitives."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class ReactbusError(RuntimeError):
    """Base class for all reactbus contract violations."""


class UnknownEventError(ReactbusError):
    """Raised when an event name is not part of the bus registry."""

    def __init__(self, event: str) -> None:
        self.event = event
        super().__init__(f"no such event: {event}")


class UnknownPropertyError(ReactbusError):
    """Raised when one or more keys are not part of the store registry.

    Multi-key operations collect every offending key before raising, so
    ``keys`` may hold more than one entry.
    """

    def __init__(self, keys: Iterable[str]) -> None:
        self.keys = tuple(keys)
        quoted = ", ".join(f'"{key}"' for key in self.keys)
        noun = "properties" if len(self.keys) > 1 else "property"
        super().__init__(f"no such {noun}: {quoted}")


class DuplicateHandlerError(ReactbusError):
    """Raised when a handler is attached twice to the same event or property."""

    def __init__(self, name: str, handler: Any, kind: str = "event") -> None:
        self.name = name
        self.handler = handler
        super().__init__(f"the handler is already attached to the {kind}: {name}")


class HandlerNotAttachedError(ReactbusError):
    """Raised when detaching a handler that is not attached."""

    def __init__(self, name: str, handler: Any, kind: str = "event") -> None:
        self.name = name
        self.handler = handler
        super().__init__(f"the handler is not attached to the {kind}: {name}")


class ConfigValidationError(ReactbusError):
    """Raised when a registry declaration cannot be parsed or validated."""
