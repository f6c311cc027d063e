"""Top-level package for reactbus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import build_event_bus, build_property_store, load_config
    from .events import EventBus
    from .exceptions import (
        ConfigValidationError,
        DuplicateHandlerError,
        HandlerNotAttachedError,
        ReactbusError,
        UnknownEventError,
        UnknownPropertyError,
    )
    from .logging_utils import configure_logging
    from .store import PropertyStore

__all__ = [
    "ConfigValidationError",
    "DuplicateHandlerError",
    "EventBus",
    "HandlerNotAttachedError",
    "PropertyStore",
    "ReactbusError",
    "UnknownEventError",
    "UnknownPropertyError",
    "build_event_bus",
    "build_property_store",
    "configure_logging",
    "load_config",
]

_EXCEPTION_NAMES = {
    "ConfigValidationError",
    "DuplicateHandlerError",
    "HandlerNotAttachedError",
    "ReactbusError",
    "UnknownEventError",
    "UnknownPropertyError",
}


def __getattr__(name: str) -> Any:
    """Lazily import symbols so the pydantic/structlog layers load on demand."""
    if name == "EventBus":
        from .events import EventBus

        return EventBus
    if name == "PropertyStore":
        from .store import PropertyStore

        return PropertyStore
    if name in _EXCEPTION_NAMES:
        from . import exceptions

        return getattr(exceptions, name)
    if name in {"build_event_bus", "build_property_store", "load_config"}:
        from . import config

        return getattr(config, name)
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
