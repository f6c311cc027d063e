"""Registry declarations and logging settings loaded from TOML.

A declaration file names the events a bus accepts and the properties a store
holds, with their initial values:

    [events]
    names = ["file.saved", "file.closed"]

    [store.properties]
    counter = 0
    theme = "dark"

    [logging]
    level = "DEBUG"
"""

from __future__ import annotations

from copy import deepcopy
import logging
from pathlib import Path
import tomllib
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .events import EventBus
from .exceptions import ConfigValidationError
from .store import PropertyStore

LOGGER = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class LoggingConfig(BaseModel):
    """Logging behavior and output destinations."""

    level: str = "INFO"
    structured: bool = True
    log_to_file: bool = False
    log_file_path: str = "~/.local/state/reactbus/reactbus.log"

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Logging level must be a string.")
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(f"Unsupported log level {normalized!r}.")
        return normalized

    @field_validator("log_file_path", mode="before")
    @classmethod
    def _validate_log_file_path(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("log_file_path must be a string.")
        normalized = value.strip()
        if not normalized:
            raise ValueError("log_file_path must not be empty.")
        return normalized


class EventsConfig(BaseModel):
    """Event names accepted by a bus."""

    names: list[str] = Field(default_factory=list)

    @field_validator("names", mode="before")
    @classmethod
    def _validate_names(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError("names must be a list of event names.")
        normalized: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise ValueError("Each event name must be a string.")
            candidate = item.strip()
            if not candidate:
                raise ValueError("Event names must not be empty.")
            if candidate not in normalized:
                normalized.append(candidate)
        return normalized


class StoreConfig(BaseModel):
    """Property names and initial values held by a store."""

    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("properties", mode="before")
    @classmethod
    def _validate_properties(cls, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("properties must be a table/dict of name -> value.")
        for key in value:
            if not isinstance(key, str) or not key.strip():
                raise ValueError("Property names must be non-empty strings.")
        return dict(value)


class Config(BaseModel):
    """Root configuration model for all sections."""

    events: EventsConfig = EventsConfig()
    store: StoreConfig = StoreConfig()
    logging: LoggingConfig = LoggingConfig()


DEFAULT_CONFIG: dict[str, dict[str, Any]] = Config().model_dump()


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override values onto base values."""
    merged: dict[str, Any] = deepcopy(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _validate_config(raw: dict[str, Any]) -> dict[str, dict[str, Any]]:
    try:
        return Config.model_validate(raw).model_dump()
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid registry declaration: {exc}") from exc


def load_config(config_path: Path) -> dict[str, dict[str, Any]]:
    """
    Load a declaration file, merge it with defaults, and validate it.

    A missing file yields the defaults: no events, no properties.
    """
    if not config_path.exists():
        LOGGER.info("No declaration at %s, using defaults", config_path)
        return deepcopy(DEFAULT_CONFIG)

    try:
        raw_data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigValidationError(
            f"Unable to read declaration at {config_path}: {exc}"
        ) from exc

    config = _validate_config(_deep_merge(DEFAULT_CONFIG, raw_data))
    LOGGER.debug(
        "config.loaded",
        extra={
            "path": str(config_path),
            "event_count": len(config["events"]["names"]),
            "property_count": len(config["store"]["properties"]),
        },
    )
    return config


def build_event_bus(config: dict[str, dict[str, Any]]) -> EventBus:
    """Create an ``EventBus`` accepting the declared event names."""
    return EventBus(*config["events"]["names"])


def build_property_store(config: dict[str, dict[str, Any]]) -> PropertyStore:
    """Create a ``PropertyStore`` seeded with the declared initial values.

    Values are copied so stores built from the same config share nothing.
    """
    return PropertyStore(deepcopy(config["store"]["properties"]))
