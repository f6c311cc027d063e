"""Tests for registry declaration loading and validation."""

from __future__ import annotations

import tempfile
from pathlib import Path
import unittest

from reactbus.config import (
    DEFAULT_CONFIG,
    build_event_bus,
    build_property_store,
    load_config,
)
from reactbus.exceptions import ConfigValidationError, UnknownEventError


def _write(directory: str, text: str) -> Path:
    path = Path(directory) / "reactbus.toml"
    path.write_text(text.strip(), encoding="utf-8")
    return path


class ConfigTests(unittest.TestCase):
    """Validate declaration merge and failure behavior."""

    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config = load_config(Path(temp_dir) / "missing.toml")
            self.assertEqual(config, DEFAULT_CONFIG)
            self.assertEqual(config["events"]["names"], [])
            self.assertEqual(config["store"]["properties"], {})
            self.assertEqual(config["logging"]["level"], "INFO")

    def test_declared_registries_are_loaded(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = _write(
                temp_dir,
                """
[events]
names = [" file.saved ", "file.closed", "file.saved"]

[store.properties]
counter = 0
tags = ["a", "b"]

[logging]
level = "debug"
                """,
            )
            config = load_config(path)
            self.assertEqual(config["events"]["names"], ["file.saved", "file.closed"])
            self.assertEqual(
                config["store"]["properties"], {"counter": 0, "tags": ["a", "b"]}
            )
            self.assertEqual(config["logging"]["level"], "DEBUG")
            self.assertTrue(config["logging"]["structured"])

    def test_invalid_toml_raises(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = _write(temp_dir, "[events\nnames = 1")
            with self.assertRaises(ConfigValidationError):
                load_config(path)

    def test_invalid_values_raise(self) -> None:
        cases = [
            '[events]\nnames = "file.saved"',
            '[events]\nnames = ["ok", ""]',
            '[events]\nnames = ["ok", 3]',
            '[logging]\nlevel = "LOUD"',
            "[store]\nproperties = 4",
        ]
        for text in cases:
            with self.subTest(text=text):
                with tempfile.TemporaryDirectory() as temp_dir:
                    with self.assertRaises(ConfigValidationError):
                        load_config(_write(temp_dir, text))

    def test_build_primitives_from_config(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = _write(
                temp_dir,
                """
[events]
names = ["ready"]

[store.properties]
items = [1, 2]
                """,
            )
            config = load_config(path)

        bus = build_event_bus(config)
        self.assertEqual(bus.events, ("ready",))
        with self.assertRaises(UnknownEventError):
            bus.emit("other")

        first = build_property_store(config)
        second = build_property_store(config)
        first.get("items").append(3)
        self.assertEqual(second.get("items"), [1, 2])
        self.assertEqual(config["store"]["properties"]["items"], [1, 2])


if __name__ == "__main__":
    unittest.main()
