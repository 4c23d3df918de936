"""Tests for config loading and settings resolution."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from tez.input.actions import Accept, Direction, Exit, Navigate
from tez.input.keys import Key
from tez.runtime.app import resolve_binds
from tez.runtime.config import (
    DEFAULT_PROMPT,
    Settings,
    load_binds,
    load_config,
    load_viewport,
    settings_from_config,
)
from tez.search.debounce import DEFAULT_DEBOUNCE_SECONDS
from tez.search.engine import DEFAULT_MATCH_BUDGET
from tez.tui.viewport import Alignment, Extent, Viewport


class LoadConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "config.json"

    def test_missing_file_is_empty(self) -> None:
        self.assertEqual(load_config(self.path), {})

    def test_reads_json_object(self) -> None:
        self.path.write_text(json.dumps({"prompt": "$ "}), encoding="utf-8")
        self.assertEqual(load_config(self.path), {"prompt": "$ "})

    def test_malformed_json_is_ignored_with_warning(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("tez.runtime.config", level="WARNING"):
            self.assertEqual(load_config(self.path), {})

    def test_non_object_is_ignored(self) -> None:
        self.path.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(load_config(self.path), {})


class SettingsFromConfigTests(unittest.TestCase):
    def test_defaults_for_empty_config(self) -> None:
        settings = settings_from_config({})
        self.assertEqual(len(settings.binds), 0)
        self.assertEqual(settings.debounce_seconds, DEFAULT_DEBOUNCE_SECONDS)
        self.assertEqual(settings.match_budget, DEFAULT_MATCH_BUDGET)
        self.assertEqual(settings.prompt, DEFAULT_PROMPT)
        self.assertEqual(settings.query, "")
        self.assertFalse(settings.disable_default_binds)
        self.assertEqual(settings.viewport, Viewport())

    def test_reads_all_keys(self) -> None:
        settings = settings_from_config(
            {
                "binds": {"ctrl+j": "next", "ctrl+x": "accept"},
                "debounce_ms": 50,
                "match_budget": 500,
                "prompt": "$ ",
            }
        )
        self.assertEqual(settings.binds.action_for_key(Key("j", ctrl=True)), Navigate(Direction.NEXT))
        self.assertEqual(settings.binds.action_for_key(Key("x", ctrl=True)), Accept())
        self.assertAlmostEqual(settings.debounce_seconds, 0.05)
        self.assertEqual(settings.match_budget, 500)
        self.assertEqual(settings.prompt, "$ ")

    def test_invalid_values_fall_back(self) -> None:
        settings = settings_from_config({"debounce_ms": 0, "match_budget": True, "prompt": 3, "binds": []})
        self.assertEqual(settings.debounce_seconds, DEFAULT_DEBOUNCE_SECONDS)
        self.assertEqual(settings.match_budget, DEFAULT_MATCH_BUDGET)
        self.assertEqual(settings.prompt, DEFAULT_PROMPT)
        self.assertEqual(len(settings.binds), 0)

    def test_reads_viewport_and_disable_default_binds(self) -> None:
        settings = settings_from_config(
            {"disable_default_binds": True, "height": "40%", "width": 60, "alignment": "left(2)"}
        )
        self.assertTrue(settings.disable_default_binds)
        self.assertEqual(
            settings.viewport,
            Viewport(width=Extent(60), height=Extent(0.4, percent=True), alignment=Alignment("left", Extent(2))),
        )

    def test_invalid_viewport_values_are_skipped_with_warning(self) -> None:
        with self.assertLogs("tez.runtime.config", level="WARNING") as logs:
            viewport = load_viewport({"height": "tall", "width": -1, "alignment": "middle"})
        self.assertEqual(viewport, Viewport())
        self.assertEqual(len(logs.records), 3)

    def test_non_boolean_disable_default_binds_is_ignored(self) -> None:
        self.assertFalse(settings_from_config({"disable_default_binds": "yes"}).disable_default_binds)
        self.assertFalse(settings_from_config({"disable_default_binds": 1}).disable_default_binds)

    def test_invalid_binds_are_skipped_with_warning(self) -> None:
        with self.assertLogs("tez.runtime.config", level="WARNING") as logs:
            binds = load_binds({"binds": {"ctrl+j": "next", "shif+a": "exit", "ctrl+k": "explode", "a": 1}})
        self.assertEqual(len(binds), 1)
        self.assertEqual(len(logs.records), 3)


class ResolveBindsTests(unittest.TestCase):
    def test_user_binds_override_defaults(self) -> None:
        settings = Settings()
        settings.binds.bind(Key("enter"), Exit())
        binds = resolve_binds(settings)

        self.assertEqual(binds.action_for_key(Key("enter")), Exit())
        self.assertEqual(binds.action_for_key(Key("n", ctrl=True)), Navigate(Direction.NEXT))
        self.assertEqual(len(settings.binds), 1)

    def test_disabled_defaults_keep_only_user_binds(self) -> None:
        settings = Settings(disable_default_binds=True)
        settings.binds.bind(Key("q", ctrl=True), Exit())
        binds = resolve_binds(settings)

        self.assertEqual(len(binds), 1)
        self.assertEqual(binds.action_for_key(Key("q", ctrl=True)), Exit())
        self.assertIsNone(binds.action_for_key(Key("n", ctrl=True)))
        self.assertIsNone(binds.action_for_key(Key("c", ctrl=True)))
