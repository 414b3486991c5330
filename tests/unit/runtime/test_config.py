"""Tests for config persistence and input sanitization."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from contextera.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("contextera.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertIsNone(config.load_last_root())
                self.assertTrue(config.load_show_hidden())
                self.assertFalse(config.load_skip_gitignored())
                self.assertEqual(config.load_view_name(), "table")

    def test_preferences_round_trip_through_one_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("contextera.runtime.config.CONFIG_PATH", config_path):
                config.save_last_root(Path(tmp))
                config.save_show_hidden(False)
                config.save_skip_gitignored(True)
                config.save_view_name("Tree")

                self.assertEqual(config.load_last_root(), Path(tmp))
                self.assertFalse(config.load_show_hidden())
                self.assertTrue(config.load_skip_gitignored())
                self.assertEqual(config.load_view_name(), "tree")
                self.assertEqual(
                    set(config.load_config()),
                    {"last_root", "show_hidden", "skip_gitignored", "view"},
                )

    def test_malformed_values_fall_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("contextera.runtime.config.CONFIG_PATH", config_path):
                config.save_config(
                    {
                        "last_root": "   ",
                        "show_hidden": "no",
                        "skip_gitignored": 1,
                        "view": "graph",
                    }
                )

                self.assertIsNone(config.load_last_root())
                self.assertTrue(config.load_show_hidden())
                self.assertFalse(config.load_skip_gitignored())
                self.assertEqual(config.load_view_name(), "table")

    def test_invalid_json_and_non_object_payloads_load_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("contextera.runtime.config.CONFIG_PATH", config_path):
                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_unknown_view_names_are_not_saved(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("contextera.runtime.config.CONFIG_PATH", config_path):
                config.save_view_name("graph")
                self.assertFalse(config_path.exists())


if __name__ == "__main__":
    unittest.main()
