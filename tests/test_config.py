from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazylauncher import config
from lazylauncher.actions import Action
from lazylauncher.entries import LaunchMenuItem
from lazylauncher.flags import DEFAULT_FLAGS, LauncherFlags


class ConfigBehaviorTests(unittest.TestCase):
    def write_config(self, tmp: str, data: object) -> Path:
        path = Path(tmp) / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_missing_or_malformed_config_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing.json"
            self.assertEqual(config.load_config(missing), {})

            broken = Path(tmp) / "broken.json"
            broken.write_text("{not json", encoding="utf-8")
            with self.assertLogs("lazylauncher.config", level="WARNING"):
                self.assertEqual(config.load_config(broken), {})

            self.assertEqual(config.load_config(self.write_config(tmp, [1, 2])), {})

    def test_default_path_is_used_when_none_given(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self.write_config(tmp, {"title": "Pick"})
            with mock.patch("lazylauncher.config.CONFIG_PATH", path):
                self.assertEqual(config.load_title(config.load_config()), "Pick")

    def test_launcher_flags(self) -> None:
        self.assertEqual(config.load_launcher_flags({}), DEFAULT_FLAGS)
        self.assertEqual(
            config.load_launcher_flags({"launcher_flags": ["tabs", "key_assignments"]}),
            LauncherFlags.TABS | LauncherFlags.KEY_ASSIGNMENTS,
        )
        with self.assertLogs("lazylauncher.config", level="WARNING"):
            self.assertEqual(config.load_launcher_flags({"launcher_flags": ["bogus"]}), DEFAULT_FLAGS)

    def test_title_falls_back_for_blank_values(self) -> None:
        self.assertEqual(config.load_title({"title": "   "}), config.DEFAULT_TITLE)
        self.assertEqual(config.load_title({"title": 3}), config.DEFAULT_TITLE)

    def test_launch_menu_drops_malformed_items(self) -> None:
        items = config.load_launch_menu(
            {
                "launch_menu": [
                    {"label": "Top", "args": ["top"]},
                    {"args": ["htop"], "domain": "local"},
                    {"args": "top"},
                    "nope",
                ]
            }
        )

        self.assertEqual(
            items,
            [LaunchMenuItem(label="Top", args=("top",)), LaunchMenuItem(args=("htop",), domain="local")],
        )

    def test_key_bindings_skip_malformed_entries(self) -> None:
        raw = {
            "keys": [
                {"key": "e", "mods": "CTRL|ALT", "action": "EmitEvent", "args": ["hello"]},
                {"key": "x", "mods": "HYPER", "action": "Nop"},
                {"mods": "CTRL", "action": "Nop"},
            ]
        }

        with self.assertLogs("lazylauncher.config", level="WARNING") as logs:
            bindings = config.load_key_bindings(raw)

        self.assertEqual(len(logs.output), 2)
        self.assertEqual(len(bindings), 1)
        self.assertEqual(bindings[0].action, Action("EmitEvent", ("hello",)))
        self.assertEqual(bindings[0].mods_text(), "CTRL|ALT")

    def test_disable_default_key_bindings_requires_bool(self) -> None:
        self.assertTrue(config.load_disable_default_key_bindings({"disable_default_key_bindings": True}))
        self.assertFalse(config.load_disable_default_key_bindings({"disable_default_key_bindings": "yes"}))


if __name__ == "__main__":
    unittest.main()
