"""Persistent JSON config helpers.

Supplies default launcher flags, the overlay title, launch menu items, and
user key bindings. Malformed or missing config falls back to defaults, and
malformed list items are dropped.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .entries import LaunchMenuItem
from .flags import DEFAULT_FLAGS, LauncherFlags, parse_flag_names
from .keymap import KeyBinding, parse_key_binding

logger = logging.getLogger(__name__)

APP_NAME = "lazylauncher"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_TITLE = "Launcher"


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path or CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_launcher_flags(config: dict[str, object]) -> LauncherFlags:
    """Return configured flags, or the defaults when unset/invalid."""
    value = config.get("launcher_flags")
    if not isinstance(value, list) or not all(isinstance(name, str) for name in value):
        return DEFAULT_FLAGS
    try:
        return parse_flag_names(value)
    except ValueError as exc:
        logger.warning("Ignoring launcher_flags: %s", exc)
        return DEFAULT_FLAGS


def load_title(config: dict[str, object]) -> str:
    value = config.get("title")
    if not isinstance(value, str):
        return DEFAULT_TITLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_TITLE


def _parse_launch_menu_item(raw: object) -> LaunchMenuItem | None:
    if not isinstance(raw, dict):
        return None
    label = raw.get("label")
    raw_args = raw.get("args", [])
    domain = raw.get("domain", "CurrentPaneDomain")
    if label is not None and not isinstance(label, str):
        return None
    if not isinstance(raw_args, list) or not all(isinstance(arg, str) for arg in raw_args):
        return None
    if not isinstance(domain, str) or not domain:
        return None
    return LaunchMenuItem(label=label or None, args=tuple(raw_args), domain=domain)


def load_launch_menu(config: dict[str, object]) -> list[LaunchMenuItem]:
    value = config.get("launch_menu")
    if not isinstance(value, list):
        return []
    items = [_parse_launch_menu_item(raw) for raw in value]
    return [item for item in items if item is not None]


def load_key_bindings(config: dict[str, object]) -> list[KeyBinding]:
    value = config.get("keys")
    if not isinstance(value, list):
        return []
    bindings: list[KeyBinding] = []
    for raw in value:
        parsed = parse_key_binding(raw)
        if parsed is None:
            logger.warning("Ignoring malformed key binding %r", raw)
            continue
        bindings.append(parsed)
    return bindings


def load_disable_default_key_bindings(config: dict[str, object]) -> bool:
    value = config.get("disable_default_key_bindings")
    return value if isinstance(value, bool) else False


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_TITLE",
    "load_config",
    "load_disable_default_key_bindings",
    "load_key_bindings",
    "load_launch_menu",
    "load_launcher_flags",
    "load_title",
]
