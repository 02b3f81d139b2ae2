"""Launcher session option bits."""

from __future__ import annotations

import enum
from collections.abc import Iterable


class LauncherFlags(enum.Flag):
    NONE = 0
    DOMAINS = enum.auto()
    TABS = enum.auto()
    KEY_ASSIGNMENTS = enum.auto()
    COMMANDS = enum.auto()
    WORKSPACES = enum.auto()
    LAUNCH_MENU_ITEMS = enum.auto()
    FUZZY = enum.auto()


DEFAULT_FLAGS = LauncherFlags.DOMAINS | LauncherFlags.TABS | LauncherFlags.LAUNCH_MENU_ITEMS

_FLAG_ALIASES: dict[str, LauncherFlags] = {
    "domains": LauncherFlags.DOMAINS,
    "tabs": LauncherFlags.TABS,
    "key_assignments": LauncherFlags.KEY_ASSIGNMENTS,
    "keys": LauncherFlags.KEY_ASSIGNMENTS,
    "commands": LauncherFlags.COMMANDS,
    "workspaces": LauncherFlags.WORKSPACES,
    "launch_menu_items": LauncherFlags.LAUNCH_MENU_ITEMS,
    "launch_menu": LauncherFlags.LAUNCH_MENU_ITEMS,
    "fuzzy": LauncherFlags.FUZZY,
}


def parse_flag_names(names: Iterable[str]) -> LauncherFlags:
    """Combine flag names (case-insensitive, ``-`` or ``_`` separated).

    Raises ``ValueError`` for unknown names.
    """
    flags = LauncherFlags.NONE
    for raw in names:
        name = raw.strip().lower().replace("-", "_")
        if not name:
            continue
        try:
            flags |= _FLAG_ALIASES[name]
        except KeyError:
            raise ValueError(f"unknown launcher flag: {raw!r}") from None
    return flags


def parse_flags(text: str) -> LauncherFlags:
    """Parse ``"domains|tabs"`` or ``"domains,tabs"`` style flag strings."""
    return parse_flag_names(text.replace("|", ",").split(","))


__all__ = ["DEFAULT_FLAGS", "LauncherFlags", "parse_flag_names", "parse_flags"]
