"""Key-binding table used to populate launcher shortcut entries.

Bindings are keyed by ``(key, modifiers)``; user bindings from config replace
defaults with the same key combo and otherwise append in config order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .actions import Action

MODIFIER_ORDER: tuple[str, ...] = ("SUPER", "CTRL", "ALT", "SHIFT")
_MODIFIER_ALIASES = {
    "CMD": "SUPER",
    "WIN": "SUPER",
    "CONTROL": "CTRL",
    "OPT": "ALT",
    "META": "ALT",
}


def normalize_mods(raw: str | Iterable[str]) -> frozenset[str]:
    """Normalize ``"CTRL|SHIFT"`` style modifier text into a set.

    Raises ``ValueError`` for unknown modifier names.
    """
    parts = raw.replace("+", "|").split("|") if isinstance(raw, str) else list(raw)
    mods: set[str] = set()
    for part in parts:
        name = part.strip().upper()
        if not name or name == "NONE":
            continue
        name = _MODIFIER_ALIASES.get(name, name)
        if name not in MODIFIER_ORDER:
            raise ValueError(f"unknown modifier: {part!r}")
        mods.add(name)
    return frozenset(mods)


@dataclass(frozen=True)
class KeyBinding:
    key: str
    mods: frozenset[str]
    action: Action

    def mods_text(self) -> str:
        ordered = [mod for mod in MODIFIER_ORDER if mod in self.mods]
        return "|".join(ordered) if ordered else "NONE"


def binding(key: str, mods: str, name: str, *args: object) -> KeyBinding:
    return KeyBinding(key=key, mods=normalize_mods(mods), action=Action(name, tuple(args)))


DEFAULT_KEY_BINDINGS: tuple[KeyBinding, ...] = (
    binding("t", "SUPER", "SpawnTab", "CurrentPaneDomain"),
    binding("T", "CTRL|SHIFT", "SpawnTab", "CurrentPaneDomain"),
    binding("n", "SUPER", "SpawnWindow"),
    binding("N", "CTRL|SHIFT", "SpawnWindow"),
    binding("w", "SUPER", "CloseCurrentTab", ("confirm", True)),
    binding("W", "CTRL|SHIFT", "CloseCurrentTab", ("confirm", True)),
    binding("c", "SUPER", "CopyTo", "Clipboard"),
    binding("v", "SUPER", "PasteFrom", "Clipboard"),
    binding("C", "CTRL|SHIFT", "CopyTo", "Clipboard"),
    binding("V", "CTRL|SHIFT", "PasteFrom", "Clipboard"),
    binding("f", "SUPER", "Search", ("CaseSensitiveString", "")),
    binding("F", "CTRL|SHIFT", "Search", ("CaseSensitiveString", "")),
    binding("k", "SUPER", "ClearScrollback", "ScrollbackOnly"),
    binding("L", "CTRL|SHIFT", "ShowDebugOverlay"),
    binding("P", "CTRL|SHIFT", "ActivateCommandPalette"),
    binding("X", "CTRL|SHIFT", "ActivateCopyMode"),
    binding("Z", "CTRL|SHIFT", "TogglePaneZoomState"),
    binding("R", "CTRL|SHIFT", "ReloadConfiguration"),
    binding("Enter", "ALT", "ToggleFullScreen"),
    binding("=", "CTRL", "IncreaseFontSize"),
    binding("-", "CTRL", "DecreaseFontSize"),
    binding("0", "CTRL", "ResetFontSize"),
    binding("1", "SUPER", "ActivateTab", 0),
    binding("2", "SUPER", "ActivateTab", 1),
    binding("3", "SUPER", "ActivateTab", 2),
    binding("9", "SUPER", "ActivateTab", -1),
    binding("Tab", "CTRL", "ActivateTabRelative", 1),
    binding("Tab", "CTRL|SHIFT", "ActivateTabRelative", -1),
    binding("PageUp", "CTRL", "ActivateTabRelative", -1),
    binding("PageDown", "CTRL", "ActivateTabRelative", 1),
)


def parse_key_binding(raw: object) -> KeyBinding | None:
    """Parse one ``{"key", "mods", "action", "args"}`` config item.

    Returns ``None`` for malformed items.
    """
    if not isinstance(raw, dict):
        return None
    key = raw.get("key")
    if not isinstance(key, str) or not key:
        return None
    raw_mods = raw.get("mods", "")
    if not isinstance(raw_mods, (str, list)):
        return None
    try:
        mods = normalize_mods(raw_mods)
    except ValueError:
        return None
    action = Action.from_json({"name": raw.get("action"), "args": raw.get("args", [])})
    if action is None:
        return None
    return KeyBinding(key=key, mods=mods, action=action)


def resolve_key_bindings(
    user_bindings: Iterable[KeyBinding] = (),
    *,
    include_defaults: bool = True,
) -> list[KeyBinding]:
    """Merge defaults and user bindings into one ordered table."""
    table: dict[tuple[str, frozenset[str]], KeyBinding] = {}
    if include_defaults:
        for item in DEFAULT_KEY_BINDINGS:
            table[(item.key, item.mods)] = item
    for item in user_bindings:
        table[(item.key, item.mods)] = item
    return list(table.values())


__all__ = [
    "DEFAULT_KEY_BINDINGS",
    "KeyBinding",
    "MODIFIER_ORDER",
    "binding",
    "normalize_mods",
    "parse_key_binding",
    "resolve_key_bindings",
]
