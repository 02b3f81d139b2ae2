"""Static command palette definitions.

``expanded_commands`` attaches the key hint of any binding that triggers the
same action, the way the palette shows shortcuts next to each command.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from .actions import Action
from .keymap import KeyBinding


@dataclass(frozen=True)
class CommandDef:
    brief: str
    doc: str
    action: Action
    keys: str = ""


COMMAND_PALETTE_ITEMS: tuple[CommandDef, ...] = (
    CommandDef("New Tab", "Create a new tab in the same domain as the current pane", Action("SpawnTab", ("CurrentPaneDomain",))),
    CommandDef("New Window", "Launch a new window running the default program", Action("SpawnWindow")),
    CommandDef("Close current tab", "Closes the current tab, terminating all its panes", Action("CloseCurrentTab", (("confirm", True),))),
    CommandDef("Copy to clipboard", "Copy the selection to the clipboard", Action("CopyTo", ("Clipboard",))),
    CommandDef("Paste from clipboard", "Paste the clipboard to the current pane", Action("PasteFrom", ("Clipboard",))),
    CommandDef("Search pane output", "Enters the search mode UI for the current pane", Action("Search", (("CaseSensitiveString", ""),))),
    CommandDef("Clear scrollback", "Clears the scrollback of the current pane", Action("ClearScrollback", ("ScrollbackOnly",))),
    CommandDef("Show debug overlay", "Activate the debug overlay and Lua REPL", Action("ShowDebugOverlay")),
    CommandDef("Copy mode", "Enter mouse-less copy mode", Action("ActivateCopyMode")),
    CommandDef("Zoom pane", "Toggles the zoom state of the current pane", Action("TogglePaneZoomState")),
    CommandDef("Reload configuration", "Reloads the configuration file", Action("ReloadConfiguration")),
    CommandDef("Toggle full screen", "Toggles full screen mode for the current window", Action("ToggleFullScreen")),
    CommandDef("Increase font size", "Scales the font size larger by 10%", Action("IncreaseFontSize")),
    CommandDef("Decrease font size", "Scales the font size smaller by 10%", Action("DecreaseFontSize")),
    CommandDef("Reset font size", "Restores the font size to match your configuration file", Action("ResetFontSize")),
    CommandDef("Activate right tab", "Activates the tab to the right", Action("ActivateTabRelative", (1,))),
    CommandDef("Activate left tab", "Activates the tab to the left", Action("ActivateTabRelative", (-1,))),
    CommandDef("Activate last tab", "Activates the rightmost tab", Action("ActivateTab", (-1,))),
    CommandDef("Quit", "Quits the application", Action("QuitApplication")),
)


def expanded_commands(
    key_bindings: Iterable[KeyBinding] = (),
    commands: Iterable[CommandDef] = COMMAND_PALETTE_ITEMS,
) -> list[CommandDef]:
    hints: dict[Action, list[str]] = {}
    for item in key_bindings:
        combo = item.key if item.mods_text() == "NONE" else f"{item.mods_text()}+{item.key}"
        hints.setdefault(item.action, []).append(combo)
    return [
        replace(command, keys=", ".join(hints.get(command.action, ()))) if not command.keys else command
        for command in commands
    ]


__all__ = ["COMMAND_PALETTE_ITEMS", "CommandDef", "expanded_commands"]
