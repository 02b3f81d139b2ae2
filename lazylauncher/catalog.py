"""Entry catalog construction.

Builds the ordered, immutable list of launcher entries once per session:
domains, tabs, launch menu items, workspaces, commands, then shortcuts.
Labels may be rewritten by an async formatting hook; hook failures are logged
and the original label is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from .actions import Action, is_tab_activation
from .commands import CommandDef
from .entries import (
    Entry,
    EntryKind,
    LaunchMenuItem,
    command_entry,
    domain_entry,
    key_binding_entry,
    launch_menu_entry,
    tab_entry,
    workspace_entries,
)
from .flags import LauncherFlags
from .keymap import KeyBinding
from .live_state import DomainInfo, DomainState, LiveStateSource, TabInfo

logger = logging.getLogger(__name__)

FormatLabelHook = Callable[[str, Action, EntryKind], Awaitable[object]]


@dataclass(frozen=True)
class CatalogSources:
    """Everything the catalog reads from the surrounding application."""

    live_state: LiveStateSource
    window_id: int = 0
    key_bindings: Sequence[KeyBinding] = ()
    commands: Sequence[CommandDef] = ()
    launch_menu: Sequence[LaunchMenuItem] = ()


def sort_domains(domains: Sequence[DomainInfo]) -> list[DomainInfo]:
    """Keep spawnable domains, attached ones first, then by domain id."""
    spawnable = [domain for domain in domains if domain.spawnable]
    return sorted(
        spawnable,
        key=lambda domain: (domain.state is not DomainState.ATTACHED, domain.domain_id),
    )


def domain_entries(domains: Sequence[DomainInfo]) -> list[Entry]:
    return [domain_entry(domain) for domain in sort_domains(domains)]


def tab_entries(tabs: Sequence[TabInfo]) -> list[Entry]:
    return [tab_entry(tab, tab_index) for tab_index, tab in enumerate(tabs)]


def command_entries(commands: Sequence[CommandDef]) -> list[Entry]:
    return [command_entry(command) for command in commands if not is_tab_activation(command.action)]


def shortcut_entries(bindings: Sequence[KeyBinding]) -> list[Entry]:
    """Map bindings to entries, dropping tab activation and repeated actions.

    The first binding seen for an action wins. Callers sort by label once
    labels are final.
    """
    seen: set[Action] = set()
    entries: list[Entry] = []
    for item in bindings:
        if is_tab_activation(item.action) or item.action in seen:
            continue
        seen.add(item.action)
        entries.append(key_binding_entry(item))
    return entries


async def finalize_label(entry: Entry, format_label: FormatLabelHook | None) -> Entry:
    if format_label is None:
        return entry
    try:
        label = await format_label(entry.label, entry.action, entry.kind)
        if not isinstance(label, str) or not label:
            raise TypeError(f"format hook returned {label!r}, expected a non-empty string")
    except Exception:
        logger.exception(
            "Error while calling label function for launcher entry %r %r %r",
            entry.label,
            entry.action,
            entry.kind,
        )
        return entry
    return entry.with_label(label)


async def _finalize_all(entries: Sequence[Entry], format_label: FormatLabelHook | None) -> list[Entry]:
    finalized: list[Entry] = []
    for entry in entries:
        finalized.append(await finalize_label(entry, format_label))
    return finalized


async def build_catalog(
    sources: CatalogSources,
    flags: LauncherFlags,
    format_label: FormatLabelHook | None = None,
) -> tuple[Entry, ...]:
    """Assemble the full catalog in display-priority order.

    Must run on the thread owning ``sources.live_state``. Hook calls are
    awaited one entry at a time.
    """
    live_state = sources.live_state
    groups: list[list[Entry]] = []

    if flags & LauncherFlags.DOMAINS:
        groups.append(await _finalize_all(domain_entries(live_state.list_domains()), format_label))

    if flags & LauncherFlags.TABS:
        tabs = live_state.list_tabs_in_window(sources.window_id)
        groups.append(await _finalize_all(tab_entries(tabs), format_label))

    if flags & LauncherFlags.LAUNCH_MENU_ITEMS:
        menu = [launch_menu_entry(item) for item in sources.launch_menu]
        groups.append(await _finalize_all(menu, format_label))

    if flags & LauncherFlags.WORKSPACES:
        workspaces = workspace_entries(live_state.list_workspaces(), live_state.current_workspace())
        groups.append(await _finalize_all(workspaces, format_label))

    if flags & LauncherFlags.COMMANDS:
        groups.append(await _finalize_all(command_entries(sources.commands), format_label))

    if flags & LauncherFlags.KEY_ASSIGNMENTS:
        shortcuts = await _finalize_all(shortcut_entries(sources.key_bindings), format_label)
        groups.append(sorted(shortcuts, key=lambda entry: entry.label))

    catalog = tuple(entry for group in groups for entry in group)
    logger.debug("Built launcher catalog with %d entries (flags=%s)", len(catalog), flags)
    return catalog


__all__ = [
    "CatalogSources",
    "FormatLabelHook",
    "build_catalog",
    "command_entries",
    "domain_entries",
    "finalize_label",
    "shortcut_entries",
    "sort_domains",
    "tab_entries",
]
