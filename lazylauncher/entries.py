"""Launcher entry records and per-source mapping functions.

Each source kind (domain, tab, key binding, command, workspace, launch menu
item) maps to an ``Entry`` through a pure function. The ``kind`` field keeps
the provenance record that is also handed to the label-formatting hook.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from .actions import (
    Action,
    activate_tab,
    attach_domain,
    spawn_command_in_new_tab,
    switch_to_workspace,
)
from .commands import CommandDef
from .keymap import KeyBinding
from .live_state import DomainInfo, DomainState, TabInfo


@dataclass(frozen=True)
class TabEntry:
    title: str
    tab_id: int
    tab_index: int
    pane_count: int


@dataclass(frozen=True)
class DomainEntry:
    domain_id: int
    name: str
    state: DomainState
    label: str


@dataclass(frozen=True)
class KeyBindingEntry:
    key_code: str
    modifiers: str
    assignment: Action


@dataclass(frozen=True)
class CommandEntry:
    brief: str
    doc: str
    keys: str
    action: Action


@dataclass(frozen=True)
class WorkspaceEntry:
    name: str | None
    active_workspace: str


@dataclass(frozen=True)
class LaunchMenuItem:
    """User-configured spawn entry from the ``launch_menu`` config list."""

    label: str | None = None
    args: tuple[str, ...] = ()
    domain: str = "CurrentPaneDomain"


@dataclass(frozen=True)
class MenuItemEntry:
    label: str | None
    args: tuple[str, ...]
    domain: str


EntryKind = Union[TabEntry, DomainEntry, KeyBindingEntry, CommandEntry, WorkspaceEntry, MenuItemEntry]


@dataclass(frozen=True)
class Entry:
    label: str
    action: Action
    kind: EntryKind

    def __post_init__(self) -> None:
        if not self.label:
            object.__setattr__(self, "label", self.action.describe())

    def with_label(self, label: str) -> Entry:
        return replace(self, label=label)


def domain_label(domain: DomainInfo) -> str:
    detail = domain.display_label()
    if not detail or detail == domain.name:
        return f"domain `{domain.name}`"
    return f"domain `{domain.name}` - {detail}"


def domain_entry(domain: DomainInfo) -> Entry:
    if domain.state is DomainState.ATTACHED:
        action = spawn_command_in_new_tab(domain.name)
    else:
        action = attach_domain(domain.name)
    return Entry(
        label=domain_label(domain),
        action=action,
        kind=DomainEntry(
            domain_id=domain.domain_id,
            name=domain.name,
            state=domain.state,
            label=domain.display_label(),
        ),
    )


def tab_entry(tab: TabInfo, tab_index: int) -> Entry:
    return Entry(
        label=f"{tab.title}. {tab.pane_count} panes",
        action=activate_tab(tab_index),
        kind=TabEntry(
            title=tab.title,
            tab_id=tab.tab_id,
            tab_index=tab_index,
            pane_count=tab.pane_count,
        ),
    )


def key_binding_entry(binding: KeyBinding) -> Entry:
    return Entry(
        label=f"{binding.action.describe()} ({binding.mods_text()} {binding.key})",
        action=binding.action,
        kind=KeyBindingEntry(
            key_code=binding.key,
            modifiers=binding.mods_text(),
            assignment=binding.action,
        ),
    )


def command_entry(command: CommandDef) -> Entry:
    return Entry(
        label=f"{command.brief}. {command.doc}",
        action=command.action,
        kind=CommandEntry(
            brief=command.brief,
            doc=command.doc,
            keys=command.keys,
            action=command.action,
        ),
    )


def workspace_entries(workspaces: list[str], active_workspace: str) -> list[Entry]:
    """Switch entries for every inactive workspace plus a create-new entry."""
    entries = [
        Entry(
            label=f"Switch to workspace: `{name}`",
            action=switch_to_workspace(name),
            kind=WorkspaceEntry(name=name, active_workspace=active_workspace),
        )
        for name in workspaces
        if name != active_workspace
    ]
    entries.append(
        Entry(
            label=f"Create new Workspace (current is `{active_workspace}`)",
            action=switch_to_workspace(None),
            kind=WorkspaceEntry(name=None, active_workspace=active_workspace),
        )
    )
    return entries


def launch_menu_entry(item: LaunchMenuItem) -> Entry:
    if item.label:
        label = item.label
    elif item.args:
        label = " ".join(item.args)
    else:
        label = "(default shell)"
    return Entry(
        label=label,
        action=spawn_command_in_new_tab(item.domain, item.args),
        kind=MenuItemEntry(label=item.label, args=item.args, domain=item.domain),
    )


__all__ = [
    "CommandEntry",
    "DomainEntry",
    "Entry",
    "EntryKind",
    "KeyBindingEntry",
    "LaunchMenuItem",
    "MenuItemEntry",
    "TabEntry",
    "WorkspaceEntry",
    "command_entry",
    "domain_entry",
    "domain_label",
    "key_binding_entry",
    "launch_menu_entry",
    "tab_entry",
    "workspace_entries",
]
