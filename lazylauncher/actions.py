"""Dispatchable action descriptors.

An ``Action`` is the opaque command a launcher entry resolves to. Actions are
compared structurally so shortcut entries can be de-duplicated by action.
"""

from __future__ import annotations

from dataclasses import dataclass

TAB_ACTIVATION_ACTIONS = frozenset({"ActivateTab", "ActivateTabRelative"})


def _freeze(value: object) -> object:
    """Convert JSON lists/dicts into hashable tuples, recursively."""
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, dict):
        return tuple((str(key), _freeze(item)) for key, item in sorted(value.items()))
    return value


def _thaw(value: object) -> object:
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class Action:
    name: str
    args: tuple[object, ...] = ()

    def describe(self) -> str:
        """Return ``Name(arg, ...)`` text used in shortcut labels."""
        if not self.args:
            return self.name
        rendered = ", ".join(_describe_arg(arg) for arg in self.args)
        return f"{self.name}({rendered})"

    def to_json(self) -> dict[str, object]:
        return {"name": self.name, "args": [_thaw(arg) for arg in self.args]}

    @classmethod
    def from_json(cls, data: object) -> Action | None:
        """Build an action from ``{"name": ..., "args": [...]}`` or a bare name."""
        if isinstance(data, str):
            name = data.strip()
            return cls(name) if name else None
        if not isinstance(data, dict):
            return None
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            return None
        raw_args = data.get("args", ())
        if not isinstance(raw_args, (list, tuple)):
            raw_args = (raw_args,)
        return cls(name.strip(), tuple(_freeze(arg) for arg in raw_args))


def _describe_arg(arg: object) -> str:
    if isinstance(arg, str):
        return f'"{arg}"'
    if isinstance(arg, tuple):
        return "(" + ", ".join(_describe_arg(item) for item in arg) + ")"
    return str(arg)


def spawn_command_in_new_tab(domain_name: str, args: tuple[str, ...] = ()) -> Action:
    if args:
        return Action("SpawnCommandInNewTab", (("domain", domain_name), ("args", tuple(args))))
    return Action("SpawnCommandInNewTab", (("domain", domain_name),))


def attach_domain(name: str) -> Action:
    return Action("AttachDomain", (name,))


def activate_tab(index: int) -> Action:
    return Action("ActivateTab", (index,))


def switch_to_workspace(name: str | None) -> Action:
    if name is None:
        return Action("SwitchToWorkspace")
    return Action("SwitchToWorkspace", (name,))


def is_tab_activation(action: Action) -> bool:
    """Return whether ``action`` activates a tab and is redundant with tab entries."""
    return action.name in TAB_ACTIVATION_ACTIONS


__all__ = [
    "Action",
    "TAB_ACTIVATION_ACTIONS",
    "activate_tab",
    "attach_domain",
    "is_tab_activation",
    "spawn_command_in_new_tab",
    "switch_to_workspace",
]
