"""Live tab/domain/workspace state consumed by the catalog builder.

The launcher never reaches for a global registry: callers pass a
``LiveStateSource``. ``SnapshotLiveState`` reads one from a JSON document so
the overlay can be driven from scripts and tests.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class DomainState(enum.Enum):
    ATTACHED = "Attached"
    DETACHED = "Detached"


@dataclass(frozen=True)
class DomainInfo:
    domain_id: int
    name: str
    state: DomainState = DomainState.ATTACHED
    label: str = ""
    spawnable: bool = True

    def display_label(self) -> str:
        return self.label


@dataclass(frozen=True)
class TabInfo:
    tab_id: int
    title: str
    pane_count: int = 1


class LiveStateSource(Protocol):
    def list_domains(self) -> list[DomainInfo]: ...

    def list_tabs_in_window(self, window_id: int) -> list[TabInfo]: ...

    def list_workspaces(self) -> list[str]: ...

    def current_workspace(self) -> str: ...


def _coerce_int(value: object, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def _parse_domain(raw: object, fallback_id: int) -> DomainInfo | None:
    if not isinstance(raw, dict):
        return None
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        return None
    raw_state = str(raw.get("state", DomainState.ATTACHED.value)).strip().lower()
    state = DomainState.DETACHED if raw_state == "detached" else DomainState.ATTACHED
    label = raw.get("label", "")
    return DomainInfo(
        domain_id=_coerce_int(raw.get("id"), fallback_id),
        name=name,
        state=state,
        label=label if isinstance(label, str) else "",
        spawnable=bool(raw.get("spawnable", True)),
    )


def _parse_tab(raw: object, fallback_id: int) -> TabInfo | None:
    if not isinstance(raw, dict):
        return None
    title = raw.get("title", "")
    return TabInfo(
        tab_id=_coerce_int(raw.get("id"), fallback_id),
        title=title if isinstance(title, str) else str(title),
        pane_count=max(1, _coerce_int(raw.get("panes"), 1)),
    )


class SnapshotLiveState:
    """``LiveStateSource`` backed by a plain JSON-compatible mapping.

    Expected shape::

        {
          "domains": [{"id": 0, "name": "local", "state": "Attached"}],
          "windows": {"0": [{"id": 1, "title": "build", "panes": 2}]},
          "workspaces": ["default"],
          "active_workspace": "default"
        }

    Malformed items are skipped rather than rejected.
    """

    def __init__(self, data: dict[str, object] | None = None) -> None:
        data = data or {}
        raw_domains = data.get("domains")
        domains: list[DomainInfo] = []
        if isinstance(raw_domains, list):
            for idx, raw in enumerate(raw_domains):
                domain = _parse_domain(raw, idx)
                if domain is not None:
                    domains.append(domain)
        if not domains:
            domains.append(DomainInfo(domain_id=0, name="local"))
        self._domains = domains

        self._windows: dict[int, list[TabInfo]] = {}
        raw_windows = data.get("windows")
        if isinstance(raw_windows, dict):
            for raw_window_id, raw_tabs in raw_windows.items():
                try:
                    window_id = int(raw_window_id)
                except (TypeError, ValueError):
                    continue
                if not isinstance(raw_tabs, list):
                    continue
                tabs = [_parse_tab(raw, idx) for idx, raw in enumerate(raw_tabs)]
                self._windows[window_id] = [tab for tab in tabs if tab is not None]

        raw_workspaces = data.get("workspaces")
        self._workspaces = (
            [ws for ws in raw_workspaces if isinstance(ws, str) and ws]
            if isinstance(raw_workspaces, list)
            else []
        )
        active = data.get("active_workspace")
        self._active_workspace = active if isinstance(active, str) and active else "default"
        if self._active_workspace not in self._workspaces:
            self._workspaces.insert(0, self._active_workspace)

    @classmethod
    def from_path(cls, path: Path) -> SnapshotLiveState:
        """Load a snapshot file; raises ``OSError``/``ValueError`` on bad input."""
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{path}: snapshot must be a JSON object")
        return cls(data)

    def list_domains(self) -> list[DomainInfo]:
        return list(self._domains)

    def list_tabs_in_window(self, window_id: int) -> list[TabInfo]:
        return list(self._windows.get(window_id, []))

    def list_workspaces(self) -> list[str]:
        return list(self._workspaces)

    def current_workspace(self) -> str:
        return self._active_workspace


__all__ = [
    "DomainInfo",
    "DomainState",
    "LiveStateSource",
    "SnapshotLiveState",
    "TabInfo",
]
