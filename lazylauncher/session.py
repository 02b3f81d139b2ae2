"""Interactive launcher session: state, input handling, and the blocking loop.

``LauncherState`` is mutated only by ``handle_key`` (one decoded input token
per call) and rendered by ``render.build_frame``. The loop is synchronous: it
blocks on the next input token, applies it, and repaints.

Invariants kept after every transition while ``filtered`` is non-empty::

    0 <= top_row <= max(0, len(filtered) - visible_rows)
    top_row <= active_index < top_row + visible_rows
    active_index < len(filtered)
"""

from __future__ import annotations

import contextlib
import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .actions import Action
from .dispatch import ActionSink
from .entries import Entry
from .flags import LauncherFlags
from .fuzzy import filter_entries
from .render import Change, Title, build_frame

logger = logging.getLogger(__name__)

ROW_OVERHEAD = 3
HEADER_ROWS = 1
CANCEL_KEYS = frozenset({"ESC", "CTRL_G", "CTRL_C"})
DOWN_KEYS = frozenset({"DOWN", "CTRL_N"})
UP_KEYS = frozenset({"UP", "CTRL_P"})
QUICK_SELECT_DIGITS = "123456789"


class Outcome(enum.Enum):
    CONTINUE = "continue"
    LAUNCH = "launch"
    CANCEL = "cancel"


class LauncherTerminal(Protocol):
    """Terminal I/O boundary used by the session."""

    def raw_mode(self) -> contextlib.AbstractContextManager[None]: ...

    def screen_size(self) -> tuple[int, int]: ...

    def poll_input(self) -> str | None: ...

    def render(self, changes: Sequence[Change]) -> None: ...


def visible_rows_for_height(rows: int) -> int:
    return max(0, rows - ROW_OVERHEAD)


def parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    """Parse ``MOUSE_*:col:row`` and ``RESIZE:cols:rows`` tokens."""
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


@dataclass
class LauncherState:
    entries: tuple[Entry, ...]
    visible_rows: int
    cols: int = 80
    flags: LauncherFlags = LauncherFlags.NONE
    pane_id: int = 0
    active_index: int = 0
    top_row: int = 0
    filter_text: str = ""
    filtering: bool = False
    filtered: list[Entry] = field(default_factory=list)
    launched_index: int | None = None

    @classmethod
    def create(
        cls,
        entries: Sequence[Entry],
        *,
        cols: int,
        rows: int,
        flags: LauncherFlags = LauncherFlags.NONE,
        pane_id: int = 0,
    ) -> LauncherState:
        state = cls(
            entries=tuple(entries),
            visible_rows=visible_rows_for_height(rows),
            cols=cols,
            flags=flags,
            pane_id=pane_id,
            filtering=bool(flags & LauncherFlags.FUZZY),
        )
        state.update_filter()
        return state

    @property
    def page_rows(self) -> int:
        return max(1, self.visible_rows)

    def max_top_row(self) -> int:
        return max(0, len(self.filtered) - self.page_rows)

    def update_filter(self) -> None:
        self.filtered = filter_entries(self.entries, self.filter_text)
        self.active_index = 0
        self.top_row = 0

    def ensure_active_visible(self) -> None:
        """Scroll so the cursor lies inside the viewport."""
        if not self.filtered:
            self.active_index = 0
            self.top_row = 0
            return
        self.active_index = max(0, min(self.active_index, len(self.filtered) - 1))
        if self.active_index < self.top_row:
            self.top_row = self.active_index
        elif self.active_index >= self.top_row + self.page_rows:
            self.top_row = self.active_index - self.page_rows + 1
        self.top_row = max(0, min(self.top_row, self.max_top_row()))

    def move_down(self) -> None:
        if not self.filtered:
            return
        self.active_index = min(self.active_index + 1, len(self.filtered) - 1)
        self.ensure_active_visible()

    def move_up(self) -> None:
        self.active_index = max(0, self.active_index - 1)
        self.ensure_active_visible()

    def resize(self, cols: int, rows: int) -> None:
        self.cols = cols
        self.visible_rows = visible_rows_for_height(rows)
        self.ensure_active_visible()

    def row_at_screen_line(self, line: int | None) -> int | None:
        """Map a 1-based terminal line to a filtered-view index, if it shows one."""
        if line is None:
            return None
        offset = line - 1 - HEADER_ROWS
        if not 0 <= offset < self.visible_rows:
            return None
        idx = self.top_row + offset
        if idx >= len(self.filtered):
            return None
        return idx

    def launch(self, row: int) -> Outcome:
        """Select ``row`` for launching; rows not drawn on screen are ignored."""
        if not 0 <= row < len(self.filtered):
            return Outcome.CONTINUE
        if not self.top_row <= row < self.top_row + self.visible_rows:
            return Outcome.CONTINUE
        self.active_index = row
        self.launched_index = row
        self.ensure_active_visible()
        return Outcome.LAUNCH

    @property
    def launched_action(self) -> Action | None:
        if self.launched_index is None:
            return None
        return self.filtered[self.launched_index].action

    def _scroll_wheel(self, direction: int, line: int | None) -> None:
        self.top_row = max(0, min(self.top_row + direction, self.max_top_row()))
        hovered = self.row_at_screen_line(line)
        if hovered is not None:
            self.active_index = hovered
            return
        if self.filtered:
            last_visible = min(len(self.filtered), self.top_row + self.page_rows) - 1
            self.active_index = max(self.top_row, min(self.active_index, last_visible))

    def _handle_mouse(self, key: str) -> Outcome:
        _col, line = parse_mouse_col_row(key)
        if key.startswith("MOUSE_WHEEL_UP:"):
            self._scroll_wheel(-1, line)
            return Outcome.CONTINUE
        if key.startswith("MOUSE_WHEEL_DOWN:"):
            self._scroll_wheel(1, line)
            return Outcome.CONTINUE
        if key.startswith("MOUSE_MOVE:"):
            hovered = self.row_at_screen_line(line)
            if hovered is not None:
                self.active_index = hovered
            return Outcome.CONTINUE
        if key.startswith("MOUSE_LEFT_DOWN:"):
            clicked = self.row_at_screen_line(line)
            if clicked is None:
                return Outcome.CANCEL
            return self.launch(clicked)
        if "_DOWN:" in key:
            # Any other button cancels.
            return Outcome.CANCEL
        return Outcome.CONTINUE

    def _backspace(self) -> None:
        if self.filter_text:
            self.filter_text = self.filter_text[:-1]
        elif not self.flags & LauncherFlags.FUZZY:
            self.filtering = False
        self.update_filter()

    def handle_key(self, key: str) -> Outcome:
        """Apply one input token and report whether the session ends."""
        if key.startswith("RESIZE:"):
            cols, rows = parse_mouse_col_row(key)
            if cols is not None and rows is not None:
                self.resize(cols, rows)
            return Outcome.CONTINUE
        if key.startswith("MOUSE"):
            return self._handle_mouse(key)
        if key in CANCEL_KEYS:
            return Outcome.CANCEL
        if key == "ENTER":
            return self.launch(self.active_index)
        if not self.filtering and len(key) == 1 and key in QUICK_SELECT_DIGITS:
            offset = int(key) - 1
            if offset >= self.visible_rows:
                return Outcome.CONTINUE
            return self.launch(self.top_row + offset)
        if key in DOWN_KEYS or (not self.filtering and key == "j"):
            self.move_down()
            return Outcome.CONTINUE
        if key in UP_KEYS or (not self.filtering and key == "k"):
            self.move_up()
            return Outcome.CONTINUE
        if key == "BACKSPACE":
            self._backspace()
            return Outcome.CONTINUE
        if not self.filtering:
            if key == "/":
                self.filtering = True
            return Outcome.CONTINUE
        if len(key) == 1 and key.isprintable():
            self.filter_text += key
            self.update_filter()
        return Outcome.CONTINUE


def run_loop(state: LauncherState, terminal: LauncherTerminal) -> Action | None:
    """Render, then process input until launch, cancel, or end of input.

    Returns the launched action, or ``None`` when the session was cancelled.
    """
    terminal.render(build_frame(state, state.cols))
    while True:
        key = terminal.poll_input()
        if key is None:
            logger.debug("Launcher input closed")
            return None
        outcome = state.handle_key(key)
        if outcome is Outcome.LAUNCH:
            return state.launched_action
        if outcome is Outcome.CANCEL:
            logger.debug("Launcher cancelled by %r", key)
            return None
        terminal.render(build_frame(state, state.cols))


def run_launcher(
    entries: Sequence[Entry],
    terminal: LauncherTerminal,
    sink: ActionSink,
    *,
    flags: LauncherFlags = LauncherFlags.NONE,
    pane_id: int = 0,
    title: str = "Launcher",
) -> Action | None:
    """Run one launcher session and dispatch at most one action.

    Raw mode is held only for the interactive loop and released on every exit
    path; terminal errors propagate. The sink is notified after the terminal
    has been restored.
    """
    with terminal.raw_mode():
        terminal.render([Title(title)])
        cols, rows = terminal.screen_size()
        state = LauncherState.create(entries, cols=cols, rows=rows, flags=flags, pane_id=pane_id)
        action = run_loop(state, terminal)
    if action is not None:
        logger.debug("Launching %r from pane %s", action, pane_id)
        sink.notify(pane_id, action)
    return action


__all__ = [
    "LauncherState",
    "LauncherTerminal",
    "Outcome",
    "ROW_OVERHEAD",
    "parse_mouse_col_row",
    "run_launcher",
    "run_loop",
    "visible_rows_for_height",
]
