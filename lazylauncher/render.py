"""Launcher frame construction.

``build_frame`` is a pure function of session state and terminal width: it
returns the ordered list of drawing operations for one full repaint.
``encode_changes`` turns those operations into the ANSI byte stream written by
the terminal controller.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from .ansi import ANSI_ESCAPE_RE, fit_ansi_line, strip_ansi, truncate_right

if TYPE_CHECKING:
    from .session import LauncherState

HEADER_TEXT = "Select an item and press Enter=launch  Esc=cancel  /=filter"
FILTER_HEADER_PREFIX = "Fuzzy matching: "
WIDTH_MARGIN = 6
QUICK_SELECT_ROWS = 9
BLANK_GUTTER = "    "


@dataclass(frozen=True)
class ClearScreen:
    pass


@dataclass(frozen=True)
class CursorPosition:
    x: int
    y: int


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class AllAttributes:
    """Reset all cell attributes to the terminal default."""


@dataclass(frozen=True)
class Reverse:
    enabled: bool


@dataclass(frozen=True)
class ClearToEndOfLine:
    pass


@dataclass(frozen=True)
class Title:
    title: str


Change = Union[ClearScreen, CursorPosition, Text, AllAttributes, Reverse, ClearToEndOfLine, Title]


def viewport_width(cols: int) -> int:
    return max(0, cols - WIDTH_MARGIN)


def row_gutter(row_num: int, filtering: bool) -> str:
    """Quick-select prefix for the ``row_num``-th visible row (0-based)."""
    if row_num < QUICK_SELECT_ROWS and not filtering:
        return f" {row_num + 1}. "
    return BLANK_GUTTER


def _keep_reverse(label: str) -> str:
    # Re-assert reverse video after any SGR the label carries.
    return ANSI_ESCAPE_RE.sub(
        lambda match: match.group(0) + "\x1b[7m" if match.group(0).endswith("m") else match.group(0),
        label,
    )


def build_frame(state: LauncherState, cols: int) -> list[Change]:
    max_width = viewport_width(cols)
    changes: list[Change] = [
        ClearScreen(),
        CursorPosition(0, 0),
        Text(f"{truncate_right(HEADER_TEXT, max_width)}\r\n"),
        AllAttributes(),
    ]

    end = min(len(state.filtered), state.top_row + max(0, state.visible_rows))
    for row_num, entry_idx in enumerate(range(state.top_row, end)):
        entry = state.filtered[entry_idx]
        active = entry_idx == state.active_index
        label = fit_ansi_line(entry.label, max_width)
        if active:
            changes.append(Reverse(True))
            label = _keep_reverse(label)
        changes.append(Text(row_gutter(row_num, state.filtering)))
        changes.append(Text(label))
        changes.append(Text(" \r\n"))
        if active:
            changes.append(Reverse(False))
        if "\x1b" in label:
            changes.append(AllAttributes())

    if state.filtering or state.filter_text:
        changes.extend(
            [
                CursorPosition(0, 0),
                ClearToEndOfLine(),
                Text(truncate_right(f"{FILTER_HEADER_PREFIX}{state.filter_text}", max_width)),
            ]
        )
    return changes


def encode_change(change: Change) -> str:
    if isinstance(change, Text):
        return change.text
    if isinstance(change, CursorPosition):
        return f"\x1b[{change.y + 1};{change.x + 1}H"
    if isinstance(change, ClearScreen):
        return "\x1b[0m\x1b[2J"
    if isinstance(change, AllAttributes):
        return "\x1b[0m"
    if isinstance(change, Reverse):
        return "\x1b[7m" if change.enabled else "\x1b[27m"
    if isinstance(change, ClearToEndOfLine):
        return "\x1b[K"
    if isinstance(change, Title):
        return f"\x1b]2;{strip_ansi(change.title)}\x07"
    raise TypeError(f"unsupported frame change: {change!r}")


def encode_changes(changes: Sequence[Change]) -> bytes:
    return "".join(encode_change(change) for change in changes).encode("utf-8", errors="replace")


__all__ = [
    "AllAttributes",
    "BLANK_GUTTER",
    "Change",
    "ClearScreen",
    "ClearToEndOfLine",
    "CursorPosition",
    "FILTER_HEADER_PREFIX",
    "HEADER_TEXT",
    "Reverse",
    "Text",
    "Title",
    "build_frame",
    "encode_change",
    "encode_changes",
    "row_gutter",
    "viewport_width",
]
