"""ANSI-aware text measurement and clipping for launcher rows.

Labels may carry SGR color sequences (for example from a formatting hook).
These helpers keep styling intact while measuring only visible columns, and
drop any other escape or control sequence so a label can never move the
cursor.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
WIDE_CLASSES = frozenset({"W", "F"})


def cell_width(ch: str, col: int) -> int:
    """Columns ``ch`` occupies when drawn at column ``col`` (tabs stop every 8)."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in WIDE_CLASSES else 1


def _is_control(ch: str) -> bool:
    return ch != "\t" and unicodedata.category(ch) == "Cc"


def strip_ansi(text: str) -> str:
    """Return ``text`` without escape sequences or control characters."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    return "".join(ch for ch in plain if not _is_control(ch))


def display_width(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += cell_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    SGR sequences are preserved verbatim and do not count toward width; other
    escapes and control characters are dropped. Tabs are expanded into spaces.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                if match.group(0).endswith("m"):
                    out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        if _is_control(ch):
            i += 1
            continue
        w = cell_width(ch, col)
        if ch == "\t":
            if col + w > max_cols:
                break
            out.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces."""
    clipped = clip_ansi_line(text, width)
    padding = max(0, width - display_width(clipped))
    return clipped + " " * padding


def truncate_right(text: str, max_cols: int) -> str:
    """Plain-text truncation used for header lines."""
    return clip_ansi_line(strip_ansi(text), max_cols)


__all__ = [
    "ANSI_ESCAPE_RE",
    "cell_width",
    "clip_ansi_line",
    "display_width",
    "fit_ansi_line",
    "strip_ansi",
    "truncate_right",
]
