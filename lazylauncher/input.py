"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into normalized key tokens
(``"UP"``, ``"CTRL_N"``, ``"a"``, ``"MOUSE_WHEEL_DOWN:col:row"``...).
Handles ESC-sequence timing, UTF-8 characters, and SGR mouse events.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x07": "CTRL_G",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_MOUSE_BUTTON_NAMES = ("LEFT", "MIDDLE", "RIGHT")


def _wait_readable(fd: int, timeout_ms: int) -> bool:
    ready, _, _ = select.select([fd], [], [], max(0, timeout_ms) / 1000)
    return bool(ready)


def _next_sequence_byte(fd: int) -> bytes | None:
    """Next byte of an escape or UTF-8 sequence, or ``None`` if it stalls."""
    if not _wait_readable(fd, ESC_SEQUENCE_TIMEOUT_MS):
        return None
    return os.read(fd, 1) or None


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_utf8(fd: int, first: bytes) -> str:
    data = first
    for _ in range(_utf8_length(first[0]) - 1):
        nxt = _next_sequence_byte(fd)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def decode_sgr_mouse(payload: bytes, final: bytes) -> str | None:
    """Decode an SGR mouse report ``btn;col;row`` ended by ``M`` or ``m``."""
    try:
        btn_s, col_s, row_s = payload.decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return None
    button = btn & 0b11
    if btn & 0b0100_0000:
        direction = ("UP", "DOWN", "LEFT", "RIGHT")[button]
        return f"MOUSE_WHEEL_{direction}:{col}:{row}"
    if btn & 0b0010_0000:
        return f"MOUSE_MOVE:{col}:{row}"
    if button == 3:
        return f"MOUSE_MOVE:{col}:{row}"
    suffix = "DOWN" if final == b"M" else "UP"
    return f"MOUSE_{_MOUSE_BUTTON_NAMES[button]}_{suffix}:{col}:{row}"


def _read_sgr_mouse(fd: int) -> str:
    payload: list[bytes] = []
    while True:
        part = _next_sequence_byte(fd)
        if part is None:
            return "ESC"
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return "ESC"
    return decode_sgr_mouse(b"".join(payload), part) or "ESC"


def _read_escape(fd: int) -> str:
    seq = _next_sequence_byte(fd)
    if seq is None:
        return "ESC"
    if seq == b"O":
        # SS3 arrows sent in application cursor mode.
        final = _next_sequence_byte(fd)
        if final is None:
            return "ESC"
        return _CSI_FINAL_KEYS.get(final, "ESC_SEQUENCE")
    if seq != b"[":
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _next_sequence_byte(fd)
    if seq is None:
        return "ESC"
    if seq in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[seq]
    if seq == b"<":
        return _read_sgr_mouse(fd)
    # Skip the rest of an unrecognized CSI sequence up to its final byte.
    while not (b"@" <= seq <= b"~"):
        seq = _next_sequence_byte(fd)
        if seq is None:
            break
    return "ESC_SEQUENCE"


def has_pending_input() -> bool:
    return bool(_PENDING_BYTES)


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token; returns ``""`` on timeout or end of input."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None and not _wait_readable(fd, timeout_ms):
            return ""
        ch = os.read(fd, 1)
        if not ch:
            return ""

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control
    if ch == b"\x1b":
        return _read_escape(fd)
    return _decode_utf8(fd, ch)


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "decode_sgr_mouse", "has_pending_input", "read_key"]
