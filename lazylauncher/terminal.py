"""Terminal control for the launcher overlay.

Owns raw-mode lifecycle, alternate-screen switching, mouse reporting, and the
blocking input poll. Window resizes arrive through ``SIGWINCH`` and a
self-pipe so they are delivered by the same poll as key input.
"""

from __future__ import annotations

import contextlib
import os
import select
import shutil
import signal
import termios
import threading
import tty
from collections.abc import Sequence

from .input import has_pending_input, read_key
from .render import Change, encode_changes

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1003h\x1b[?1006h"
EXIT_TUI_SEQUENCE = b"\x1b[?1000l\x1b[?1003l\x1b[?1006l\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions and input/output for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._wake_fds: tuple[int, int] | None = None
        self._previous_winch_handler: object = None

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with mouse reporting enabled."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen, hide cursor, enable button/motion mouse reports.
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and disable mouse reporting."""
        os.write(self.stdout_fd, EXIT_TUI_SEQUENCE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def _install_resize_watch(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        read_fd, write_fd = os.pipe()
        os.set_blocking(write_fd, False)
        self._wake_fds = (read_fd, write_fd)

        def on_resize(_signum, _frame) -> None:
            with contextlib.suppress(OSError):
                os.write(write_fd, b"\0")

        self._previous_winch_handler = signal.signal(signal.SIGWINCH, on_resize)

    def _remove_resize_watch(self) -> None:
        if self._wake_fds is None:
            return
        signal.signal(signal.SIGWINCH, self._previous_winch_handler or signal.SIG_DFL)
        for fd in self._wake_fds:
            os.close(fd)
        self._wake_fds = None
        self._previous_winch_handler = None

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            self._install_resize_watch()
            yield
        finally:
            self._remove_resize_watch()
            self.disable_tui_mode()

    def screen_size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the controlled terminal."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = shutil.get_terminal_size((80, 24))
        return size.columns, size.lines

    def render(self, changes: Sequence[Change]) -> None:
        os.write(self.stdout_fd, encode_changes(changes))

    def poll_input(self) -> str | None:
        """Block until the next key or resize; ``None`` once input is closed."""
        if not has_pending_input():
            watched = [self.stdin_fd]
            if self._wake_fds is not None:
                watched.append(self._wake_fds[0])
            ready, _, _ = select.select(watched, [], [])
            if self._wake_fds is not None and self._wake_fds[0] in ready:
                os.read(self._wake_fds[0], 512)
                cols, rows = self.screen_size()
                return f"RESIZE:{cols}:{rows}"
        key = read_key(self.stdin_fd)
        return key or None


__all__ = ["TerminalController"]
