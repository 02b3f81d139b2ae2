"""Tests for terminal mode switching, frame output, and input polling.

Verifies raw-mode lifecycle safety, the mouse-reporting escape payloads, and
that resizes are delivered through the same poll as key input.
"""

from __future__ import annotations

import os
import signal
import termios
import unittest
from unittest import mock

from lazylauncher import input as input_mod
from lazylauncher.render import CursorPosition, Text
from lazylauncher.terminal import TerminalController


def make_controller(stdin_fd: int = 0, stdout_fd: int = 1) -> TerminalController:
    with mock.patch("lazylauncher.terminal.termios.tcgetattr", return_value=[0]):
        return TerminalController(stdin_fd=stdin_fd, stdout_fd=stdout_fd)


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazylauncher.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazylauncher.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazylauncher.terminal.os.write") as write_mock, mock.patch(
            "lazylauncher.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(
            write_mock.call_args_list[0].args,
            (1, b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1003h\x1b[?1006h"),
        )
        self.assertEqual(
            write_mock.call_args_list[1].args,
            (1, b"\x1b[?1000l\x1b[?1003l\x1b[?1006l\x1b[?25h\x1b[?1049l"),
        )
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        controller = make_controller()

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock, mock.patch.object(controller, "_install_resize_watch"):
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_raw_mode_restores_previous_resize_handler(self) -> None:
        controller = make_controller()
        previous = signal.getsignal(signal.SIGWINCH)

        with mock.patch.object(controller, "enable_tui_mode"), mock.patch.object(controller, "disable_tui_mode"):
            with controller.raw_mode():
                self.assertIsNotNone(controller._wake_fds)
                self.assertIsNot(signal.getsignal(signal.SIGWINCH), previous)

        self.assertIsNone(controller._wake_fds)
        self.assertEqual(signal.getsignal(signal.SIGWINCH), previous)

    def test_render_writes_encoded_changes(self) -> None:
        controller = make_controller()

        with mock.patch("lazylauncher.terminal.os.write") as write_mock:
            controller.render([CursorPosition(2, 1), Text("hi")])

        write_mock.assert_called_once_with(1, b"\x1b[2;3Hhi")

    def test_screen_size_falls_back_when_fd_is_not_a_terminal(self) -> None:
        controller = make_controller()

        with mock.patch("lazylauncher.terminal.os.get_terminal_size", side_effect=OSError), mock.patch(
            "lazylauncher.terminal.shutil.get_terminal_size", return_value=os.terminal_size((100, 30))
        ):
            self.assertEqual(controller.screen_size(), (100, 30))


class PollInputTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()
        os.close(self.read_fd)
        if self.write_fd != -1:
            os.close(self.write_fd)

    def test_poll_returns_key_tokens(self) -> None:
        controller = make_controller(stdin_fd=self.read_fd)
        os.write(self.write_fd, b"\x1b[Bq")

        self.assertEqual(controller.poll_input(), "DOWN")
        self.assertEqual(controller.poll_input(), "q")

    def test_poll_returns_none_at_end_of_input(self) -> None:
        controller = make_controller(stdin_fd=self.read_fd)
        os.close(self.write_fd)
        self.write_fd = -1

        self.assertIsNone(controller.poll_input())

    def test_resize_signal_becomes_resize_token(self) -> None:
        controller = make_controller(stdin_fd=self.read_fd)

        with mock.patch.object(controller, "enable_tui_mode"), mock.patch.object(
            controller, "disable_tui_mode"
        ), mock.patch.object(controller, "screen_size", return_value=(120, 40)):
            with controller.raw_mode():
                os.kill(os.getpid(), signal.SIGWINCH)
                token = controller.poll_input()

        self.assertEqual(token, "RESIZE:120:40")


if __name__ == "__main__":
    unittest.main()
