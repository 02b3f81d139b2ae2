"""Frame construction tests for the launcher overlay."""

from __future__ import annotations

import unittest

from lazylauncher.actions import activate_tab
from lazylauncher.entries import Entry, TabEntry
from lazylauncher.flags import LauncherFlags
from lazylauncher.render import (
    BLANK_GUTTER,
    HEADER_TEXT,
    AllAttributes,
    ClearScreen,
    ClearToEndOfLine,
    CursorPosition,
    Reverse,
    Text,
    Title,
    build_frame,
    encode_changes,
    row_gutter,
)
from lazylauncher.session import LauncherState


def tab(label: str, idx: int) -> Entry:
    return Entry(label=label, action=activate_tab(idx), kind=TabEntry(label, idx, idx, 1))


def make_state(labels: list[str], *, cols: int = 40, rows: int = 10, flags=LauncherFlags.NONE) -> LauncherState:
    return LauncherState.create(
        [tab(label, idx) for idx, label in enumerate(labels)],
        cols=cols,
        rows=rows,
        flags=flags,
    )


def row_texts(frame) -> list[str]:
    """Join gutter and label text for each rendered row."""
    rows: list[str] = []
    current: list[str] = []
    for change in frame[4:]:
        if not isinstance(change, Text):
            continue
        if change.text == " \r\n":
            rows.append("".join(current))
            current = []
        else:
            current.append(change.text)
    return rows


class BuildFrameTests(unittest.TestCase):
    def test_header_is_truncated_to_width_minus_margin(self) -> None:
        frame = build_frame(make_state(["alpha", "beta"]), 40)

        self.assertEqual(
            frame[:4],
            [ClearScreen(), CursorPosition(0, 0), Text(HEADER_TEXT[:34] + "\r\n"), AllAttributes()],
        )

    def test_active_row_is_reversed_and_numbered(self) -> None:
        frame = build_frame(make_state(["alpha", "beta"]), 40)

        self.assertEqual(
            frame[4:9],
            [Reverse(True), Text(" 1. "), Text("alpha".ljust(34)), Text(" \r\n"), Reverse(False)],
        )
        self.assertEqual(frame[9:12], [Text(" 2. "), Text("beta".ljust(34)), Text(" \r\n")])
        self.assertEqual(frame.count(Reverse(True)), 1)

    def test_long_labels_are_clipped(self) -> None:
        frame = build_frame(make_state(["x" * 100]), 20)

        self.assertEqual(row_texts(frame), [" 1. " + "x" * 14])

    def test_only_visible_rows_are_rendered_from_top_row(self) -> None:
        state = make_state([f"item {idx}" for idx in range(20)], rows=6)
        for _ in range(5):
            state.move_down()

        rows = row_texts(build_frame(state, 40))

        self.assertEqual(state.top_row, 3)
        self.assertEqual(
            rows,
            [" 1. " + "item 3".ljust(34), " 2. " + "item 4".ljust(34), " 3. " + "item 5".ljust(34)],
        )

    def test_quick_select_digits_stop_after_nine(self) -> None:
        rows = row_texts(build_frame(make_state([f"item {idx}" for idx in range(12)], rows=30), 40))

        self.assertEqual(len(rows), 12)
        self.assertTrue(rows[8].startswith(" 9. "))
        self.assertTrue(rows[9].startswith(BLANK_GUTTER + "item 9"))

    def test_filter_mode_uses_blank_gutter_and_fuzzy_header(self) -> None:
        state = make_state(["alpha", "beta"], flags=LauncherFlags.FUZZY)
        state.handle_key("a")
        state.handle_key("l")

        frame = build_frame(state, 40)

        self.assertEqual(row_texts(frame), [BLANK_GUTTER + "alpha".ljust(34)])
        self.assertEqual(frame[-3:], [CursorPosition(0, 0), ClearToEndOfLine(), Text("Fuzzy matching: al")])

    def test_filter_header_is_shown_when_filter_mode_is_empty(self) -> None:
        state = make_state(["alpha"])
        state.handle_key("/")

        frame = build_frame(state, 40)

        self.assertEqual(frame[-1], Text("Fuzzy matching: "))

    def test_navigation_mode_has_no_filter_header(self) -> None:
        frame = build_frame(make_state(["alpha"]), 40)

        self.assertNotIn(ClearToEndOfLine(), frame)

    def test_rendering_is_idempotent(self) -> None:
        state = make_state([f"item {idx}" for idx in range(5)])
        state.move_down()

        self.assertEqual(build_frame(state, 40), build_frame(state, 40))

    def test_colored_label_keeps_reverse_and_resets_after(self) -> None:
        frame = build_frame(make_state(["\x1b[31mred\x1b[0m"]), 20)

        self.assertEqual(frame[5], Text(" 1. "))
        self.assertEqual(frame[6], Text("\x1b[31m\x1b[7mred\x1b[0m\x1b[7m" + " " * 11))
        self.assertEqual(frame[8:10], [Reverse(False), AllAttributes()])

    def test_row_gutter(self) -> None:
        self.assertEqual(row_gutter(0, False), " 1. ")
        self.assertEqual(row_gutter(8, False), " 9. ")
        self.assertEqual(row_gutter(9, False), BLANK_GUTTER)
        self.assertEqual(row_gutter(0, True), BLANK_GUTTER)


class EncodeChangesTests(unittest.TestCase):
    def test_encodes_cursor_attributes_and_text(self) -> None:
        payload = encode_changes([CursorPosition(0, 0), Reverse(True), Text("x"), Reverse(False), AllAttributes()])

        self.assertEqual(payload, b"\x1b[1;1H\x1b[7mx\x1b[27m\x1b[0m")

    def test_encodes_title_without_control_characters(self) -> None:
        self.assertEqual(encode_changes([Title("pick\x07 me")]), b"\x1b]2;pick me\x07")


if __name__ == "__main__":
    unittest.main()
