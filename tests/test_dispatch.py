from __future__ import annotations

import io
import json
import unittest

from lazylauncher.actions import spawn_command_in_new_tab, switch_to_workspace
from lazylauncher.dispatch import JsonActionSink, RecordingActionSink


class ActionSinkTests(unittest.TestCase):
    def test_json_sink_writes_one_line_per_action(self) -> None:
        stream = io.StringIO()
        sink = JsonActionSink(stream)

        sink.notify(7, spawn_command_in_new_tab("local", ("top",)))
        sink.notify(7, switch_to_workspace(None))

        lines = stream.getvalue().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertEqual(
            json.loads(lines[0]),
            {
                "pane_id": 7,
                "action": {"name": "SpawnCommandInNewTab", "args": [["domain", "local"], ["args", ["top"]]]},
            },
        )
        self.assertEqual(json.loads(lines[1]), {"pane_id": 7, "action": {"name": "SwitchToWorkspace", "args": []}})

    def test_recording_sink_keeps_calls_in_order(self) -> None:
        sink = RecordingActionSink()

        sink.notify(1, switch_to_workspace("dev"))
        sink.notify(2, switch_to_workspace(None))

        self.assertEqual(sink.notifications, [(1, switch_to_workspace("dev")), (2, switch_to_workspace(None))])


if __name__ == "__main__":
    unittest.main()
