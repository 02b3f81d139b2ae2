"""Action dispatch sinks: where a launched action goes."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Protocol, TextIO

from .actions import Action


class ActionSink(Protocol):
    def notify(self, pane_id: int, action: Action) -> None: ...


class JsonActionSink:
    """Write each dispatched action as one JSON line."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def notify(self, pane_id: int, action: Action) -> None:
        payload = {"pane_id": pane_id, "action": action.to_json()}
        self.stream.write(json.dumps(payload) + "\n")
        self.stream.flush()


@dataclass
class RecordingActionSink:
    notifications: list[tuple[int, Action]] = field(default_factory=list)

    def notify(self, pane_id: int, action: Action) -> None:
        self.notifications.append((pane_id, action))


__all__ = ["ActionSink", "JsonActionSink", "RecordingActionSink"]
