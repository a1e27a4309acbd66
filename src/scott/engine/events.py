"""Output produced by a turn.

The engine never prints. It records what should be shown and the
embedding layer renders it.
"""

from dataclasses import dataclass
from enum import StrEnum


class EventKind(StrEnum):
    MESSAGE = "message"
    ROOM = "room"
    CLEAR_SCREEN = "clear_screen"
    DELAY = "delay"
    SAVE_REQUESTED = "save_requested"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class OutputEvent:
    kind: EventKind
    text: str = ""


def render_text(events: list[OutputEvent]) -> str:
    """Join the printable events into plain text."""
    parts = [
        event.text
        for event in events
        if event.kind in (EventKind.MESSAGE, EventKind.ROOM, EventKind.GAME_OVER)
    ]
    return "\n".join(parts)
