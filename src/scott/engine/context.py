"""Per-turn execution context shared by the executor and dispatcher."""

import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from .events import EventKind, OutputEvent
from .settings import EngineSettings
from .state import GameState
from .world import World


@dataclass
class TurnContext:
    """Everything a turn reads and writes, passed explicitly.

    World is read-only; GameState is mutated in place. Output accumulates
    in ``events``.
    """

    world: World
    state: GameState
    settings: EngineSettings = field(default_factory=EngineSettings)
    rng: random.Random = field(default_factory=random.Random)
    sleep: Callable[[float], None] = time.sleep

    # The noun as the player typed it, for the SAY commands
    noun_text: str = ""

    events: list[OutputEvent] = field(default_factory=list)
    look_requested: bool = False
    halt_reason: str | None = None

    @property
    def halted(self) -> bool:
        return self.halt_reason is not None

    def say(self, text: str) -> None:
        self.events.append(OutputEvent(EventKind.MESSAGE, text))

    def emit(self, kind: EventKind, text: str = "") -> None:
        self.events.append(OutputEvent(kind, text))

    def request_look(self) -> None:
        self.look_requested = True

    def halt(self, reason: str, text: str = "The game is now over.") -> None:
        if self.halt_reason is None:
            self.halt_reason = reason
            self.emit(EventKind.GAME_OVER, text)
