"""Turn processing: parse a line, act on it, advance the world.

process_turn(world, state, line) -> TurnResult is the main entry point.
Order within a turn: movement or action scan (with the built-in GET and
DROP fallback), light depletion, the automatic pass, and finally one room
description if anything asked for it.
"""

import random
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from .commands import kill_player
from .context import TurnContext
from .describe import get_room_description
from .dispatcher import (
    DispatchPhase,
    ScanResult,
    run_automatic_actions,
    run_player_actions,
)
from .events import EventKind, OutputEvent, render_text
from .light import tick_light
from .settings import EngineSettings
from .state import CARRIED, GameState
from .vocabulary import (
    DIRECTION_ALIASES,
    DROP_VERB,
    GET_VERB,
    GO_VERB,
    Vocabulary,
    is_direction,
)
from .world import World

NOT_UNDERSTOOD = "I don't understand."

_DESCRIPTION_WORD = re.compile(r"[A-Z0-9']+")


@dataclass(frozen=True)
class ParsedCommand:
    verb: int
    noun: int
    verb_text: str = ""
    noun_text: str = ""


@dataclass
class TurnResult:
    events: list[OutputEvent] = field(default_factory=list)
    phase: DispatchPhase = DispatchPhase.IDLE
    halt_reason: str | None = None

    @property
    def halted(self) -> bool:
        return self.halt_reason is not None

    @property
    def save_requested(self) -> bool:
        return any(e.kind == EventKind.SAVE_REQUESTED for e in self.events)

    @property
    def text(self) -> str:
        return render_text(self.events)


def parse_command(vocabulary: Vocabulary, line: str) -> ParsedCommand | None:
    """Turn one or two typed words into verb and noun numbers.

    Returns None for empty input, more than two words or unknown words.
    """
    words = line.upper().split()
    if not words or len(words) > 2:
        return None

    if len(words) == 1:
        word = words[0]
        if word in DIRECTION_ALIASES:
            return ParsedCommand(GO_VERB, DIRECTION_ALIASES[word], "", word)
        verb = vocabulary.verb(word)
        if verb:
            return ParsedCommand(verb, 0, word, "")
        noun = vocabulary.noun(word)
        if is_direction(noun):
            return ParsedCommand(GO_VERB, noun, "", word)
        return None

    verb_text, noun_text = words
    verb = vocabulary.verb(verb_text)
    noun = vocabulary.noun(noun_text)
    # Verb 0 belongs to the automatic actions, never to the player
    if not verb or noun is None:
        return None
    return ParsedCommand(verb, noun, verb_text, noun_text)


def _move(ctx: TurnContext, direction: int) -> None:
    state = ctx.state
    if state.is_dark() and ctx.rng.randint(1, 100) <= ctx.settings.dark_fall_chance:
        ctx.say("I fell down in the dark and broke my neck.")
        kill_player(ctx)
        return

    room = ctx.world.rooms[state.current_room]
    destination = room.exits[direction - 1]
    if destination == 0:
        ctx.say("I can't go in that direction.")
        return
    state.current_room = destination
    ctx.request_look()


def find_item(
    ctx: TurnContext,
    vocabulary: Vocabulary,
    noun_text: str,
    prefer: Callable[[int], bool],
) -> int | None:
    """Resolve a typed noun to an item by auto-get word, then description.

    An auto-get word matches when it is the typed word or a synonym of it.
    When several items match, one that satisfies ``prefer`` wins.
    """
    wanted = vocabulary.normalize(noun_text)
    if not wanted:
        return None
    noun = vocabulary.noun(noun_text)

    def by_autoget(item) -> bool:
        if item.autoget is None:
            return False
        if vocabulary.normalize(item.autoget) == wanted:
            return True
        return noun is not None and vocabulary.noun(item.autoget) == noun

    def by_description(item) -> bool:
        words = _DESCRIPTION_WORD.findall(item.description.upper())
        return any(vocabulary.normalize(w) == wanted for w in words)

    for matches in (by_autoget, by_description):
        found = [i for i, item in enumerate(ctx.world.items) if matches(item)]
        if found:
            return next((i for i in found if prefer(i)), found[0])
    return None


def builtin_get(ctx: TurnContext, vocabulary: Vocabulary, noun_text: str) -> None:
    state = ctx.state
    if not noun_text:
        ctx.say("What?")
        return
    if state.is_dark():
        ctx.say("It is too dark to see.")
        return
    item = find_item(ctx, vocabulary, noun_text, state.is_here)
    if item is None or ctx.world.items[item].autoget is None:
        ctx.say("It's beyond my power to do that.")
        return
    if state.is_carrying(item):
        ctx.say("I already have it.")
        return
    if state.location_of(item) != state.current_room:
        ctx.say("I don't see it here.")
        return
    if state.carried_count() >= ctx.world.header.max_carry:
        ctx.say("I've too much to carry!")
        return
    state.item_locations[item] = CARRIED
    ctx.say("OK")


def builtin_drop(ctx: TurnContext, vocabulary: Vocabulary, noun_text: str) -> None:
    state = ctx.state
    if not noun_text:
        ctx.say("What?")
        return
    item = find_item(ctx, vocabulary, noun_text, state.is_carrying)
    if item is None or not state.is_carrying(item):
        ctx.say("I'm not carrying it!")
        return
    state.item_locations[item] = state.current_room
    ctx.say("OK")


def _perform(ctx: TurnContext, vocabulary: Vocabulary, command: ParsedCommand) -> None:
    if command.verb == GO_VERB:
        if command.noun == 0:
            ctx.say("Give me a direction too.")
            return
        if is_direction(command.noun):
            _move(ctx, command.noun)
            return

    result = run_player_actions(ctx, command.verb, command.noun)
    if result is ScanResult.EXECUTED:
        return
    if command.verb == GET_VERB:
        builtin_get(ctx, vocabulary, command.noun_text)
    elif command.verb == DROP_VERB:
        builtin_drop(ctx, vocabulary, command.noun_text)
    elif result is ScanResult.BLOCKED:
        ctx.say("I can't do that yet.")
    else:
        ctx.say(NOT_UNDERSTOOD)


def _finish(ctx: TurnContext) -> TurnResult:
    if ctx.look_requested and not ctx.halted:
        ctx.emit(EventKind.ROOM, get_room_description(ctx.world, ctx.state))
    phase = DispatchPhase.HALTED if ctx.halted else DispatchPhase.IDLE
    return TurnResult(events=ctx.events, phase=phase, halt_reason=ctx.halt_reason)


def _context(
    world: World,
    state: GameState,
    settings: EngineSettings | None,
    rng: random.Random | None,
    sleep: Callable[[float], None],
) -> TurnContext:
    return TurnContext(
        world=world,
        state=state,
        settings=settings or EngineSettings(),
        rng=rng or random.Random(),
        sleep=sleep,
    )


def start_game(
    world: World,
    state: GameState,
    *,
    settings: EngineSettings | None = None,
    rng: random.Random | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> TurnResult:
    """Run the automatic pass before the first input and show the room."""
    ctx = _context(world, state, settings, rng, sleep)
    run_automatic_actions(ctx)
    ctx.request_look()
    return _finish(ctx)


def process_turn(
    world: World,
    state: GameState,
    line: str,
    *,
    settings: EngineSettings | None = None,
    rng: random.Random | None = None,
    sleep: Callable[[float], None] = time.sleep,
    vocabulary: Vocabulary | None = None,
) -> TurnResult:
    """Process one line of player input against the game state."""
    ctx = _context(world, state, settings, rng, sleep)
    vocabulary = vocabulary or Vocabulary(world)

    command = parse_command(vocabulary, line)
    if command is None:
        ctx.say(NOT_UNDERSTOOD)
        return _finish(ctx)

    ctx.noun_text = command.noun_text
    _perform(ctx, vocabulary, command)

    if not ctx.halted:
        tick_light(ctx)
    if not ctx.halted:
        run_automatic_actions(ctx)
    return _finish(ctx)
