"""Saved game codec.

A saved game is plain text, one ``key:value`` pair per line::

    adventure:99
    counter:0
    alt_counter.0:0
    ...
    room:1
    alt_room.0:0
    ...
    flag.0:0
    ...
    light:30
    item.0:1
    ...

Alternate counter slots 0-7 are written as ``alt_counter.N``; slot 8 is the
light counter and is written as ``light``. Loading validates everything
before building a new GameState, so a failed load never touches the game
in progress.
"""

from pathlib import Path

from ..logging import get_logger
from .errors import SaveFailure, SaveFileError
from .state import (
    CARRIED,
    LIGHT_COUNTER,
    NUM_ALT_ROOMS,
    NUM_FLAGS,
    GameState,
)
from .world import World

logger = get_logger(__name__)


def dump_state(world: World, state: GameState) -> str:
    """Serialize a game state to save file text."""
    lines = [f"adventure:{world.adventure_number}", f"counter:{state.counter}"]
    lines += [f"alt_counter.{i}:{state.alt_counters[i]}" for i in range(LIGHT_COUNTER)]
    lines.append(f"room:{state.current_room}")
    lines += [f"alt_room.{i}:{room}" for i, room in enumerate(state.alt_rooms)]
    lines += [f"flag.{i}:{int(value)}" for i, value in enumerate(state.flags)]
    lines.append(f"light:{state.light_remaining}")
    lines += [f"item.{i}:{loc}" for i, loc in enumerate(state.item_locations)]
    return "\n".join(lines) + "\n"


def _read_pairs(text: str) -> dict[str, int]:
    pairs: dict[str, int] = {}
    for number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        key, sep, value = line.partition(":")
        if not sep:
            raise SaveFileError(SaveFailure.MALFORMED, f"line {number}: missing ':'")
        key = key.strip()
        try:
            pairs[key] = int(value.strip())
        except ValueError:
            raise SaveFileError(
                SaveFailure.MALFORMED, f"line {number}: {key} is not a number"
            ) from None
    return pairs


def _take(pairs: dict[str, int], key: str) -> int:
    try:
        return pairs.pop(key)
    except KeyError:
        raise SaveFileError(SaveFailure.MALFORMED, f"missing {key}") from None


def _check_room(world: World, key: str, room: int) -> int:
    if not 0 <= room <= world.header.num_rooms:
        raise SaveFileError(SaveFailure.OUT_OF_RANGE, f"{key}={room} is not a room")
    return room


def parse_state(world: World, text: str) -> GameState:
    """Build a GameState from save file text, validating it against the world."""
    pairs = _read_pairs(text)

    adventure = _take(pairs, "adventure")
    if adventure != world.adventure_number:
        raise SaveFileError(
            SaveFailure.WRONG_ADVENTURE,
            f"saved for adventure {adventure}, playing {world.adventure_number}",
        )

    counter = _take(pairs, "counter")
    if counter < -1:
        raise SaveFileError(SaveFailure.OUT_OF_RANGE, f"counter={counter}")
    alt_counters = [_take(pairs, f"alt_counter.{i}") for i in range(LIGHT_COUNTER)]
    room = _check_room(world, "room", _take(pairs, "room"))
    alt_rooms = [
        _check_room(world, f"alt_room.{i}", _take(pairs, f"alt_room.{i}"))
        for i in range(NUM_ALT_ROOMS)
    ]

    flags = []
    for i in range(NUM_FLAGS):
        value = _take(pairs, f"flag.{i}")
        if value not in (0, 1):
            raise SaveFileError(SaveFailure.OUT_OF_RANGE, f"flag.{i}={value}")
        flags.append(bool(value))

    light = _take(pairs, "light")

    items = []
    for i in range(len(world.items)):
        key = f"item.{i}"
        loc = _take(pairs, key)
        if loc != CARRIED:
            _check_room(world, key, loc)
        items.append(loc)

    if pairs:
        raise SaveFileError(
            SaveFailure.OUT_OF_RANGE, "unexpected entries: " + ", ".join(sorted(pairs))
        )

    state = GameState(
        current_room=room,
        item_locations=items,
        flags=flags,
        counter=counter,
        alt_counters=alt_counters + [light],
        alt_rooms=alt_rooms,
    )
    return state


def save_state(world: World, state: GameState, path: str | Path) -> None:
    """Write the game state to ``path``."""
    try:
        Path(path).write_text(dump_state(world, state), encoding="utf-8")
    except OSError as e:
        raise SaveFileError(SaveFailure.UNWRITABLE, f"{path}: {e.strerror or e}") from e
    logger.info("state_saved", path=str(path), adventure=world.adventure_number)


def load_state(world: World, path: str | Path) -> GameState:
    """Read a saved game for ``world`` from ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SaveFileError(SaveFailure.UNREADABLE, f"{path}: {e}") from e
    state = parse_state(world, text)
    logger.info("state_restored", path=str(path), room=state.current_room)
    return state
