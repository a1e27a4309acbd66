"""Condition evaluation for the action table.

Each action carries five packed condition slots. A slot is decoded into
(code, parameter) and tested against the game state; the first failing
slot rejects the action. Code 0 (PAR) always passes: it only carries a
parameter for the action's commands.
"""

from collections.abc import Callable
from enum import IntEnum

from ..logging import get_logger
from .codec import Condition, decode_condition
from .state import CARRIED, DESTROYED, GameState
from .world import World

logger = get_logger(__name__)


class ConditionCode(IntEnum):
    PAR = 0
    HAS = 1
    IN_ROOM_WITH = 2
    AVAILABLE = 3
    IN_ROOM = 4
    NOT_IN_ROOM_WITH = 5
    NOT_HAS = 6
    NOT_IN_ROOM = 7
    FLAG_SET = 8
    FLAG_CLEAR = 9
    CARRYING_ANY = 10
    CARRYING_NONE = 11
    NOT_AVAILABLE = 12
    NOT_DESTROYED = 13
    DESTROYED = 14
    COUNTER_AT_MOST = 15
    COUNTER_ABOVE = 16
    AT_ORIGIN = 17
    NOT_AT_ORIGIN = 18
    COUNTER_EQUALS = 19


def _item_check(
    test: Callable[[World, GameState, int, int], bool],
) -> Callable[[World, GameState, int], bool]:
    """Wrap an item test so unknown item numbers fail instead of raising."""

    def check(world: World, state: GameState, index: int) -> bool:
        location = state.location_of(index)
        if location is None:
            logger.warning("item_out_of_range", item=index)
            return False
        return test(world, state, index, location)

    return check


def _at_origin(world: World, state: GameState, index: int, loc: int) -> bool:
    return index < len(world.items) and loc == world.items[index].location


_CHECKS: dict[int, Callable[[World, GameState, int], bool]] = {
    ConditionCode.PAR: lambda world, state, p: True,
    ConditionCode.HAS: _item_check(lambda w, s, i, loc: loc == CARRIED),
    ConditionCode.IN_ROOM_WITH: _item_check(
        lambda w, s, i, loc: loc == s.current_room
    ),
    ConditionCode.AVAILABLE: _item_check(
        lambda w, s, i, loc: loc in (CARRIED, s.current_room)
    ),
    ConditionCode.IN_ROOM: lambda world, state, p: state.current_room == p,
    ConditionCode.NOT_IN_ROOM_WITH: _item_check(
        lambda w, s, i, loc: loc != s.current_room
    ),
    ConditionCode.NOT_HAS: _item_check(lambda w, s, i, loc: loc != CARRIED),
    ConditionCode.NOT_IN_ROOM: lambda world, state, p: state.current_room != p,
    ConditionCode.FLAG_SET: lambda world, state, p: state.flag(p),
    ConditionCode.FLAG_CLEAR: lambda world, state, p: not state.flag(p),
    ConditionCode.CARRYING_ANY: lambda world, state, p: state.carried_count() > 0,
    ConditionCode.CARRYING_NONE: lambda world, state, p: state.carried_count() == 0,
    ConditionCode.NOT_AVAILABLE: _item_check(
        lambda w, s, i, loc: loc not in (CARRIED, s.current_room)
    ),
    ConditionCode.NOT_DESTROYED: _item_check(lambda w, s, i, loc: loc != DESTROYED),
    ConditionCode.DESTROYED: _item_check(lambda w, s, i, loc: loc == DESTROYED),
    ConditionCode.COUNTER_AT_MOST: lambda world, state, p: state.counter <= p,
    ConditionCode.COUNTER_ABOVE: lambda world, state, p: state.counter > p,
    ConditionCode.AT_ORIGIN: _item_check(_at_origin),
    ConditionCode.NOT_AT_ORIGIN: _item_check(
        lambda w, s, i, loc: not _at_origin(w, s, i, loc)
    ),
    ConditionCode.COUNTER_EQUALS: lambda world, state, p: state.counter == p,
}


def evaluate_condition(world: World, state: GameState, condition: Condition) -> bool:
    """Test one decoded condition against the game state."""
    return _CHECKS[condition.code](world, state, condition.parameter)


def conditions_pass(
    world: World, state: GameState, raw_conditions: tuple[int, ...]
) -> bool:
    """True if every condition slot of an action holds."""
    for raw in raw_conditions:
        if raw == 0:
            continue
        if not evaluate_condition(world, state, decode_condition(raw)):
            return False
    return True
