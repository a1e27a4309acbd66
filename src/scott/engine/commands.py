"""Command execution for the action table.

An action's two command slots each pack two opcodes. Opcodes 1-51 and
102-151 print messages; the rest change the game state. Commands never
carry their own operands: they take them, in order, from the parameters
of the action's PAR condition slots.
"""

from collections.abc import Callable

from ..logging import get_logger
from .codec import decode_command_pair, decode_condition
from .conditions import ConditionCode
from .context import TurnContext
from .describe import calculate_score, inventory_text, stored_treasures
from .events import EventKind
from .state import (
    CARRIED,
    DARK_FLAG,
    DESTROYED,
    LIGHT_OUT_FLAG,
    LIGHT_SOURCE,
    NUM_ALT_COUNTERS,
    NUM_ALT_ROOMS,
)

logger = get_logger(__name__)

CONTINUE = 73

FIRST_HIGH_MESSAGE = 102
LAST_HIGH_MESSAGE = 151
HIGH_MESSAGE_OFFSET = 50


class ParameterChannel:
    """Operands for one action's commands, in PAR slot order."""

    def __init__(self, values: list[int]):
        self._values = list(values)
        self._next = 0

    @classmethod
    def from_conditions(cls, raw_conditions: tuple[int, ...]) -> "ParameterChannel":
        values = []
        for raw in raw_conditions:
            condition = decode_condition(raw)
            if condition.code == ConditionCode.PAR:
                values.append(condition.parameter)
        return cls(values)

    def take(self) -> int | None:
        """Next operand, or None once the PAR slots are used up."""
        if self._next >= len(self._values):
            return None
        value = self._values[self._next]
        self._next += 1
        return value


def _valid_item(ctx: TurnContext, index: int) -> bool:
    if ctx.state.has_item(index):
        return True
    logger.warning("item_out_of_range", item=index)
    return False


def _valid_room(ctx: TurnContext, room: int) -> bool:
    if 0 <= room < len(ctx.world.rooms):
        return True
    logger.warning("room_out_of_range", room=room)
    return False


def _show_message(ctx: TurnContext, number: int) -> None:
    if 0 <= number < len(ctx.world.messages):
        ctx.say(ctx.world.messages[number])
    else:
        logger.warning("message_out_of_range", message=number)


def _get(ctx: TurnContext, item: int) -> None:
    if not _valid_item(ctx, item):
        return
    if ctx.state.carried_count() >= ctx.world.header.max_carry:
        ctx.say("I've too much to carry!")
        return
    ctx.state.item_locations[item] = CARRIED


def _superget(ctx: TurnContext, item: int) -> None:
    if _valid_item(ctx, item):
        ctx.state.item_locations[item] = CARRIED


def _drop(ctx: TurnContext, item: int) -> None:
    if _valid_item(ctx, item):
        ctx.state.item_locations[item] = ctx.state.current_room


def _goto(ctx: TurnContext, room: int) -> None:
    if _valid_room(ctx, room):
        ctx.state.current_room = room
        ctx.request_look()


def _destroy(ctx: TurnContext, item: int) -> None:
    if _valid_item(ctx, item):
        ctx.state.item_locations[item] = DESTROYED


def _move_item(ctx: TurnContext, item: int, room: int) -> None:
    if _valid_item(ctx, item) and (room == CARRIED or _valid_room(ctx, room)):
        ctx.state.item_locations[item] = room


def _swap_items(ctx: TurnContext, first: int, second: int) -> None:
    if _valid_item(ctx, first) and _valid_item(ctx, second):
        locations = ctx.state.item_locations
        locations[first], locations[second] = locations[second], locations[first]


def _put_with(ctx: TurnContext, item: int, other: int) -> None:
    if _valid_item(ctx, item) and _valid_item(ctx, other):
        ctx.state.item_locations[item] = ctx.state.item_locations[other]


def _set_flag(ctx: TurnContext, flag: int) -> None:
    ctx.state.set_flag(flag, True)


def _clear_flag(ctx: TurnContext, flag: int) -> None:
    ctx.state.set_flag(flag, False)


def kill_player(ctx: TurnContext) -> None:
    """Move the player to the last room, where the adventure handles death."""
    ctx.say("I am dead.")
    ctx.state.set_flag(DARK_FLAG, False)
    ctx.state.current_room = ctx.world.header.num_rooms
    ctx.request_look()


def _finish(ctx: TurnContext) -> None:
    ctx.halt("finished")


def _score(ctx: TurnContext) -> None:
    stored = stored_treasures(ctx.world, ctx.state)
    score = calculate_score(ctx.world, ctx.state)
    ctx.say(f"I've stored {stored} treasures. On a scale of 0 to 100, that rates {score}.")
    if ctx.world.header.treasures > 0 and stored >= ctx.world.header.treasures:
        ctx.say("Well done.")
        ctx.halt("all_treasures")


def _inventory(ctx: TurnContext) -> None:
    ctx.say(inventory_text(ctx.world, ctx.state))


def _refill_light(ctx: TurnContext) -> None:
    ctx.state.light_remaining = ctx.world.header.light_time
    ctx.state.set_flag(LIGHT_OUT_FLAG, False)
    if ctx.state.has_item(LIGHT_SOURCE):
        ctx.state.item_locations[LIGHT_SOURCE] = CARRIED


def _continue(ctx: TurnContext) -> None:
    ctx.state.continuation = True


def _decrement_counter(ctx: TurnContext) -> None:
    ctx.state.counter = max(ctx.state.counter - 1, -1)


def _set_counter(ctx: TurnContext, value: int) -> None:
    ctx.state.counter = value


def _add_counter(ctx: TurnContext, value: int) -> None:
    ctx.state.counter += value


def _subtract_counter(ctx: TurnContext, value: int) -> None:
    ctx.state.counter = max(ctx.state.counter - value, -1)


def _swap_counter(ctx: TurnContext, slot: int) -> None:
    if not 0 <= slot < NUM_ALT_COUNTERS:
        logger.warning("counter_slot_out_of_range", slot=slot)
        return
    state = ctx.state
    state.counter, state.alt_counters[slot] = state.alt_counters[slot], state.counter


def _swap_room(ctx: TurnContext, slot: int) -> None:
    if not 0 <= slot < NUM_ALT_ROOMS:
        logger.warning("room_slot_out_of_range", slot=slot)
        return
    state = ctx.state
    state.current_room, state.alt_rooms[slot] = state.alt_rooms[slot], state.current_room
    ctx.request_look()


def _delay(ctx: TurnContext) -> None:
    ctx.emit(EventKind.DELAY)
    ctx.sleep(ctx.settings.delay_seconds)


# opcode -> (operand count, handler)
_HANDLERS: dict[int, tuple[int, Callable]] = {
    52: (1, _get),
    53: (1, _drop),
    54: (1, _goto),
    55: (1, _destroy),
    56: (0, lambda ctx: ctx.state.set_flag(DARK_FLAG, True)),
    57: (0, lambda ctx: ctx.state.set_flag(DARK_FLAG, False)),
    58: (1, _set_flag),
    59: (1, _destroy),
    60: (1, _clear_flag),
    61: (0, kill_player),
    62: (2, _move_item),
    63: (0, _finish),
    64: (0, TurnContext.request_look),
    65: (0, _score),
    66: (0, _inventory),
    67: (0, lambda ctx: _set_flag(ctx, 0)),
    68: (0, lambda ctx: _clear_flag(ctx, 0)),
    69: (0, _refill_light),
    70: (0, lambda ctx: ctx.emit(EventKind.CLEAR_SCREEN)),
    71: (0, lambda ctx: ctx.emit(EventKind.SAVE_REQUESTED)),
    72: (2, _swap_items),
    CONTINUE: (0, _continue),
    74: (1, _superget),
    75: (2, _put_with),
    76: (0, TurnContext.request_look),
    77: (0, _decrement_counter),
    78: (0, lambda ctx: ctx.say(str(ctx.state.counter))),
    79: (1, _set_counter),
    80: (0, lambda ctx: _swap_room(ctx, 0)),
    81: (1, _swap_counter),
    82: (1, _add_counter),
    83: (1, _subtract_counter),
    84: (0, lambda ctx: ctx.say(ctx.noun_text)),
    85: (0, lambda ctx: ctx.say(ctx.noun_text)),
    86: (0, lambda ctx: ctx.say("")),
    87: (1, _swap_room),
    88: (0, _delay),
}


def execute_command(ctx: TurnContext, opcode: int, channel: ParameterChannel) -> None:
    """Run a single opcode, drawing its operands from the channel."""
    if opcode == 0:
        return
    if opcode <= 51:
        _show_message(ctx, opcode)
        return
    if FIRST_HIGH_MESSAGE <= opcode <= LAST_HIGH_MESSAGE:
        _show_message(ctx, opcode - HIGH_MESSAGE_OFFSET)
        return

    entry = _HANDLERS.get(opcode)
    if entry is None:
        logger.warning("unknown_opcode", opcode=opcode)
        return

    arity, handler = entry
    operands = [channel.take() for _ in range(arity)]
    if None in operands:
        logger.warning("parameter_missing", opcode=opcode)
        return
    handler(ctx, *operands)


def execute_action(ctx: TurnContext, index: int) -> None:
    """Run every command of an action, stopping if the game ends."""
    action = ctx.world.actions[index]
    channel = ParameterChannel.from_conditions(action.conditions)
    for raw in action.commands:
        for opcode in decode_command_pair(raw):
            if ctx.halted:
                return
            execute_command(ctx, opcode, channel)
